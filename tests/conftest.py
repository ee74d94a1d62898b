"""
CreatorShare - Test Fixtures

Shared pytest fixtures for all test modules.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================

_current_env = os.environ.get("APP_ENV", "")
if _current_env == "production":
    raise RuntimeError("Test fixtures cannot be loaded in the production environment.")

os.environ["APP_ENV"] = "testing"

from creatorshare.api.app import create_app  # noqa: E402
from creatorshare.api.middleware import FixedWindowRateLimiter  # noqa: E402
from creatorshare.config import Settings  # noqa: E402
from creatorshare.database.store import LedgerStore  # noqa: E402
from creatorshare.models.content import ContentCreate, MediaType  # noqa: E402
from creatorshare.models.creator import CreatorCreate  # noqa: E402
from creatorshare.models.ledger import (  # noqa: E402
    TransactionCreate,
    TransactionStatus,
    TransactionType,
)
from creatorshare.models.poll import PollCreate  # noqa: E402

# Lowercase hex addresses pass web3's address check without a checksum
WALLET_ALICE = "0x" + "a" * 40
WALLET_BOB = "0x" + "b" * 40
WALLET_CAROL = "0x" + "c" * 40

START_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


# =============================================================================
# Clock
# =============================================================================


class FrozenClock:
    """Deterministic clock; only moves when told to."""

    def __init__(self, start: datetime = START_TIME) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float = 1.0) -> datetime:
        self.current = self.current + timedelta(seconds=seconds)
        return self.current

    def timestamp(self) -> float:
        return self.current.timestamp()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


# =============================================================================
# Store
# =============================================================================


@pytest.fixture
def store(clock: FrozenClock) -> LedgerStore:
    """A fresh ledger store on the frozen clock."""
    return LedgerStore(clock=clock)


# =============================================================================
# Factories
# =============================================================================


def content_data(**overrides: Any) -> ContentCreate:
    data: dict[str, Any] = {
        "title": "Sunset Over the Bay",
        "description": "A timelapse of the evening sky",
        "media_url": "https://cdn.example.com/sunset.mp4",
        "media_type": MediaType.VIDEO,
        "monetization_enabled": True,
        "revenue_share_percentage": 20.0,
        "tags": ["nature", "timelapse"],
        "category": "photography",
    }
    data.update(overrides)
    return ContentCreate(**data)


def creator_data(**overrides: Any) -> CreatorCreate:
    data: dict[str, Any] = {
        "wallet_address": WALLET_ALICE,
        "display_name": "Alice",
        "bio": "Landscape photographer",
    }
    data.update(overrides)
    return CreatorCreate(**data)


def transaction_data(content_id: str, **overrides: Any) -> TransactionCreate:
    data: dict[str, Any] = {
        "from_wallet": WALLET_BOB,
        "to_wallet": WALLET_ALICE,
        "amount": 1.5,
        "transaction_type": TransactionType.REVENUE_SHARE,
        "content_id": content_id,
        "status": TransactionStatus.COMPLETED,
    }
    data.update(overrides)
    return TransactionCreate(**data)


def poll_data(**overrides: Any) -> PollCreate:
    data: dict[str, Any] = {
        "question": "Which edit next?",
        "options": ["Black and white", "Slow motion", "Soundtrack"],
        "duration_seconds": 3600,
    }
    data.update(overrides)
    return PollCreate(**data)


@pytest.fixture
def alice(store: LedgerStore):
    """Registered creator ``alice``."""
    return store.create_creator("alice", creator_data())


@pytest.fixture
def content(store: LedgerStore, alice):
    """A published piece owned by ``alice``."""
    return store.create_content(content_data(), creator_id="alice")


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, app_env="testing", log_level="WARNING")


@pytest.fixture
def app(settings: Settings, store: LedgerStore, clock: FrozenClock) -> FastAPI:
    """Application wired to the test store; rate-limit windows follow the frozen clock."""
    application = create_app(settings=settings, store=store)
    application.state.rate_limiter = FixedWindowRateLimiter(clock=clock.timestamp)
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


def auth(user_id: str) -> dict[str, str]:
    return {"x-user-id": user_id}
