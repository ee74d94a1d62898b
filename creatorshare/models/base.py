"""
Base Models and Common Types

Foundation classes for all CreatorShare models: base model configuration,
identifier generation, response envelopes and dict validation.
"""

import json
import secrets
import string
import time
from datetime import UTC, datetime
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, ValidationInfo
from web3 import Web3

from creatorshare.config import settings


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class LedgerModel(BaseModel):
    """Base model for all CreatorShare entities with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        use_enum_values=True,
    )


# ═══════════════════════════════════════════════════════════════
# ID GENERATION
# ═══════════════════════════════════════════════════════════════

_ID_ALPHABET = string.digits + string.ascii_lowercase
ID_SUFFIX_LENGTH = 9


def generate_id(kind: str) -> str:
    """
    Generate an identifier for an entity kind.

    Format is ``{kind}_{epoch_millis}_{suffix}``: ids sort by creation
    millisecond, and the random base36 suffix keeps ids generated within
    the same millisecond apart.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{kind}_{millis}_{suffix}"


# ═══════════════════════════════════════════════════════════════
# COMMON RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════


class ApiResponse(LedgerModel):
    """Standard response envelope."""

    success: bool = True
    data: Any = None
    error: str | None = None
    message: str | None = None


class PaginationInfo(LedgerModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PaginatedApiResponse(ApiResponse):
    """Response envelope for a page of results."""

    pagination: PaginationInfo


# ═══════════════════════════════════════════════════════════════
# FIELD VALIDATORS
# ═══════════════════════════════════════════════════════════════

ALLOWED_URL_SCHEMES = frozenset({"http", "https", "ipfs", "ar"})


def validate_url(value: str) -> str:
    """Require an absolute URL with a known scheme."""
    parsed = urlparse(value)
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        raise ValueError("Invalid URL")
    return value


def validate_wallet_address(value: str) -> str:
    """Require a well-formed EVM address (checksum enforced for mixed case)."""
    if not Web3.is_address(value):
        raise ValueError("Invalid wallet address")
    return value


def context_setting(info: ValidationInfo, name: str) -> Any:
    """
    A configurable limit for the model being validated.

    The API passes its application settings as validation context; models
    built elsewhere fall back to the process-wide settings.
    """
    context = info.context or {}
    return context[name] if name in context else getattr(settings, name)


def validate_tags(tags: list[str], max_tags: int = 10, max_length: int = 20) -> list[str]:
    """Strip, drop empties and de-duplicate tags while keeping order."""
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if not tag:
            continue
        if len(tag) > max_length:
            raise ValueError(f"Tag too long (max {max_length} characters)")
        if tag not in cleaned:
            cleaned.append(tag)
    if len(cleaned) > max_tags:
        raise ValueError(f"Too many tags (max {max_tags})")
    return cleaned


# Keys that could indicate injection attempts when metadata is echoed to clients
FORBIDDEN_DICT_KEYS = frozenset({
    "__proto__", "__prototype__", "__class__", "__bases__",
    "__mro__", "__subclasses__", "__init__", "__new__",
    "constructor", "prototype",
})

DEFAULT_MAX_DICT_DEPTH = 5
DEFAULT_MAX_DICT_SIZE = 10000  # bytes when serialized
DEFAULT_MAX_DICT_KEYS = 100


def validate_dict_security(
    value: dict[str, Any],
    max_depth: int = DEFAULT_MAX_DICT_DEPTH,
    max_size: int = DEFAULT_MAX_DICT_SIZE,
    max_keys: int = DEFAULT_MAX_DICT_KEYS,
    current_depth: int = 0,
) -> dict[str, Any]:
    """
    Validate a free-form metadata dict.

    Rejects prototype-pollution keys, deeply nested structures and
    oversized payloads.

    Raises:
        ValueError: If validation fails
    """
    if not isinstance(value, dict):
        raise ValueError("Expected a dictionary")

    if current_depth > max_depth:
        raise ValueError(f"Dictionary nesting too deep (max {max_depth} levels)")

    if len(value) > max_keys:
        raise ValueError(f"Too many keys (max {max_keys})")

    forbidden_found = FORBIDDEN_DICT_KEYS.intersection(value.keys())
    if forbidden_found:
        raise ValueError(f"Forbidden keys detected: {', '.join(sorted(forbidden_found))}")

    for val in value.values():
        nested = [val] if isinstance(val, dict) else val if isinstance(val, list) else []
        for item in nested:
            if isinstance(item, dict):
                validate_dict_security(
                    item,
                    max_depth=max_depth,
                    max_size=max_size,
                    max_keys=max_keys,
                    current_depth=current_depth + 1,
                )

    # Size is only checked once, at the root
    if current_depth == 0:
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Dictionary contains non-serializable values: {e}") from e
        if len(serialized) > max_size:
            raise ValueError(f"Dictionary too large (max {max_size} bytes)")

    return value


# Revenue-share bounds (percent)
MAX_CONTENT_SHARE = 100.0
MAX_REMIX_SHARE = 50.0
