"""
Frame Webhook Route Tests

Exercised through the async client, the way Farcaster hubs post to it.
"""

from typing import Any

import pytest
from httpx import AsyncClient

from conftest import poll_data


def frame_body(clock, button_index: int, **overrides: Any) -> dict[str, Any]:
    untrusted: dict[str, Any] = {
        "fid": 42,
        "url": "https://app.example.com/frame",
        "messageHash": "0xabc",
        "timestamp": int(clock.timestamp()),
        "network": 1,
        "buttonIndex": button_index,
    }
    untrusted.update(overrides)
    return {"untrustedData": untrusted, "trustedData": {"messageBytes": "0a0b"}}


class TestFrameWebhook:
    """Tests for POST /api/frame."""

    @pytest.mark.asyncio
    async def test_configure_revenue(self, async_client: AsyncClient, clock, content):
        response = await async_client.post(
            "/api/frame", json=frame_body(clock, 1, state=content.content_id)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Revenue share configuration initiated"
        assert body["data"] == {
            "action": "configure_revenue",
            "content_id": content.content_id,
            "current_percentage": 20.0,
        }

    @pytest.mark.asyncio
    async def test_remix_from_content_url(self, async_client: AsyncClient, store, clock, content):
        url = f"https://app.example.com/content/{content.content_id}"
        response = await async_client.post("/api/frame", json=frame_body(clock, 2, url=url))

        assert response.status_code == 200
        remix_id = response.json()["data"]["remix_id"]
        assert store.get_remix(remix_id).remixing_creator_id == "fc_42"

    @pytest.mark.asyncio
    async def test_vote(self, async_client: AsyncClient, store, clock):
        poll = store.create_poll(poll_data(options=["a", "b", "c", "d"]), creator_id="alice")

        response = await async_client.post(
            "/api/frame", json=frame_body(clock, 4, state=poll.poll_id)
        )

        assert response.status_code == 200
        assert response.json()["data"]["option_index"] == 3
        assert store.get_poll(poll.poll_id).votes == {"fc_42": 3}

    @pytest.mark.asyncio
    async def test_stale_message(self, async_client: AsyncClient, clock, content):
        body = frame_body(
            clock,
            1,
            state=content.content_id,
            timestamp=int(clock.timestamp()) - 3600,
        )
        response = await async_client.post("/api/frame", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid frame message"}

    @pytest.mark.asyncio
    async def test_unknown_button(self, async_client: AsyncClient, clock):
        response = await async_client.post("/api/frame", json=frame_body(clock, 9))

        assert response.status_code == 400
        assert response.json()["error"] == "Unknown action"

    @pytest.mark.asyncio
    async def test_unknown_content(self, async_client: AsyncClient, clock):
        response = await async_client.post(
            "/api/frame", json=frame_body(clock, 3, state="content_missing")
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Content not found"

    @pytest.mark.asyncio
    async def test_malformed_payload(self, async_client: AsyncClient):
        response = await async_client.post("/api/frame", json={"trustedData": {}})

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_options_preflight(self, async_client: AsyncClient):
        response = await async_client.options("/api/frame")

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert "POST" in response.headers["Access-Control-Allow-Methods"]
