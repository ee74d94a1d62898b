"""
Frame Action Dispatcher Tests
"""

from typing import Any

import pytest

from conftest import poll_data
from creatorshare.exceptions import FrameActionError, FrameNotFoundError, FrameValidationError
from creatorshare.models.frame import FrameWebhookPayload
from creatorshare.services.frames import FrameActionDispatcher, extract_content_id
from creatorshare.services.notifications import NotificationService
from creatorshare.services.polls import PollVotingEngine


@pytest.fixture
def dispatcher(store):
    notifications = NotificationService(store, base_url="https://app.example.com")
    polls = PollVotingEngine(store, notifications)
    return FrameActionDispatcher(store, polls, notifications, max_age_seconds=300)


def frame_payload(clock, button_index: int, **overrides: Any) -> FrameWebhookPayload:
    untrusted: dict[str, Any] = {
        "fid": 777,
        "url": "https://app.example.com/frame",
        "messageHash": "0xfeed",
        "timestamp": int(clock.timestamp()),
        "network": 1,
        "buttonIndex": button_index,
    }
    untrusted.update(overrides)
    return FrameWebhookPayload.model_validate(
        {"untrustedData": untrusted, "trustedData": {"messageBytes": "00"}}
    )


class TestExtractContentId:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://app.com/content/content_1700000000000_abc123", "content_1700000000000_abc123"),
            ("https://app.com/content/content_1_x?ref=frame", "content_1_x"),
            ("https://app.com/content/content_1_x/edit", "content_1_x"),
            ("https://app.com/content/remix_1_x", None),
            ("https://app.com/", None),
        ],
    )
    def test_patterns(self, url, expected):
        assert extract_content_id(url) == expected


class TestValidation:
    def test_valid(self, dispatcher, clock):
        assert dispatcher.validate_frame_message(frame_payload(clock, 1)) is True

    @pytest.mark.parametrize("missing", [{"fid": 0}, {"url": ""}, {"messageHash": ""}])
    def test_missing_fields(self, dispatcher, clock, missing):
        assert dispatcher.validate_frame_message(frame_payload(clock, 1, **missing)) is False

    def test_stale_timestamp(self, dispatcher, clock):
        stale = int(clock.timestamp()) - 301
        assert dispatcher.validate_frame_message(frame_payload(clock, 1, timestamp=stale)) is False

    def test_future_timestamp(self, dispatcher, clock):
        future = int(clock.timestamp()) + 301
        assert dispatcher.validate_frame_message(frame_payload(clock, 1, timestamp=future)) is False

    def test_recent_timestamp(self, dispatcher, clock):
        recent = int(clock.timestamp()) - 299
        assert dispatcher.validate_frame_message(frame_payload(clock, 1, timestamp=recent)) is True

    def test_dispatch_raises_on_invalid(self, dispatcher, clock):
        with pytest.raises(FrameValidationError):
            dispatcher.dispatch(frame_payload(clock, 1, messageHash=""))


class TestDispatch:
    """Each button index maps to one ledger action."""

    def test_configure_revenue(self, dispatcher, clock, content):
        result = dispatcher.dispatch(frame_payload(clock, 1, state=content.content_id))

        assert result.action == "configure_revenue"
        assert result.data == {"content_id": content.content_id, "current_percentage": 20.0}

    def test_content_id_from_url(self, dispatcher, clock, content):
        url = f"https://app.example.com/content/{content.content_id}"
        result = dispatcher.dispatch(frame_payload(clock, 1, url=url))

        assert result.data["content_id"] == content.content_id

    def test_create_remix(self, store, dispatcher, clock, content):
        result = dispatcher.dispatch(
            frame_payload(clock, 2, state=content.content_id, inputText="Lo-fi cut")
        )

        remix = store.get_remix(result.data["remix_id"])
        assert remix.remixing_creator_id == "fc_777"
        assert remix.revenue_share_percentage == 10
        assert remix.approved is False
        assert remix.remix_content_url == ""
        assert remix.description == "Lo-fi cut"
        assert store.get_content(content.content_id).remix_count == 1

        inbox = store.get_notifications_by_user("alice")
        assert [n.type for n in inbox] == ["content_remixed"]

    def test_create_remix_default_description(self, store, dispatcher, clock, content):
        result = dispatcher.dispatch(frame_payload(clock, 2, state=content.content_id))
        assert store.get_remix(result.data["remix_id"]).description == "Remix created via Farcaster"

    def test_purchase_enhancement(self, store, dispatcher, clock, content):
        result = dispatcher.dispatch(frame_payload(clock, 3, state=content.content_id))

        enhancement = store.get_enhancement(result.data["enhancement_id"])
        assert enhancement.enhancement_type == "custom"
        assert enhancement.cost == 0.01
        assert enhancement.approved is False
        assert enhancement.applied_by_creator_id == "fc_777"

    def test_vote_uses_button_as_option(self, store, dispatcher, clock):
        poll = store.create_poll(
            poll_data(options=["a", "b", "c", "d"]),
            creator_id="alice",
        )
        result = dispatcher.dispatch(frame_payload(clock, 4, state=poll.poll_id))

        assert result.data == {"poll_id": poll.poll_id, "option_index": 3}
        assert store.get_poll(poll.poll_id).votes == {"fc_777": 3}

    def test_second_vote_fails(self, store, dispatcher, clock):
        poll = store.create_poll(poll_data(options=["a", "b", "c", "d"]), creator_id="alice")
        dispatcher.dispatch(frame_payload(clock, 4, state=poll.poll_id))

        with pytest.raises(FrameActionError, match="Failed to vote"):
            dispatcher.dispatch(frame_payload(clock, 4, state=poll.poll_id))

    def test_vote_rejected_on_poll_with_fewer_than_four_options(self, store, dispatcher, clock):
        """Button 4 selects option 3, which a two-option poll does not have."""
        poll = store.create_poll(poll_data(options=["yes", "no"]), creator_id="alice")

        with pytest.raises(FrameActionError, match="Failed to vote"):
            dispatcher.dispatch(frame_payload(clock, 4, state=poll.poll_id))
        assert store.get_poll(poll.poll_id).votes == {}

    def test_vote_needs_poll_id(self, dispatcher, clock):
        with pytest.raises(FrameActionError, match="Poll ID not found"):
            dispatcher.dispatch(frame_payload(clock, 4))

    def test_unknown_button(self, dispatcher, clock):
        with pytest.raises(FrameActionError, match="Unknown action"):
            dispatcher.dispatch(frame_payload(clock, 5))

    def test_missing_content_id(self, dispatcher, clock):
        with pytest.raises(FrameActionError, match="Content ID not found"):
            dispatcher.dispatch(frame_payload(clock, 1))

    def test_unknown_content(self, dispatcher, clock):
        with pytest.raises(FrameNotFoundError):
            dispatcher.dispatch(frame_payload(clock, 2, state="content_missing"))
