import pytest

from src.api.core.exceptions.base import NotificationError
from src.api.core.messages import MessageCode
from src.database.models import ResolutionStatus
from src.modules.feedback.notifications import (
    FeedbackNotice,
    FeedbackNotifier,
    render_dispute_resolved,
    render_feedback_received,
)


@pytest.fixture
def notice() -> FeedbackNotice:
    return FeedbackNotice(
        feedback_id=7,
        ticket_number="DL-2024",
        rating=2,
        role="seller",
        comment="Item arrived damaged",
        author_username="bob",
        recipient_username="alice",
    )


def test_render_feedback_received(notice):
    title, body = render_feedback_received(notice)

    assert title == "New Feedback Received - Ticket DL-2024"
    assert body.startswith("Hello @alice,\n\n")
    assert "You have received new feedback from @bob." in body
    assert "**Rating:** 2/5 stars\n" in body
    assert "**Role:** Seller\n" in body
    assert "**Ticket:** DL-2024\n" in body
    assert "**Comment:** Item arrived damaged\n" in body
    assert "You can view your feedback at: /u/alice" in body
    assert body.endswith(
        "If you believe this feedback is unfair, you can dispute it from your profile."
    )


def test_render_uses_placeholder_for_blank_comment(notice):
    blank = FeedbackNotice(**{**notice.__dict__, "comment": "   "})
    _, body = render_feedback_received(blank)
    assert "**Comment:** (no comment)" in body


@pytest.mark.parametrize(
    "status, expected",
    [
        (
            ResolutionStatus.ACCEPTED,
            "Your dispute has been **accepted**. "
            "The feedback has been removed from your profile.",
        ),
        (
            ResolutionStatus.REJECTED,
            "Your dispute has been **rejected**. "
            "The feedback will remain on your profile. "
            "This feedback cannot be disputed again.",
        ),
    ],
)
def test_render_dispute_resolved(notice, status, expected):
    title, body = render_dispute_resolved(notice, status)

    assert title == "Feedback Dispute Resolved - Ticket DL-2024"
    assert expected in body
    assert "**Original Feedback:**\n- From: @bob\n- Rating: 2/5 stars\n" in body
    assert "- Ticket: DL-2024\n- Comment: Item arrived damaged" in body
    assert body.endswith("If you have any questions, please contact an administrator.")


@pytest.mark.asyncio
async def test_notifier_delivers_to_recipient(notice, message_client):
    notifier = FeedbackNotifier(client=message_client)

    assert await notifier.feedback_received(notice) is True
    assert await notifier.dispute_resolved(notice, ResolutionStatus.REJECTED) is True

    assert [m["recipient"] for m in message_client.sent] == ["alice", "alice"]


@pytest.mark.asyncio
async def test_notifier_swallows_delivery_failure(notice):
    class FailingClient:
        async def send(self, title, body, recipient_username):
            raise NotificationError(MessageCode.NOTIFICATION_FAILED)

    notifier = FeedbackNotifier(client=FailingClient())

    assert await notifier.feedback_received(notice) is False
    assert await notifier.dispute_resolved(notice, ResolutionStatus.ACCEPTED) is False
