"""Private message notifications for feedback lifecycle events."""

from dataclasses import dataclass

from src.database.models import Feedback, FeedbackRole, ResolutionStatus
from src.services.messaging.client import PrivateMessageClient
from src.utils.logger import get_logger

logger = get_logger(__name__)

RESOLUTION_MESSAGES = {
    ResolutionStatus.ACCEPTED: (
        "Your dispute has been **accepted**. "
        "The feedback has been removed from your profile."
    ),
    ResolutionStatus.REJECTED: (
        "Your dispute has been **rejected**. "
        "The feedback will remain on your profile. "
        "This feedback cannot be disputed again."
    ),
}


@dataclass(frozen=True)
class FeedbackNotice:
    """Snapshot of the fields a message needs, safe to use after a delete."""

    feedback_id: int
    ticket_number: str
    rating: int
    role: str
    comment: str | None
    author_username: str
    recipient_username: str

    @classmethod
    def from_feedback(cls, feedback: Feedback) -> "FeedbackNotice":
        return cls(
            feedback_id=feedback.id,
            ticket_number=feedback.ticket_number,
            rating=feedback.rating,
            role=FeedbackRole.normalize(feedback.role).value,
            comment=feedback.comment,
            author_username=feedback.author.username,
            recipient_username=feedback.recipient.username,
        )

    @property
    def comment_text(self) -> str:
        return self.comment.strip() if self.comment and self.comment.strip() else "(no comment)"


def render_feedback_received(notice: FeedbackNotice) -> tuple[str, str]:
    title = f"New Feedback Received - Ticket {notice.ticket_number}"
    body = (
        f"Hello @{notice.recipient_username},\n\n"
        f"You have received new feedback from @{notice.author_username}.\n\n"
        f"**Rating:** {notice.rating}/5 stars\n"
        f"**Role:** {notice.role.capitalize()}\n"
        f"**Ticket:** {notice.ticket_number}\n"
        f"**Comment:** {notice.comment_text}\n\n"
        f"You can view your feedback at: /u/{notice.recipient_username}\n\n"
        "If you believe this feedback is unfair, you can dispute it from your profile."
    )
    return title, body


def render_dispute_resolved(
    notice: FeedbackNotice, status: ResolutionStatus
) -> tuple[str, str]:
    title = f"Feedback Dispute Resolved - Ticket {notice.ticket_number}"
    body = (
        f"Hello @{notice.recipient_username},\n\n"
        f"{RESOLUTION_MESSAGES[status]}\n\n"
        "**Original Feedback:**\n"
        f"- From: @{notice.author_username}\n"
        f"- Rating: {notice.rating}/5 stars\n"
        f"- Ticket: {notice.ticket_number}\n"
        f"- Comment: {notice.comment_text}\n\n"
        "If you have any questions, please contact an administrator."
    )
    return title, body


class FeedbackNotifier:
    """Best-effort delivery: failures are logged and never propagated."""

    def __init__(self, client: PrivateMessageClient | None = None):
        self.client = client or PrivateMessageClient()

    async def feedback_received(self, notice: FeedbackNotice) -> bool:
        title, body = render_feedback_received(notice)
        return await self._deliver("feedback_received", notice, title, body)

    async def dispute_resolved(
        self, notice: FeedbackNotice, status: ResolutionStatus
    ) -> bool:
        title, body = render_dispute_resolved(notice, status)
        return await self._deliver(f"dispute_{status.value}", notice, title, body)

    async def _deliver(
        self, event: str, notice: FeedbackNotice, title: str, body: str
    ) -> bool:
        try:
            await self.client.send(title, body, notice.recipient_username)
        except Exception as e:
            logger.error(
                f"Failed to send {event} notification: {e}",
                feedback_id=notice.feedback_id,
                recipient=notice.recipient_username,
                error_type=type(e).__name__,
            )
            return False
        return True
