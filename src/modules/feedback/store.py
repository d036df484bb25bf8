"""Feedback store: entity invariants and lifecycle transitions.

A feedback record moves through three states:

    created --dispute()--> disputed --resolve(rejected)--> closed (was_disputed)
                                    \--resolve(accepted)--> deleted

Every mutating method commits in a single unit or rolls back. Notifications
go out only after a successful commit and never affect the outcome.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Awaitable, Callable

from fastapi import BackgroundTasks
from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.api.core.exceptions.base import (
    FeedbackStateError,
    FeedbackValidationError,
    NotFoundError,
)
from src.api.core.messages import MessageCode
from src.api.feedback.schemas import FeedbackStats, FeedbackSummaryStats
from src.core.base import BaseService
from src.database.models import Feedback, FeedbackRole, ResolutionStatus
from src.database.models.feedbacks import (
    MAX_COMMENT_LENGTH,
    MAX_RATING,
    MIN_RATING,
)
from src.modules.feedback.notifications import FeedbackNotice, FeedbackNotifier

DUPLICATE_INDEX = "idx_feedback_unique"


def round_average(value: Any) -> float:
    """Mean rating rounded half-up to one decimal, 0 when there is none."""
    if value is None:
        return 0
    return float(
        Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    )


def parse_resolution_status(
    value: ResolutionStatus | str | None,
) -> ResolutionStatus:
    try:
        return ResolutionStatus(value)
    except ValueError:
        raise FeedbackValidationError(
            MessageCode.INVALID_RESOLUTION_STATUS,
            details={"status": value, "allowed": [s.value for s in ResolutionStatus]},
        )


def is_duplicate_violation(error: IntegrityError) -> bool:
    """True when the unique (author, recipient, ticket) index was violated."""
    message = str(error.orig)
    if DUPLICATE_INDEX in message:
        return True
    # SQLite names the columns rather than the index
    return "UNIQUE constraint failed: feedbacks." in message


def open_dispute_clause():
    return and_(Feedback.disputed.is_(True), Feedback.resolution_status.is_(None))


class FeedbackStore(BaseService):
    """Owns the ``Feedback`` entity and performs its state transitions."""

    def __init__(
        self,
        db: AsyncSession,
        notifier: FeedbackNotifier | None = None,
        background_tasks: BackgroundTasks | None = None,
    ):
        super().__init__(db)
        self.notifier = notifier or FeedbackNotifier()
        self.background_tasks = background_tasks

    # Reads

    async def find(self, feedback_id: int) -> Feedback | None:
        stmt = (
            select(Feedback)
            .options(
                selectinload(Feedback.author),
                selectinload(Feedback.recipient),
            )
            .where(Feedback.id == feedback_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, feedback_id: int) -> Feedback:
        feedback = await self.find(feedback_id)
        if not feedback:
            raise NotFoundError(
                MessageCode.FEEDBACK_NOT_FOUND, details={"feedback_id": feedback_id}
            )
        return feedback

    async def list_for_recipient(self, user_id: int) -> list[Feedback]:
        stmt = (
            select(Feedback)
            .options(selectinload(Feedback.author))
            .where(Feedback.recipient_id == user_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_open_disputes(self) -> list[Feedback]:
        stmt = (
            select(Feedback)
            .options(selectinload(Feedback.author))
            .where(open_dispute_clause())
            .order_by(Feedback.disputed_at.asc(), Feedback.id.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def stats(self, user_id: int) -> FeedbackStats:
        stmt = select(
            func.count(Feedback.id),
            func.count(case((Feedback.rating >= 4, 1))),
            func.count(case((Feedback.rating == 3, 1))),
            func.count(case((Feedback.rating <= 2, 1))),
            func.avg(Feedback.rating),
            func.count(case((open_dispute_clause(), 1))),
            func.count(case((Feedback.role == FeedbackRole.BUYER.value, 1))),
            func.count(case((Feedback.role == FeedbackRole.SELLER.value, 1))),
        ).where(Feedback.recipient_id == user_id)
        row = (await self.db.execute(stmt)).one()
        total, positive, neutral, negative, average, pending, buyer, seller = row
        return FeedbackStats(
            total=total,
            positive=positive,
            neutral=neutral,
            negative=negative,
            average=round_average(average),
            disputed_pending=pending,
            as_buyer=buyer,
            as_seller=seller,
        )

    async def summary_stats(self, user_id: int) -> FeedbackSummaryStats:
        full = await self.stats(user_id)
        return FeedbackSummaryStats(
            total=full.total,
            positive=full.positive,
            neutral=full.neutral,
            negative=full.negative,
            average=full.average,
        )

    # Transitions

    async def create(
        self,
        author_id: int,
        recipient_id: int,
        rating: int,
        ticket_number: str,
        comment: str | None = None,
        role: str | FeedbackRole | None = None,
    ) -> Feedback:
        """Create a feedback record for one (author, recipient, ticket) triple."""
        ticket_number = (ticket_number or "").strip()
        self._validate_new(author_id, recipient_id, rating, ticket_number, comment)

        feedback = Feedback(
            author_id=author_id,
            recipient_id=recipient_id,
            rating=rating,
            comment=comment,
            ticket_number=ticket_number,
            role=FeedbackRole.normalize(role).value,
        )
        self.db.add(feedback)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not is_duplicate_violation(e):
                raise
            # The unique index is the source of truth for duplicates
            self.logger.info(
                "Duplicate feedback rejected",
                author_id=author_id,
                recipient_id=recipient_id,
                ticket_number=ticket_number,
            )
            raise FeedbackValidationError(
                MessageCode.FEEDBACK_DUPLICATE,
                details={"ticket_number": ticket_number},
            ) from e

        feedback = await self.get(feedback.id)
        self.logger.info(
            "Feedback created",
            feedback_id=feedback.id,
            author_id=author_id,
            recipient_id=recipient_id,
            rating=rating,
        )
        await self._dispatch(
            self.notifier.feedback_received, FeedbackNotice.from_feedback(feedback)
        )
        return feedback

    async def dispute(self, feedback: Feedback, reason: str | None = None) -> bool:
        """Open a dispute. Returns False, changing nothing, if one was ever filed."""
        if feedback.was_disputed or feedback.disputed:
            return False

        feedback.disputed = True
        feedback.dispute_reason = reason
        feedback.disputed_at = self.now()
        await self._commit()
        self.logger.info("Feedback disputed", feedback_id=feedback.id)
        return True

    async def resolve(
        self,
        feedback: Feedback,
        admin_id: int,
        status: ResolutionStatus | str | None,
    ) -> Feedback | None:
        """Close an open dispute.

        ``accepted`` deletes the record and returns None. ``rejected`` keeps it,
        marks it as permanently disputed and returns it.
        """
        status = parse_resolution_status(status)
        if not feedback.disputed:
            raise FeedbackStateError(
                MessageCode.FEEDBACK_NOT_DISPUTED, details={"feedback_id": feedback.id}
            )

        notice = FeedbackNotice.from_feedback(feedback)

        if status is ResolutionStatus.ACCEPTED:
            await self.db.delete(feedback)
            await self._commit()
            self.logger.info(
                "Dispute accepted, feedback removed",
                feedback_id=notice.feedback_id,
                admin_id=admin_id,
            )
            await self._dispatch(self.notifier.dispute_resolved, notice, status)
            return None

        feedback.disputed = False
        feedback.resolved_by_id = admin_id
        feedback.resolved_at = self.now()
        feedback.resolution_status = status.value
        feedback.was_disputed = True
        await self._commit()
        self.logger.info(
            "Dispute rejected", feedback_id=feedback.id, admin_id=admin_id
        )
        await self._dispatch(self.notifier.dispute_resolved, notice, status)
        return feedback

    async def delete(self, feedback: Feedback) -> None:
        feedback_id = feedback.id
        await self.db.delete(feedback)
        await self._commit()
        self.logger.info("Feedback deleted", feedback_id=feedback_id)

    # Helpers

    @staticmethod
    def _validate_new(
        author_id: int,
        recipient_id: int,
        rating: Any,
        ticket_number: str,
        comment: str | None,
    ) -> None:
        if author_id == recipient_id:
            raise FeedbackValidationError(MessageCode.FEEDBACK_SELF)
        if (
            isinstance(rating, bool)
            or not isinstance(rating, int)
            or not MIN_RATING <= rating <= MAX_RATING
        ):
            raise FeedbackValidationError(
                MessageCode.FEEDBACK_INVALID_RATING, details={"rating": rating}
            )
        if not ticket_number:
            raise FeedbackValidationError(MessageCode.FEEDBACK_TICKET_REQUIRED)
        if comment is not None and len(comment) > MAX_COMMENT_LENGTH:
            raise FeedbackValidationError(
                MessageCode.FEEDBACK_COMMENT_TOO_LONG,
                details={"length": len(comment), "maximum": MAX_COMMENT_LENGTH},
            )

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _dispatch(
        self, send: Callable[..., Awaitable[bool]], *args: Any
    ) -> None:
        if self.background_tasks is not None:
            self.background_tasks.add_task(send, *args)
        else:
            await send(*args)
