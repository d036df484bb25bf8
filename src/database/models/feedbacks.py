"""Feedback model and related enums."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000


class FeedbackRole(str, Enum):
    """Role the author played in the rated transaction."""

    BUYER = "buyer"
    SELLER = "seller"

    @classmethod
    def normalize(cls, value: "str | FeedbackRole | None") -> "FeedbackRole":
        """Map free-form input onto a role, falling back to buyer."""
        if isinstance(value, cls):
            return value
        candidate = str(value or "").strip().lower()
        for role in cls:
            if role.value == candidate:
                return role
        return cls.BUYER


class ResolutionStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Feedback(Base):
    """A rating left by one user for another on a single ticket."""

    __tablename__ = "feedbacks"
    __table_args__ = (
        Index(
            "idx_feedback_unique",
            "author_id",
            "recipient_id",
            "ticket_number",
            unique=True,
        ),
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_feedbacks_rating_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    ticket_number: Mapped[str] = mapped_column(String, nullable=False, index=True)
    role: Mapped[FeedbackRole] = mapped_column(
        String(20), default=FeedbackRole.BUYER.value, nullable=False
    )

    # Dispute lifecycle
    disputed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    dispute_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    disputed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    resolved_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    resolution_status: Mapped[ResolutionStatus | None] = mapped_column(
        String(20), nullable=True
    )
    was_disputed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_id])
    recipient = relationship("User", foreign_keys=[recipient_id])
    resolved_by = relationship("User", foreign_keys=[resolved_by_id])

    @property
    def is_positive(self) -> bool:
        return self.rating >= 4

    @property
    def is_neutral(self) -> bool:
        return self.rating == 3

    @property
    def is_negative(self) -> bool:
        return self.rating <= 2
