"""Feedback API schemas (requests, payloads and stats)."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


# Requests
class FeedbackCreateRequest(BaseModel):
    # Range and length rules live in FeedbackStore so every caller gets them
    rating: int = Field(..., strict=True)
    ticket_number: str
    comment: str | None = None
    role: str | None = None

    @field_validator("ticket_number", mode="before")
    @classmethod
    def ticket_number_as_text(cls, value):
        # Ticket numbers are opaque; clients may send them as JSON numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class DisputeRequest(BaseModel):
    reason: str | None = None


class ResolveRequest(BaseModel):
    status: str | None = Field(default=None, description="accepted or rejected")


# Stats
class FeedbackSummaryStats(BaseModel):
    """Compact stats shown on user cards."""

    total: int = 0
    positive: int = 0
    neutral: int = 0
    negative: int = 0
    average: float = 0


class FeedbackStats(FeedbackSummaryStats):
    disputed_pending: int = 0
    as_buyer: int = 0
    as_seller: int = 0


# Payloads
class FeedbackAuthor(BaseModel):
    id: int
    username: str
    avatar_template: str | None = None

    model_config = {"from_attributes": True}


class FeedbackModel(BaseModel):
    id: int
    author: FeedbackAuthor
    rating: int
    comment: str | None = None
    ticket_number: str
    role: str
    disputed: bool
    dispute_reason: str | None = None
    disputed_at: datetime | None = None
    resolution_status: str | None = None
    resolved_at: datetime | None = None
    was_disputed: bool
    created_at: datetime
    can_edit: bool
    can_delete: bool
    can_dispute: bool


# Responses
class FeedbackResponse(BaseModel):
    feedback: FeedbackModel


class FeedbackListResponse(BaseModel):
    feedbacks: list[FeedbackModel]
    stats: FeedbackStats
    can_leave_feedback: bool


class OpenDisputesResponse(BaseModel):
    feedbacks: list[FeedbackModel]
    total: int


class SuccessResponse(BaseModel):
    success: bool = True


class DeletedResponse(SuccessResponse):
    """Returned when a resolution removed the record."""

    deleted: bool = True
