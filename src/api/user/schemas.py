"""User card API schemas."""

from pydantic import BaseModel

from src.api.feedback.schemas import FeedbackSummaryStats


class UserCardModel(BaseModel):
    id: int
    username: str
    name: str | None = None
    avatar_template: str | None = None
    feedback_stats: FeedbackSummaryStats


class UserCardResponse(BaseModel):
    user_card: UserCardModel
