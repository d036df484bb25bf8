"""Test factories for feedback service models."""

from .base import AsyncSQLAlchemyModelFactory
from .users import UserFactory
from .feedback import FeedbackFactory

__all__ = [
    "AsyncSQLAlchemyModelFactory",
    "UserFactory",
    "FeedbackFactory",
]
