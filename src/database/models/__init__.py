"""Database models for the DEALD feedback service."""

from .base import Base
from .feedbacks import Feedback, FeedbackRole, ResolutionStatus
from .users import User

# Export all models and enums
__all__ = [
    # Base
    "Base",
    # Enums
    "FeedbackRole",
    "ResolutionStatus",
    # Models
    "User",
    "Feedback",
]
