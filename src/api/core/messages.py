"""Centralized message codes and default messages for API responses."""

from enum import Enum


class MessageCode(str, Enum):
    """Centralized message codes for API responses."""

    # Authentication & Authorization
    AUTH_REQUIRED = "AUTH_REQUIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    CANNOT_RATE_YOURSELF = "CANNOT_RATE_YOURSELF"
    CANNOT_RATE_ADMIN = "CANNOT_RATE_ADMIN"

    # Users
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Feedback validation
    FEEDBACK_SELF = "FEEDBACK_SELF"
    FEEDBACK_DUPLICATE = "FEEDBACK_DUPLICATE"
    FEEDBACK_INVALID_RATING = "FEEDBACK_INVALID_RATING"
    FEEDBACK_COMMENT_TOO_LONG = "FEEDBACK_COMMENT_TOO_LONG"
    FEEDBACK_TICKET_REQUIRED = "FEEDBACK_TICKET_REQUIRED"

    # Feedback lifecycle
    FEEDBACK_NOT_FOUND = "FEEDBACK_NOT_FOUND"
    FEEDBACK_ALREADY_DISPUTED = "FEEDBACK_ALREADY_DISPUTED"
    FEEDBACK_NOT_DISPUTED = "FEEDBACK_NOT_DISPUTED"
    INVALID_RESOLUTION_STATUS = "INVALID_RESOLUTION_STATUS"

    # Notifications
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"

    # Request validation
    INVALID_INPUT = "INVALID_INPUT"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"


# Default messages for each message code
DEFAULT_MESSAGES = {
    # Authentication & Authorization
    MessageCode.AUTH_REQUIRED: "Authentication required",
    MessageCode.INVALID_TOKEN: "Invalid authentication token",
    MessageCode.FORBIDDEN: "Not authorized",
    MessageCode.ADMIN_REQUIRED: "Admin access required",
    MessageCode.CANNOT_RATE_YOURSELF: "Cannot leave feedback for yourself",
    MessageCode.CANNOT_RATE_ADMIN: "Cannot leave feedback for admin",
    # Users
    MessageCode.USER_NOT_FOUND: "User not found",
    # Feedback validation
    MessageCode.FEEDBACK_SELF: "Cannot leave feedback for yourself",
    MessageCode.FEEDBACK_DUPLICATE: "Already left feedback for this ticket",
    MessageCode.FEEDBACK_INVALID_RATING: "Rating must be between 1 and 5",
    MessageCode.FEEDBACK_COMMENT_TOO_LONG: "Comment is too long (maximum is 1000 characters)",
    MessageCode.FEEDBACK_TICKET_REQUIRED: "Ticket number can't be blank",
    # Feedback lifecycle
    MessageCode.FEEDBACK_NOT_FOUND: "Feedback not found",
    MessageCode.FEEDBACK_ALREADY_DISPUTED: "This feedback has already been disputed and cannot be disputed again.",
    MessageCode.FEEDBACK_NOT_DISPUTED: "This feedback has no open dispute to resolve.",
    MessageCode.INVALID_RESOLUTION_STATUS: "Invalid status",
    # Notifications
    MessageCode.NOTIFICATION_FAILED: "Failed to deliver notification",
    # Validation errors
    MessageCode.INVALID_INPUT: "Invalid input provided",
    # Generic errors
    MessageCode.INTERNAL_ERROR: "Internal server error",
    MessageCode.NOT_FOUND: "Resource not found",
    MessageCode.BAD_REQUEST: "Bad request",
}


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "Unknown error")
