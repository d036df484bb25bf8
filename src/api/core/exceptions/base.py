"""Exception taxonomy and global exception handlers for the FastAPI application."""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..messages import MessageCode, get_default_message
from src.utils.logger import get_logger

logger = get_logger(__name__)


class FeedbackServiceException(Exception):
    """Base exception for the feedback service with unified message codes."""

    default_status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message_code: MessageCode,
        status_code: int | None = None,
        details: dict | None = None,
        headers: dict | None = None,
    ):
        self.message_code = message_code
        self.status_code = status_code or self.default_status_code
        self.message: str = get_default_message(message_code)
        self.details = details or {}
        self.headers = headers or {}
        super().__init__(self.message)

    def to_response_dict(self) -> dict:
        """Convert exception to API response format."""
        return {
            "error": self.message,
            "message_code": self.message_code,
            "message": self.message,
            "details": self.details,
        }


class FeedbackValidationError(FeedbackServiceException):
    """A feedback record would violate an entity invariant."""

    default_status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class FeedbackStateError(FeedbackServiceException):
    """The requested transition is not allowed from the record's current state."""

    default_status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(FeedbackServiceException):
    default_status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(FeedbackServiceException):
    default_status_code = status.HTTP_403_FORBIDDEN


class AuthenticationError(FeedbackServiceException):
    default_status_code = status.HTTP_401_UNAUTHORIZED


class NotificationError(FeedbackServiceException):
    """Private message delivery failed. Caught and logged by the notifier."""

    default_status_code = status.HTTP_502_BAD_GATEWAY


def _serializable_errors(exc: RequestValidationError) -> list[dict]:
    try:
        errors = exc.errors()
        serializable_errors = []
        for error in errors:
            error_dict = dict(error)
            # ctx may carry the raw exception instance
            error_dict.pop("ctx", None)
            if "input" in error_dict and hasattr(error_dict["input"], "isoformat"):
                error_dict["input"] = error_dict["input"].isoformat()
            serializable_errors.append(error_dict)
        return serializable_errors
    except Exception:
        return [{"msg": "Validation error occurred", "type": "validation_error"}]


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""

    @app.exception_handler(FeedbackServiceException)
    async def feedback_exception_handler(
        request: Request, exc: FeedbackServiceException
    ) -> JSONResponse:
        """Handle typed feedback service exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            f"Feedback service exception: {exc.message_code.value}",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
            details=exc.details,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response_dict(),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle FastAPI and Starlette HTTP exceptions."""
        logger.warning(
            f"HTTP exception {exc.status_code}: {exc.detail}",
            path=request.url.path,
            method=request.method,
        )

        message_code = (
            MessageCode.NOT_FOUND
            if exc.status_code == status.HTTP_404_NOT_FOUND
            else MessageCode.BAD_REQUEST
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": str(exc.detail),
                "message_code": message_code,
                "message": str(exc.detail),
                "details": {"description": "HTTP exception occurred"},
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors."""
        logger.warning(
            "Validation error occurred",
            path=request.url.path,
            method=request.method,
        )

        message = get_default_message(MessageCode.INVALID_INPUT)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": message,
                "message_code": MessageCode.INVALID_INPUT,
                "message": message,
                "details": {
                    "description": "Request validation failed",
                    "validation_errors": _serializable_errors(exc),
                },
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Handle SQLAlchemy database errors."""
        logger.error(
            f"Database error: {str(exc)}",
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
        )

        if isinstance(exc, IntegrityError):
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={
                    "error": "Data integrity constraint violated",
                    "message_code": MessageCode.BAD_REQUEST,
                    "message": "Data integrity constraint violated",
                    "details": {"database_error": "Constraint violation"},
                },
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Database error occurred",
                "message_code": MessageCode.INTERNAL_ERROR,
                "message": "Database error occurred",
                "details": {"database_error": "Internal database error"},
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle all other unhandled exceptions."""
        if isinstance(exc, FeedbackServiceException):
            return await feedback_exception_handler(request, exc)

        logger.error(
            f"Unhandled exception: {str(exc)}",
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
            traceback=traceback.format_exc(),
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message_code": MessageCode.INTERNAL_ERROR,
                "message": "Internal server error",
                "details": {"error_type": type(exc).__name__},
            },
        )
