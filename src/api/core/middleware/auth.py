import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from jose import JWTError, jwt

from src.api.core.constants import AUTHORIZATION_HEADER, BEARER_PREFIX
from src.api.core.exceptions.base import AuthenticationError
from src.api.core.messages import MessageCode
from src.database.models import User
from src.utils.settings.auth import AuthSettings

logger = structlog.get_logger(__name__)


def decode_user_id(token: str, settings: AuthSettings | None = None) -> int:
    """Decode a forum session token and return the user id in ``sub``."""
    settings = settings or AuthSettings()
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        return int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        raise AuthenticationError(
            MessageCode.INVALID_TOKEN,
            details={"description": "Token could not be validated"},
        )


async def auth_middleware(request: Request, call_next):
    """
    Resolve the acting user from a bearer token.

    Requests without a token proceed anonymously (request.state.user is None);
    routes that mutate state require an actor through their dependencies.
    """
    request.state.user = None
    authorization = request.headers.get(AUTHORIZATION_HEADER, "")

    if not authorization:
        return await call_next(request)

    try:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != BEARER_PREFIX or not token:
            raise AuthenticationError(
                MessageCode.INVALID_TOKEN,
                details={"description": "Authorization header must be 'Bearer <token>'"},
            )

        user_id = decode_user_id(token)
        async with request.app.state.session_factory() as db:
            user = await db.get(User, user_id)

        if not user:
            raise AuthenticationError(
                MessageCode.INVALID_TOKEN,
                details={"description": "Token does not match a known user"},
            )
    except AuthenticationError as e:
        logger.debug(
            "Authentication failed",
            path=request.url.path,
            message_code=e.message_code,
            details=e.details,
        )
        # Raised before routing, so exception handlers would not see it
        return JSONResponse(
            status_code=e.status_code, content=e.to_response_dict()
        )

    request.state.user = user
    structlog.contextvars.bind_contextvars(user_id=user.id)
    logger.debug("Request authenticated", admin=user.admin)
    return await call_next(request)
