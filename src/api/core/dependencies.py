from typing import Annotated, AsyncGenerator

from fastapi import BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions.base import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
)
from src.api.core.messages import MessageCode
from src.core.context import Actor
from src.modules.feedback.notifications import FeedbackNotifier
from src.modules.feedback.store import FeedbackStore
from src.modules.user.directory import UserDirectory
from src.utils.logger import get_logger
from src.utils.settings.app import AppSettings

logger = get_logger(__name__)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session from app state."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


def get_feedback_notifier() -> FeedbackNotifier:
    return FeedbackNotifier()


async def get_feedback_store(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    background_tasks: BackgroundTasks,
    notifier: Annotated[FeedbackNotifier, Depends(get_feedback_notifier)],
) -> FeedbackStore:
    """Get feedback store; notifications run as background tasks."""
    return FeedbackStore(db, notifier=notifier, background_tasks=background_tasks)


async def get_user_directory(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserDirectory:
    return UserDirectory(db)


async def ensure_feedback_enabled() -> None:
    """Behave like a disabled forum plugin: every route is a 404."""
    if not AppSettings().FEEDBACK_ENABLED:
        raise NotFoundError(MessageCode.NOT_FOUND)


async def get_current_actor(request: Request) -> Actor:
    """Actor for the request; anonymous when no token was presented."""
    return Actor(user=getattr(request.state, "user", None))


async def get_current_actor_authenticated(request: Request) -> Actor:
    """Actor for the request, requiring a logged-in user.

    Assumes auth middleware has set request.state.user.
    """
    actor = await get_current_actor(request)
    if not actor.is_authenticated:
        raise AuthenticationError(MessageCode.AUTH_REQUIRED)
    return actor


async def get_current_admin_actor(
    actor: Annotated[Actor, Depends(get_current_actor_authenticated)],
    request: Request,
) -> Actor:
    """Actor for staff-only routes; checked before any request body is read."""
    if not actor.is_admin:
        logger.warning(
            "Non-admin attempted staff action",
            user_id=actor.id,
            endpoint=request.url.path,
        )
        raise AuthorizationError(MessageCode.ADMIN_REQUIRED)
    return actor


AsyncSessionDep = Annotated[AsyncSession, Depends(get_db_session)]
FeedbackStoreDep = Annotated[FeedbackStore, Depends(get_feedback_store)]
UserDirectoryDep = Annotated[UserDirectory, Depends(get_user_directory)]

ActorDep = Annotated[Actor, Depends(get_current_actor)]
AuthenticatedActorDep = Annotated[Actor, Depends(get_current_actor_authenticated)]
AdminActorDep = Annotated[Actor, Depends(get_current_admin_actor)]
