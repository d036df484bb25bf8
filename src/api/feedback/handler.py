"""Feedback domain handlers: authorization and payload shaping."""

from src.api.core.exceptions.base import AuthorizationError, FeedbackStateError
from src.api.core.messages import MessageCode
from src.core.context import Actor
from src.database.models import Feedback, FeedbackRole
from src.modules.feedback import permissions
from src.modules.feedback.store import FeedbackStore
from src.modules.user.directory import UserDirectory
from src.utils.logger import get_logger
from .schemas import (
    DeletedResponse,
    DisputeRequest,
    FeedbackAuthor,
    FeedbackCreateRequest,
    FeedbackListResponse,
    FeedbackModel,
    FeedbackResponse,
    OpenDisputesResponse,
    ResolveRequest,
    SuccessResponse,
)

logger = get_logger(__name__)


def serialize_feedback(feedback: Feedback, actor: Actor) -> FeedbackModel:
    """Shape a record for the client, with flags computed for this viewer."""
    return FeedbackModel(
        id=feedback.id,
        author=FeedbackAuthor.model_validate(feedback.author),
        rating=feedback.rating,
        comment=feedback.comment,
        ticket_number=feedback.ticket_number,
        role=FeedbackRole.normalize(feedback.role).value,
        disputed=feedback.disputed,
        dispute_reason=feedback.dispute_reason,
        disputed_at=feedback.disputed_at,
        resolution_status=feedback.resolution_status,
        resolved_at=feedback.resolved_at,
        was_disputed=feedback.was_disputed,
        created_at=feedback.created_at,
        can_edit=permissions.can_edit(actor, feedback),
        can_delete=permissions.can_delete(actor, feedback),
        can_dispute=permissions.can_dispute(actor, feedback),
    )


async def list_feedback_handler(
    store: FeedbackStore,
    directory: UserDirectory,
    actor: Actor,
    username: str,
) -> FeedbackListResponse:
    user = await directory.get_by_username(username)
    feedbacks = await store.list_for_recipient(user.id)
    return FeedbackListResponse(
        feedbacks=[serialize_feedback(f, actor) for f in feedbacks],
        stats=await store.stats(user.id),
        can_leave_feedback=permissions.can_leave_feedback(actor, user),
    )


async def show_feedback_handler(
    store: FeedbackStore, actor: Actor, feedback_id: int
) -> FeedbackResponse:
    feedback = await store.get(feedback_id)
    return FeedbackResponse(feedback=serialize_feedback(feedback, actor))


async def create_feedback_handler(
    store: FeedbackStore,
    directory: UserDirectory,
    actor: Actor,
    username: str,
    data: FeedbackCreateRequest,
) -> FeedbackResponse:
    recipient = await directory.get_by_username(username)

    if actor.id == recipient.id:
        raise AuthorizationError(MessageCode.CANNOT_RATE_YOURSELF)
    if recipient.admin:
        raise AuthorizationError(MessageCode.CANNOT_RATE_ADMIN)

    feedback = await store.create(
        author_id=actor.id,
        recipient_id=recipient.id,
        rating=data.rating,
        ticket_number=data.ticket_number,
        comment=data.comment,
        role=FeedbackRole.normalize(data.role),
    )
    return FeedbackResponse(feedback=serialize_feedback(feedback, actor))


async def delete_feedback_handler(
    store: FeedbackStore, actor: Actor, feedback_id: int
) -> SuccessResponse:
    feedback = await store.get(feedback_id)
    if not permissions.can_delete(actor, feedback):
        raise AuthorizationError(
            MessageCode.FORBIDDEN, details={"feedback_id": feedback_id}
        )

    await store.delete(feedback)
    logger.info("Feedback removed by user", feedback_id=feedback_id, actor_id=actor.id)
    return SuccessResponse(success=True)


async def dispute_feedback_handler(
    store: FeedbackStore,
    actor: Actor,
    feedback_id: int,
    data: DisputeRequest | None,
) -> FeedbackResponse:
    feedback = await store.get(feedback_id)
    if feedback.recipient_id != actor.id:
        raise AuthorizationError(
            MessageCode.FORBIDDEN, details={"feedback_id": feedback_id}
        )

    # A closed or open dispute is a state problem, not a permission one
    if feedback.was_disputed or feedback.disputed:
        raise FeedbackStateError(MessageCode.FEEDBACK_ALREADY_DISPUTED)

    reason = data.reason if data else None
    if not await store.dispute(feedback, reason):
        raise FeedbackStateError(MessageCode.FEEDBACK_ALREADY_DISPUTED)

    return FeedbackResponse(feedback=serialize_feedback(feedback, actor))


async def resolve_feedback_handler(
    store: FeedbackStore,
    actor: Actor,
    feedback_id: int,
    data: ResolveRequest | None,
) -> FeedbackResponse | DeletedResponse:
    if not permissions.can_resolve(actor):
        raise AuthorizationError(MessageCode.ADMIN_REQUIRED)

    feedback = await store.get(feedback_id)
    status = data.status if data else None

    resolved = await store.resolve(feedback, actor.id, status)
    if resolved is None:
        return DeletedResponse()
    return FeedbackResponse(feedback=serialize_feedback(resolved, actor))


async def open_disputes_handler(
    store: FeedbackStore, actor: Actor
) -> OpenDisputesResponse:
    if not permissions.can_resolve(actor):
        raise AuthorizationError(MessageCode.ADMIN_REQUIRED)

    feedbacks = await store.list_open_disputes()
    return OpenDisputesResponse(
        feedbacks=[serialize_feedback(f, actor) for f in feedbacks],
        total=len(feedbacks),
    )
