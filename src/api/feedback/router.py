from fastapi import APIRouter, Body, Depends

from src.api.core.dependencies import (
    ActorDep,
    AdminActorDep,
    AuthenticatedActorDep,
    FeedbackStoreDep,
    UserDirectoryDep,
    ensure_feedback_enabled,
)
from src.api.feedback.handler import (
    create_feedback_handler,
    delete_feedback_handler,
    dispute_feedback_handler,
    list_feedback_handler,
    open_disputes_handler,
    resolve_feedback_handler,
    show_feedback_handler,
)
from src.api.feedback.schemas import (
    DeletedResponse,
    DisputeRequest,
    FeedbackCreateRequest,
    FeedbackListResponse,
    FeedbackResponse,
    OpenDisputesResponse,
    ResolveRequest,
    SuccessResponse,
)
from src.utils.settings.app import AppSettings

router = APIRouter(
    prefix=AppSettings().FEEDBACK_PATH_PREFIX,
    tags=["feedback"],
    dependencies=[Depends(ensure_feedback_enabled)],
)


@router.get("/user/{username}", response_model=FeedbackListResponse)
async def list_feedback(
    username: str,
    store: FeedbackStoreDep,
    directory: UserDirectoryDep,
    actor: ActorDep,
) -> FeedbackListResponse:
    """Feedback received by a user, newest first, with stats."""
    return await list_feedback_handler(store, directory, actor, username)


@router.post("/user/{username}", response_model=FeedbackResponse)
async def create_feedback(
    username: str,
    data: FeedbackCreateRequest,
    store: FeedbackStoreDep,
    directory: UserDirectoryDep,
    actor: AuthenticatedActorDep,
) -> FeedbackResponse:
    """Leave feedback for a user on a ticket."""
    return await create_feedback_handler(store, directory, actor, username, data)


@router.get("/disputes", response_model=OpenDisputesResponse)
async def list_open_disputes(
    store: FeedbackStoreDep,
    actor: AdminActorDep,
) -> OpenDisputesResponse:
    """Disputes waiting for an administrator (Admin only)."""
    return await open_disputes_handler(store, actor)


@router.get("/{feedback_id}", response_model=FeedbackResponse)
async def show_feedback(
    feedback_id: int,
    store: FeedbackStoreDep,
    actor: ActorDep,
) -> FeedbackResponse:
    return await show_feedback_handler(store, actor, feedback_id)


@router.delete("/{feedback_id}", response_model=SuccessResponse)
async def delete_feedback(
    feedback_id: int,
    store: FeedbackStoreDep,
    actor: AuthenticatedActorDep,
) -> SuccessResponse:
    """Delete feedback (author or admin)."""
    return await delete_feedback_handler(store, actor, feedback_id)


@router.post("/{feedback_id}/dispute", response_model=FeedbackResponse)
async def dispute_feedback(
    feedback_id: int,
    store: FeedbackStoreDep,
    actor: AuthenticatedActorDep,
    data: DisputeRequest | None = Body(default=None),
) -> FeedbackResponse:
    """Dispute feedback you received. Each record can be disputed once."""
    return await dispute_feedback_handler(store, actor, feedback_id, data)


@router.post(
    "/{feedback_id}/resolve", response_model=FeedbackResponse | DeletedResponse
)
async def resolve_feedback(
    feedback_id: int,
    store: FeedbackStoreDep,
    actor: AdminActorDep,
    data: ResolveRequest | None = Body(default=None),
) -> FeedbackResponse | DeletedResponse:
    """
    Resolve an open dispute (Admin only).

    ``accepted`` removes the feedback; ``rejected`` keeps it and locks it
    against further disputes.
    """
    return await resolve_feedback_handler(store, actor, feedback_id, data)
