from fastapi import APIRouter, Depends

from src.api.core.dependencies import (
    FeedbackStoreDep,
    UserDirectoryDep,
    ensure_feedback_enabled,
)
from src.api.user.schemas import UserCardModel, UserCardResponse

router = APIRouter(
    prefix="/user-cards",
    tags=["user"],
    dependencies=[Depends(ensure_feedback_enabled)],
)


@router.get("/{username}", response_model=UserCardResponse)
async def get_user_card(
    username: str,
    store: FeedbackStoreDep,
    directory: UserDirectoryDep,
) -> UserCardResponse:
    """Compact profile summary with feedback stats."""
    user = await directory.get_by_username(username)
    return UserCardResponse(
        user_card=UserCardModel(
            id=user.id,
            username=user.username,
            name=user.name,
            avatar_template=user.avatar_template,
            feedback_stats=await store.summary_stats(user.id),
        )
    )
