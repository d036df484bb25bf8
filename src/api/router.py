from fastapi import APIRouter

from src.api.feedback.router import router as feedback_router
from src.api.user.router import router as user_router

# Main API router
api_router = APIRouter()
api_router.include_router(feedback_router)
api_router.include_router(user_router)
