import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.core.exceptions.base import register_exception_handlers
from src.api.core.middleware.auth import auth_middleware
from src.api.core.middleware.logging import logging_middleware
from src.api.router import api_router
from src.database.connection import AsyncSessionLocal
from src.utils.logger import setup_logging
from src.utils.settings.app import AppSettings

settings = AppSettings()
is_production = settings.ENVIRONMENT.upper() == "PROD"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_prod()
    logger = setup_logging(is_production, settings.LOG_LEVEL)

    # Handlers and the auth middleware open sessions from here
    app.state.session_factory = AsyncSessionLocal
    logger.info(
        "DEALD feedback service started",
        environment=settings.ENVIRONMENT,
        feedback_enabled=settings.FEEDBACK_ENABLED,
        path_prefix=settings.FEEDBACK_PATH_PREFIX,
    )

    yield

    logger.info("DEALD feedback service stopped")


app = FastAPI(
    title="DEALD Feedback",
    description="Buyer and seller ratings, disputes and moderation for DEALD tickets",
    version=settings.API_VERSION,
    lifespan=lifespan,
    docs_url=None if is_production else "/docs",
    redoc_url=None if is_production else "/redoc",
    openapi_url=None if is_production else "/openapi.json",
)

register_exception_handlers(app)

# Last added runs outermost: logging wraps auth, which wraps CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)
app.middleware("http")(auth_middleware)
app.middleware("http")(logging_middleware)

app.include_router(api_router)


def _serve(reload: bool):
    uvicorn.run(
        "src.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload,
        access_log=False,
    )


def run_dev_server():
    """Run development server with auto-reload."""
    _serve(reload=True)


def run_prod_server():
    _serve(reload=False)
