import time
import uuid

import structlog
from fastapi import Request

from src.api.core.constants import QUIET_PATHS, REQUEST_ID_HEADER
from src.utils.logger import get_client_ip, get_logger

logger = get_logger(__name__)


async def logging_middleware(request: Request, call_next):
    """Bind request context for every log line and emit one access event."""
    if request.url.path in QUIET_PATHS:
        return await call_next(request)

    started = time.perf_counter()
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        ip_address=get_client_ip(request),
        method=request.method,
        path=request.url.path,
    )

    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id

    log = logger.warning if response.status_code >= 500 else logger.info
    log(
        "request",
        status_code=response.status_code,
        duration=int((time.perf_counter() - started) * 1000),
    )
    return response
