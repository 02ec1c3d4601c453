"""Request timing and request-id logging."""

import logging
import time
import uuid

from fastapi import Request, status

logger = logging.getLogger(__name__)


async def timing_middleware(request: Request, call_next):
    """Log method, path, status and duration of every HTTP request."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    log_extra = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
    }

    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.exception(
            f"{request.method} {request.url.path} failed ({duration_ms:.2f}ms)",
            extra={
                **log_extra,
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "duration_ms": round(duration_ms, 2),
            },
        )
        raise

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"

    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.2f}ms)",
        extra={
            **log_extra,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        },
    )
    return response
