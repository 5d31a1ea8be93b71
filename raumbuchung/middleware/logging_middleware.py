import logging
import time

from fastapi import Request

logger = logging.getLogger("raumbuchung.middleware.requests")


async def log_requests(request: Request, call_next):
    """Loggt Methode, Pfad, Status und Dauer jedes Requests."""
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f} ms)")
    return response
