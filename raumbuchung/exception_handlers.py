import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from raumbuchung.core.errors import ErrorKind, RetryAborted, ServiceError, VersionConflict

logger = logging.getLogger("raumbuchung.exception_handlers")

STATUS_BY_KIND = {
    ErrorKind.INVALID_RESERVATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_REPORTING: status.HTTP_400_BAD_REQUEST,
    ErrorKind.RESERVATION_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.RESTAURANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SPACE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info(f"{exc.kind.value} bei {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=STATUS_BY_KIND[exc.kind], content=exc.to_dict())


async def version_conflict_handler(request: Request, exc: VersionConflict) -> JSONResponse:
    logger.error(f"Versionskonflikt nach allen Versuchen bei {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Reservierung konnte nach mehreren Versuchen nicht gespeichert werden"},
    )


async def retry_aborted_handler(request: Request, exc: RetryAborted) -> JSONResponse:
    logger.error(f"Abbruch bei {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Ungültige Anfrage bei {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


EXCEPTION_HANDLERS = {
    ServiceError: service_error_handler,
    VersionConflict: version_conflict_handler,
    RetryAborted: retry_aborted_handler,
    RequestValidationError: validation_error_handler,
}


def register_exception_handlers(app):
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
