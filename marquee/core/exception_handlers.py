import logging
from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from marquee.core.exceptions import Action, BookingError, StorageFailure
from marquee.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def booking_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, BookingError) else BookingError(str(exc))
    body = ErrorResponse(error=error.error, message=error.message, action=error.action)
    return JSONResponse(
        status_code=error.status_code,
        content={**body.model_dump(mode="json"), **error.details()},
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Database errors outside a unit of work render like StorageFailure."""
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return await booking_error_handler(request, StorageFailure())


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = ErrorResponse(
        error="internal_error",
        message="Something went wrong, please try again",
        action=Action.RETRY_LATER,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    BookingError: booking_error_handler,
    SQLAlchemyError: storage_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
