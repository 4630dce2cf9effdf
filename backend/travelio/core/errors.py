"""
Error taxonomy and HTTP translation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class TravelioError(Exception):
    """Base error; carries the HTTP status the boundary should answer with."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(TravelioError):
    status_code = 400
    default_message = "Bad request"


class InvalidAmountError(BadRequestError):
    default_message = "Invalid booking amount"


class NotFoundError(TravelioError):
    status_code = 404
    default_message = "Not found"


class UnauthorizedError(TravelioError):
    status_code = 401
    default_message = "unauthorized access"


class UpstreamError(TravelioError):
    status_code = 500
    default_message = "Payment provider request failed"


class InternalError(TravelioError):
    status_code = 500


async def _travelio_error_handler(request: Request, exc: TravelioError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc.__cause__
        )
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _store_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": InternalError.default_message})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed input is a 400 at this boundary, not 422
    logger.info("%s %s invalid payload: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(TravelioError, _travelio_error_handler)
    app.add_exception_handler(PyMongoError, _store_error_handler)
