"""Exception handlers: every failure leaves the API as a RegistryError envelope.

Structural request problems become MalformedRequestError (400) and anything
unexpected becomes InternalError (500), so bad-request, conflict,
internal-error and service-unavailable all share one rendering path.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from key_registry.core.errors import InternalError, MalformedRequestError, RegistryError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, registry_error_response)
    app.add_exception_handler(RequestValidationError, malformed_request_response)
    app.add_exception_handler(Exception, unexpected_error_response)


async def registry_error_response(request: Request, exc: RegistryError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def malformed_request_response(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await registry_error_response(request, MalformedRequestError(exc.errors()))


async def unexpected_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.url.path}", exc_info=exc)
    return await registry_error_response(request, InternalError())
