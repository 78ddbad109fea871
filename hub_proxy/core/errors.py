"""API error envelope and exception handler registration."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hub_proxy.schemas.envelope import ErrorResponse

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid input. Expected a JSON object body."
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ProxyError(Exception):
    """Base application exception for explicit API error responses."""

    def __init__(self, *, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class InvalidInputError(ProxyError):
    """Raised when a request body fails its route's validation rules."""

    def __init__(self, *, message: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, message=message)


class InternalProxyError(ProxyError):
    """Raised when a route fails for reasons callers should not see."""

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=INTERNAL_ERROR_MESSAGE)


def build_error_response(*, status_code: int, message: str) -> JSONResponse:
    payload = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump())


async def request_validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable request bodies with the proxy error envelope."""

    logger.debug("Rejected request body: %s", exc.errors())
    return build_error_response(status_code=status.HTTP_400_BAD_REQUEST, message=INVALID_BODY_MESSAGE)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize HTTP exceptions to the proxy error envelope."""

    message = str(exc.detail) if isinstance(exc.detail, str) and exc.detail else "Request failed"
    return build_error_response(status_code=exc.status_code, message=message)


async def proxy_error_handler(_: Request, exc: ProxyError) -> JSONResponse:
    """Return explicit proxy errors in the shared envelope."""

    return build_error_response(status_code=exc.status_code, message=exc.message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions while keeping response shape stable."""

    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return build_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=INTERNAL_ERROR_MESSAGE,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all proxy error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
