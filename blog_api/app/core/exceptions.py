"""
Exception types and the handler that renders them.

Every failure a request can end with is a ``BlogAPIError`` carrying a
client‑facing message and an HTTP status code.  Handlers raise these;
``blog_api_exception_handler`` turns them into ``{"message": ...}``
JSON bodies.  Internal error detail is logged, never returned.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class BlogAPIError(Exception):
    """Base class for errors rendered as ``{"message": ...}`` responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationFailedError(BlogAPIError):
    """Payload failed schema checks.  Routes pick 400 or 422."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid input"


class NotAuthorizedError(BlogAPIError):
    """Missing, malformed, expired or forged bearer token.

    Rendered as 404 for both the no‑token and the bad‑token case.
    """

    status_code = status.HTTP_404_NOT_FOUND
    message = "Not Authorized"


class NotFoundError(BlogAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ForbiddenError(BlogAPIError):
    """Caller is authenticated but does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid author"


class InvalidCredentialsError(BlogAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Incorrect password"


class ConflictError(BlogAPIError):
    status_code = status.HTTP_409_CONFLICT
    message = "User already exists"


class StoreError(BlogAPIError):
    """Unexpected failure while talking to the database."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


class InvalidTokenError(Exception):
    """Raised by the credential service when a token cannot be trusted."""


async def blog_api_exception_handler(request: Request, exc: BlogAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures without internals."""
    logger.info("Rejected unparsable request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid input"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )
