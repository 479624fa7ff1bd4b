"""Error taxonomy and the centralized error response formatter.

Learn: services and dependencies raise these exceptions; nothing below the
router layer knows about HTTP. register_error_handlers() is the one place
that turns an exception into a status code and a JSON body:

    {"error": "<message>", "code": "<ErrorClass>", "details": {...}}

FastAPI's own request validation errors (422 by default) are folded into
ValidationError so the API reports every bad input as 400.
"""

from typing import Any, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class BazaarError(Exception):
    """Base exception for every error the API reports on purpose."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def code(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(BazaarError):
    """Missing or malformed input."""

    status_code = 400


class UniqueConstraintViolation(BazaarError):
    """A write collided with a unique constraint.

    field_group names the columns of the violated constraint, e.g.
    ("username",) or ("post_id", "user_id").
    """

    status_code = 400

    def __init__(
        self,
        field_group: tuple[str, ...],
        message: Optional[str] = None,
    ):
        self.field_group = tuple(field_group)
        joined = ", ".join(self.field_group) or "value"
        super().__init__(
            message or f"{joined} already exists",
            details={"fields": list(self.field_group)},
        )


class MissingCredential(BazaarError):
    """No bearer header and no auth cookie on the request."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class InvalidCredential(BazaarError):
    """A credential was presented but failed verification."""

    status_code = 403

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class Forbidden(BazaarError):
    """The resource exists but the requester does not own it."""

    status_code = 403


class NotFound(BazaarError):
    status_code = 404


class UnexpectedFailure(BazaarError):
    """Anything we did not anticipate. details carry the underlying error."""

    status_code = 500


def error_response(exc: BazaarError) -> JSONResponse:
    headers = None
    if isinstance(exc, MissingCredential):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=headers
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the app."""

    @app.exception_handler(BazaarError)
    async def handle_bazaar_error(request: Request, exc: BazaarError):
        if exc.status_code >= 500:
            logger.error(
                "http.unexpected_failure",
                path=request.url.path,
                error=exc.message,
                details=exc.details,
            )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ):
        fields = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
                "message": err.get("msg", "invalid"),
            }
            for err in exc.errors()
        ]
        return error_response(
            ValidationError("Invalid request", details={"fields": fields})
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("http.unhandled_exception", path=request.url.path)
        return error_response(
            UnexpectedFailure(
                "Something went wrong!",
                details={"type": type(exc).__name__, "message": str(exc)},
            )
        )
