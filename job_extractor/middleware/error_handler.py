"""Global error hierarchy and FastAPI exception handlers.

All extraction errors extend JobExtractorError. The three extraction
failures (no extractor, extractor returned nothing, extractor raised) also
convert to the ``ErrorResponse`` shape that crosses the message boundary.
The FastAPI exception handlers catch these errors (plus Pydantic's
RequestValidationError and unhandled exceptions) and return a consistent
JSON envelope: { success, data, error, meta }.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from job_extractor.models.messages import ErrorResponse
from job_extractor.models.responses import ApiResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class JobExtractorError(Exception):
    """Base error for all job-extractor errors."""

    status_code: int = 500
    message: str = "Internal server error"
    error_type: str = "JobExtractorError"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Normalize into the outbound message error shape."""
        return ErrorResponse(message=self.message, error_type=self.error_type)


class NoExtractorFoundError(JobExtractorError):
    """No registered extractor matched the page URL."""

    status_code = 422
    message = "No suitable extractor found for this page"
    error_type = "NoExtractorFound"


class ExtractionFailedError(JobExtractorError):
    """A matching extractor ran but could not locate the required fields."""

    status_code = 422
    message = "Failed to extract job details from the page"
    error_type = "ExtractionFailed"


class UnexpectedExtractionError(JobExtractorError):
    """The extractor raised while reading the page."""

    status_code = 500
    message = "Unknown error during job extraction"
    error_type = "UnexpectedExtractionError"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UnexpectedExtractionError":
        """Wrap *exc*, keeping its message when it carries one."""
        # str(KeyError("x")) is quoted; a lone string argument is the message itself
        if len(exc.args) == 1 and isinstance(exc.args[0], str):
            message = exc.args[0]
        else:
            message = str(exc)
        return cls(message if message.strip() else None, exception_type=type(exc).__name__)


class PageLoadError(JobExtractorError):
    """The page could not be opened in the browser."""

    status_code = 502
    message = "Failed to load the page"
    error_type = "PageLoadError"


class ValidationError(JobExtractorError):
    """Request payload validation failure, with field-level details."""

    status_code = 422
    message = "Validation error"
    error_type = "ValidationError"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def error_envelope(status_code: int, error: str, meta: dict | None = None) -> JSONResponse:
    """Wrap *error* in a failed ``ApiResponse`` with the given status."""
    body = ApiResponse(success=False, error=error, meta=meta)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _extractor_error_handler(request: Request, exc: JobExtractorError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s %s failed: %s",
        request.method,
        request.url.path,
        exc.message,
        extra={"error_reason": exc.error_type},
    )
    return error_envelope(
        exc.status_code, exc.message, meta={"error_type": exc.error_type, **exc.details}
    )


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report each invalid request field as ``{field, message, type}``."""
    fields = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return error_envelope(422, "Validation error", meta={"fields": fields})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Details stay in the log; the client only sees a generic message.
    logger.error(
        "Unhandled %s on %s %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_envelope(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on *app*."""
    app.add_exception_handler(JobExtractorError, _extractor_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
