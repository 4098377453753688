"""Middleware package: error hierarchy and request ID."""

from job_extractor.middleware.error_handler import (
    ExtractionFailedError,
    JobExtractorError,
    NoExtractorFoundError,
    PageLoadError,
    UnexpectedExtractionError,
    ValidationError,
    error_envelope,
    register_error_handlers,
)
from job_extractor.middleware.request_id import RequestIdFilter, RequestIdMiddleware

__all__ = [
    "ExtractionFailedError",
    "JobExtractorError",
    "NoExtractorFoundError",
    "PageLoadError",
    "RequestIdFilter",
    "RequestIdMiddleware",
    "UnexpectedExtractionError",
    "ValidationError",
    "error_envelope",
    "register_error_handlers",
]
