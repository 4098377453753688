"""Public models for the job extraction service."""

from job_extractor.models.job_details import JobDetails, JobPlatform
from job_extractor.models.messages import ErrorResponse, Message, MessageType
from job_extractor.models.requests import ExtractRequest, ResolveRequest
from job_extractor.models.responses import (
    ApiResponse,
    ExtractorInfo,
    HealthStatus,
    ResolveResult,
)
from job_extractor.models.validation import (
    JOB_DETAILS_CONSTRAINTS,
    FieldError,
    ValidationResult,
    validate_job_details,
)

__all__ = [
    "JOB_DETAILS_CONSTRAINTS",
    "ApiResponse",
    "ErrorResponse",
    "ExtractRequest",
    "ExtractorInfo",
    "FieldError",
    "HealthStatus",
    "JobDetails",
    "JobPlatform",
    "Message",
    "MessageType",
    "ResolveRequest",
    "ResolveResult",
    "ValidationResult",
    "validate_job_details",
]
