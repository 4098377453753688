"""Field-level validation of ``JobDetails`` against form constraints.

Validation never blocks an extraction. The result tells the form layer
which fields still need user input before a cover letter can be
generated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlparse

from job_extractor.models.job_details import JobDetails

JOB_DETAILS_CONSTRAINTS = {
    "company_min_length": 1,
    "company_max_length": 200,
    "title_min_length": 1,
    "title_max_length": 200,
    "description_min_length": 10,
    "description_max_length": 10_000,
}


@dataclass
class FieldError:
    """A single failed constraint."""

    field: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of :func:`validate_job_details`."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": [{"field": e.field, "message": e.message} for e in self.errors],
        }


def is_valid_url(url: str) -> bool:
    """Return ``True`` for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _check_length(
    errors: list[FieldError],
    name: str,
    label: str,
    value: str,
) -> None:
    lo = JOB_DETAILS_CONSTRAINTS[f"{name}_min_length"]
    hi = JOB_DETAILS_CONSTRAINTS[f"{name}_max_length"]
    if not lo <= len(value) <= hi:
        errors.append(
            FieldError(name, f"{label} must be between {lo} and {hi} characters")
        )


def validate_job_details(details: JobDetails) -> ValidationResult:
    """Check *details* against the form constraints.

    Each field is checked independently, so the result lists every field
    that is out of range rather than stopping at the first.
    """
    errors: list[FieldError] = []

    if not is_valid_url(details.url):
        errors.append(FieldError("url", "Job URL must be a valid URL"))

    _check_length(errors, "company", "Company name", details.company)
    _check_length(errors, "title", "Job title", details.title)
    _check_length(errors, "description", "Job description", details.description)

    return ValidationResult(errors=errors)
