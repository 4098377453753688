"""Normalized job posting record produced by the extractors.

``JobDetails`` is the single structured result that crosses the message
boundary. Platform extractors always fill ``title``; the manual/fallback
extractor may leave it empty and marks its records with ``is_manual``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class JobPlatform(str, Enum):
    """Identifiers of the built-in extractors."""

    LINKEDIN = "linkedin"
    ARBETSFORMEDLINGEN = "arbetsformedlingen"
    MANUAL = "manual"


class JobDetails(BaseModel):
    """Structured job posting data extracted from a loaded page."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    company: str = ""
    location: str | None = None
    description: str = ""
    skills: list[str] = Field(default_factory=list)
    url: str = Field(..., min_length=1)
    platform: str
    extracted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    is_manual: bool = False

    @model_validator(mode="after")
    def _require_title_for_extracted(self) -> "JobDetails":
        # Only the manual template may carry an empty title.
        if not self.is_manual and not self.title.strip():
            raise ValueError("title must not be empty for extracted job details")
        return self

    def to_message(self) -> dict:
        """Serialize for the message channel (camelCase keys, ISO timestamps)."""
        return self.model_dump(mode="json", by_alias=True)
