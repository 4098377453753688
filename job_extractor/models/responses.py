"""HTTP response models for the extraction service.

Every response body is an ``ApiResponse`` envelope:
{ success: bool, data: T | None, error: str | None, meta: dict | None }
The remaining models are the ``data`` payloads of the individual
endpoints.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all API responses."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None


class ExtractorInfo(BaseModel):
    """A registered extractor as listed by ``GET /api/v1/extractors``."""

    id: str
    name: str
    url_patterns: list[str] = Field(default_factory=list)


class ResolveResult(BaseModel):
    extractor_id: str
    name: str


class HealthStatus(BaseModel):
    status: str = "healthy"
    browser: dict = Field(default_factory=dict)
    extractors: list[str] = Field(default_factory=list)
