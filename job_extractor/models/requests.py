"""Pydantic request models for the extraction endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    """Open *url* in a browser page and extract job details from it."""

    url: str = Field(..., min_length=1)
    # Extra settle time after navigation, for pages that render late.
    wait_ms: int = Field(default=0, ge=0, le=30_000)


class ResolveRequest(BaseModel):
    """Ask which extractor would handle *url*, without loading it."""

    url: str = Field(..., min_length=1)
