"""Pydantic Settings for the job extraction service.

All environment variables use the JOBEXTRACT_ prefix.
Example: JOBEXTRACT_PORT=8002, JOBEXTRACT_CONTENT_TIMEOUT_MS=8000
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ExtractorSettings(BaseSettings):
    """Extraction service configuration validated from environment variables."""

    # Service
    port: int = 8002
    log_level: str = "INFO"

    # Extraction
    content_timeout_ms: int = Field(default=5000, ge=0)  # Bounded wait for lazy DOM

    # Browser
    headless: bool = True
    navigation_timeout_ms: int = Field(default=30000, ge=1000)

    # Host messaging (CONTENT_SCRIPT_READY notifications)
    ready_callback_url: str | None = None
    callback_timeout_seconds: float = Field(default=5.0, gt=0)

    model_config = {"env_prefix": "JOBEXTRACT_"}
