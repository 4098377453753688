"""Shared test fixtures for the job extractor suite."""

from __future__ import annotations

import os

import pytest

from job_extractor.config.settings import ExtractorSettings
from job_extractor.extractors.registry import ExtractorRegistry, default_registry


# ---------------------------------------------------------------------------
# Keep ExtractorSettings independent of the developer's environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_extractor_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove JOBEXTRACT_* variables so settings fall back to defaults."""
    for key in list(os.environ):
        if key.startswith("JOBEXTRACT_"):
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ExtractorSettings:
    """Test settings with safe defaults."""
    return ExtractorSettings(content_timeout_ms=50, navigation_timeout_ms=1000)


@pytest.fixture
def registry(settings: ExtractorSettings) -> ExtractorRegistry:
    return default_registry(settings.content_timeout_ms)
