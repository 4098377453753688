"""Configuration module: service settings."""

from job_extractor.config.settings import ExtractorSettings

__all__ = ["ExtractorSettings"]
