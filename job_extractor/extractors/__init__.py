"""Job extractors package: ordered registry + platform strategies."""

from job_extractor.extractors.arbetsformedlingen import ArbetsformedlingenExtractor
from job_extractor.extractors.base import BaseExtractor
from job_extractor.extractors.linkedin import LinkedInExtractor
from job_extractor.extractors.manual import ManualExtractor
from job_extractor.extractors.registry import ExtractorRegistry, default_registry

__all__ = [
    "ArbetsformedlingenExtractor",
    "BaseExtractor",
    "ExtractorRegistry",
    "LinkedInExtractor",
    "ManualExtractor",
    "default_registry",
]
