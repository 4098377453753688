"""Ordered extractor registry.

Extractors are consulted in registration order and the first one whose
``matches`` accepts the URL wins, so registration order is the priority
list. The manual fallback matches everything and must be registered last.
The registry is built once at startup and only read afterwards.
"""

from __future__ import annotations

import logging
from typing import Iterator

from job_extractor.extractors.arbetsformedlingen import ArbetsformedlingenExtractor
from job_extractor.extractors.base import DEFAULT_CONTENT_TIMEOUT_MS, BaseExtractor
from job_extractor.extractors.linkedin import LinkedInExtractor
from job_extractor.extractors.manual import ManualExtractor

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Priority-ordered collection of extractors."""

    def __init__(self) -> None:
        self._extractors: list[BaseExtractor] = []

    def register(self, extractor: BaseExtractor) -> None:
        """Append *extractor* at the lowest priority.

        Not safe to call while extractions are running; register everything
        during startup.
        """
        self._extractors.append(extractor)
        logger.info(
            "Registered extractor '%s' at priority %d",
            extractor.id,
            len(self._extractors) - 1,
        )

    def find_extractor(self, url: str) -> BaseExtractor | None:
        """Return the first registered extractor that matches *url*.

        Returns ``None`` only when nothing matches, which cannot happen once
        the manual fallback is registered.
        """
        for extractor in self._extractors:
            if extractor.matches(url):
                return extractor
        return None

    def get(self, extractor_id: str) -> BaseExtractor | None:
        """Return the first extractor registered under *extractor_id*."""
        for extractor in self._extractors:
            if extractor.id == extractor_id:
                return extractor
        return None

    def list_extractors(self) -> list[BaseExtractor]:
        """Return the registered extractors in priority order."""
        return list(self._extractors)

    def is_empty(self) -> bool:
        return not self._extractors

    def __len__(self) -> int:
        return len(self._extractors)

    def __iter__(self) -> Iterator[BaseExtractor]:
        return iter(list(self._extractors))


def default_registry(
    content_timeout_ms: int = DEFAULT_CONTENT_TIMEOUT_MS,
) -> ExtractorRegistry:
    """Build the registry with every built-in extractor, fallback last."""
    registry = ExtractorRegistry()
    registry.register(LinkedInExtractor(content_timeout_ms))
    registry.register(ArbetsformedlingenExtractor(content_timeout_ms))
    registry.register(ManualExtractor(content_timeout_ms))
    return registry
