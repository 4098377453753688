"""Arbetsförmedlingen (Swedish Public Employment Service) extractor.

Handles Platsbanken job ads at
``arbetsformedlingen.se/platsbanken/annonser/<id>``. Platsbanken is an
Angular application, so the ad body is rendered after the initial page
load and the extractor waits for the title before reading the DOM.

Selector notes: ``#pb-company-name`` and the ``data-read-assistance-title``
attribute are semantic hooks that have been stable across redesigns; the
class-based description selectors are kept as fallbacks.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from job_extractor.extractors.base import BaseExtractor
from job_extractor.models.job_details import JobDetails, JobPlatform

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

_SELECTORS = {
    "title": [
        "h1[data-read-assistance-title]",
        "[data-read-assistance-title]",
        "h1.job-title",
        "h1",
    ],
    "company": [
        "h2#pb-company-name",
        "#pb-company-name",
        '[id*="company-name"]',
    ],
    "location": [
        "#pb-job-location",
        '[id*="job-location"]',
        ".pb-job-location",
    ],
    "description": [
        ".section.job-description",
        ".job-description",
        '[class*="job-description"]',
        '[class*="description"]',
    ],
    "skills": [
        "lib-pb-feature-job-qualifications .skill-item",
        "lib-pb-feature-job-qualifications span",
        '[class*="qualification"] .skill-item',
        '[class*="skill"]',
    ],
}

_PRIMARY_WAIT_SELECTOR = "[data-read-assistance-title]"


class ArbetsformedlingenExtractor(BaseExtractor):
    """Extractor for Arbetsförmedlingen Platsbanken job ads."""

    id = JobPlatform.ARBETSFORMEDLINGEN.value
    name = "Arbetsförmedlingen"
    url_patterns = (
        re.compile(r"^https?://(www\.)?arbetsformedlingen\.se/platsbanken/annonser/\d+"),
    )

    async def extract(self, page: "Page") -> JobDetails | None:
        url = page.url
        await self.wait_for_content(page, _PRIMARY_WAIT_SELECTOR)

        title = await self.query_text(page, _SELECTORS["title"])
        if not title:
            logger.info(
                "No job title found on Platsbanken ad",
                extra={"target_url": url, "extractor_id": self.id},
            )
            return None

        return self.build_details(
            url,
            title=title,
            company=await self.query_text(page, _SELECTORS["company"]) or "",
            location=await self.query_text(page, _SELECTORS["location"]),
            description=await self.query_block_text(page, _SELECTORS["description"]) or "",
            # Qualification markup varies; take the first selector that yields skills.
            skills=await self.query_all_texts(
                page, _SELECTORS["skills"], first_match_only=True
            ),
        )
