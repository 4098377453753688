"""LinkedIn job posting extractor.

Handles both the public job view (``linkedin.com/jobs/...``) and job pages
reached through a member profile (``linkedin.com/in/<name>/jobs/...``).
LinkedIn serves two layouts: the logged-out "topcard" page and the
logged-in "unified top card". Selectors are listed per field in priority
order so either layout resolves.
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

# ---------------------------------------------------------------------------
# CSS selectors for LinkedIn job fields (priority order)
# ---------------------------------------------------------------------------
_SELECTORS = {
    "title": [
        ".topcard__title",
        ".job-details-jobs-unified-top-card__job-title",
        'h1[class*="job-title"]',
        'h2[class*="job-title"]',
    ],
    "company": [
        ".topcard__org-name-link",
        ".job-details-jobs-unified-top-card__company-name",
        'a[data-tracking-control-name="public_jobs_topcard-org-name"]',
        ".topcard__flavor--company",
        '[class*="company-name"]',
    ],
    "location": [
        ".topcard__flavor--bullet",
        ".job-details-jobs-unified-top-card__bullet",
        ".job-details-jobs-unified-top-card__primary-description-container .tvm__text",
    ],
    "description": [
        ".description__text",
        ".show-more-less-html__markup",
        '[class*="job-description"]',
        ".jobs-description__content",
    ],
    "skills": [
        ".job-details-skill-match-status-list__skill",
        '[class*="skill-pill"]',
        '[class*="skill-badge"]',
    ],
}

# The job view hydrates client-side; any title selector confirms it rendered.
_PRIMARY_WAIT_SELECTOR = ", ".join(_SELECTORS["title"])


class LinkedInExtractor(BaseExtractor):
    """Extractor for LinkedIn job postings."""

    id = JobPlatform.LINKEDIN.value
    name = "LinkedIn"
    url_patterns = (
        re.compile(r"^https?://(www\.)?linkedin\.com/jobs/.+"),
        re.compile(r"^https?://(www\.)?linkedin\.com/in/.+/jobs/.+"),
    )

    async def extract(self, page: "Page") -> JobDetails | None:
        url = page.url
        await self.wait_for_content(page, _PRIMARY_WAIT_SELECTOR)

        title = await self.query_text(page, _SELECTORS["title"])
        if not title:
            logger.info(
                "No job title found on LinkedIn page",
                extra={"target_url": url, "extractor_id": self.id},
            )
            return None

        return self.build_details(
            url,
            title=title,
            company=await self.query_text(page, _SELECTORS["company"]) or "",
            location=await self.query_text(page, _SELECTORS["location"]),
            description=await self.query_block_text(page, _SELECTORS["description"]) or "",
            skills=await self.query_all_texts(page, _SELECTORS["skills"]),
        )
