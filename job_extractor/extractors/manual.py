"""Manual-entry fallback extractor.

Matches every URL and never returns ``None``: it scrapes whatever generic
job data the page exposes and leaves the rest empty for the user to fill
in. Sources, in priority order per field:

1. Schema.org ``JobPosting`` JSON-LD (many ATS pages embed it for search
   engines).
2. Open Graph / standard meta tags.
3. The document ``<title>`` and visible main/body text.

Because arbitrary pages vary widely, every source is best-effort: a source
that fails to read is logged and skipped rather than failing the whole
extraction.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from job_extractor.extractors.base import BaseExtractor
from job_extractor.models.job_details import JobDetails, JobPlatform
from job_extractor.models.normalizer import (
    clean_text,
    normalize_block_text,
    strip_html,
    truncate,
)
from job_extractor.models.validation import JOB_DETAILS_CONSTRAINTS

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Generic selectors
# ---------------------------------------------------------------------------
_SELECTORS = {
    "title": [
        'meta[property="og:title"]',
        'meta[name="twitter:title"]',
    ],
    "company": [
        'meta[property="og:site_name"]',
        'meta[name="application-name"]',
    ],
    "description": [
        'meta[property="og:description"]',
        'meta[name="description"]',
    ],
    "body": [
        "main",
        '[role="main"]',
        "article",
        "body",
    ],
}

_JSON_LD_SELECTOR = 'script[type="application/ld+json"]'


class ManualExtractor(BaseExtractor):
    """Fallback extractor: always matches, always returns a record."""

    id = JobPlatform.MANUAL.value
    name = "Manual Entry"

    def matches(self, url: str) -> bool:
        return True

    async def extract(self, page: "Page") -> JobDetails | None:
        url = page.url
        posting = await self._extract_json_ld(page)

        title = (
            self._from_json_ld(posting, "title")
            or await self._safe_query(page, "title")
            or await self._document_title(page)
            or ""
        )
        company = (
            self._from_json_ld(posting, "company")
            or await self._safe_query(page, "company")
            or ""
        )
        description = (
            self._from_json_ld(posting, "description")
            or await self._safe_query(page, "description")
            or await self._body_text(page)
            or ""
        )

        return self.build_details(
            url,
            title=title,
            company=company,
            location=self._from_json_ld(posting, "location"),
            description=truncate(
                description, JOB_DETAILS_CONSTRAINTS["description_max_length"]
            ),
            is_manual=True,
        )

    def create_template(self, url: str) -> JobDetails:
        """Return an empty manual-entry record for *url*."""
        return self.build_details(url, title="", is_manual=True)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _extract_json_ld(self, page: "Page") -> dict:
        """Return the first JobPosting JSON-LD object on the page, or ``{}``."""
        try:
            elements = await page.query_selector_all(_JSON_LD_SELECTOR)
            for el in elements:
                raw = await el.text_content()
                if not raw:
                    continue
                try:
                    data = json.loads(raw)
                except (json.JSONDecodeError, ValueError):
                    continue

                posting = _find_job_posting(data)
                if posting:
                    return posting
        except Exception:
            logger.debug("Failed to extract JSON-LD from page", exc_info=True)
        return {}

    def _from_json_ld(self, data: dict, field: str) -> str | None:
        """Read *field* from a JSON-LD JobPosting object."""
        if not data:
            return None

        if field == "title":
            return _as_text(data.get("title")) or _as_text(data.get("name"))
        if field == "company":
            org = data.get("hiringOrganization")
            if isinstance(org, dict):
                return _as_text(org.get("name"))
            return _as_text(org)
        if field == "location":
            return self._parse_job_location(data.get("jobLocation"))
        if field == "description":
            raw = data.get("description")
            if isinstance(raw, str) and raw.strip():
                text = normalize_block_text(strip_html(raw))
                return text or None
        return None

    def _parse_job_location(self, value: object) -> str | None:
        """Parse a JSON-LD jobLocation value into a location string."""
        if isinstance(value, list):
            # Take the first location
            value = value[0] if value else None
        if isinstance(value, dict):
            address = value.get("address", value)
            if isinstance(address, dict):
                country = address.get("addressCountry", "")
                if isinstance(country, dict):
                    country = country.get("name", "")
                parts = [
                    address.get("addressLocality", ""),
                    address.get("addressRegion", ""),
                    country,
                ]
                combined = ", ".join(p for p in parts if isinstance(p, str) and p)
                return combined or None
            return _as_text(address)
        return _as_text(value)

    async def _safe_query(self, page: "Page", field: str) -> str | None:
        try:
            return await self.query_text(page, _SELECTORS[field])
        except Exception:
            logger.warning(
                "Failed to read generic field '%s'", field, exc_info=True
            )
            return None

    async def _document_title(self, page: "Page") -> str | None:
        try:
            return clean_text(await page.title())
        except Exception:
            logger.warning("Failed to read document title", exc_info=True)
            return None

    async def _body_text(self, page: "Page") -> str | None:
        try:
            return await self.query_block_text(page, _SELECTORS["body"])
        except Exception:
            logger.warning("Failed to read page body text", exc_info=True)
            return None


def _find_job_posting(data: Any) -> dict | None:
    """Locate a JobPosting object in a parsed JSON-LD payload.

    Handles top-level lists and ``@graph`` containers.
    """
    if isinstance(data, list):
        for item in data:
            found = _find_job_posting(item)
            if found:
                return found
        return None
    if not isinstance(data, dict):
        return None

    types = data.get("@type")
    if types == "JobPosting" or (isinstance(types, list) and "JobPosting" in types):
        return data
    if "@graph" in data:
        return _find_job_posting(data["@graph"])
    return None


def _as_text(value: object) -> str | None:
    if isinstance(value, str):
        return clean_text(value)
    return None
