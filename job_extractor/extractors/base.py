"""Abstract base class for platform-specific job extractors.

Each extractor declares which page URLs it handles (``matches``) and how to
read a job posting out of an already-loaded page (``extract``). ``matches``
only looks at the URL string so the registry can resolve an extractor
without touching the DOM. ``extract`` is the only method that reads the
page; it is async because some platforms render their content lazily.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from job_extractor.models.job_details import JobDetails
from job_extractor.models.normalizer import clean_text, normalize_block_text, unique

if TYPE_CHECKING:
    from playwright.async_api import ElementHandle, Page

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TIMEOUT_MS = 5000


class BaseExtractor(ABC):
    """Abstract base extractor that all platform extractors extend.

    Subclasses MUST set ``id``, ``name`` and ``url_patterns`` as class
    attributes and implement ``extract``. Extractors hold no per-page state,
    so a single instance can serve overlapping extractions.
    """

    id: str
    name: str
    url_patterns: tuple[re.Pattern[str], ...] = ()

    def __init__(self, content_timeout_ms: int = DEFAULT_CONTENT_TIMEOUT_MS) -> None:
        self.content_timeout_ms = content_timeout_ms

    def matches(self, url: str) -> bool:
        """Return ``True`` if this extractor handles *url*."""
        return any(pattern.match(url) for pattern in self.url_patterns)

    @abstractmethod
    async def extract(self, page: "Page") -> JobDetails | None:
        """Extract job details from *page*.

        Returns ``None`` when the page matched but its required fields
        could not be located. Unexpected failures while reading the page
        propagate to the caller.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r})"

    # ------------------------------------------------------------------
    # Page helpers
    # ------------------------------------------------------------------

    async def wait_for_content(
        self,
        page: "Page",
        selector: str,
        timeout: int | None = None,
    ) -> bool:
        """Wait for a CSS selector to appear on the page.

        Uses Playwright's ``wait_for_selector`` bounded by *timeout*
        (milliseconds, default ``content_timeout_ms``). Returns ``False``
        instead of raising when the selector does not appear in time, so
        callers read whatever is present.
        """
        timeout = self.content_timeout_ms if timeout is None else timeout
        if timeout <= 0:
            return False
        try:
            await page.wait_for_selector(selector, timeout=timeout)
        except PlaywrightTimeoutError:
            logger.debug(
                "Selector %r not found within %dms on %s",
                selector,
                timeout,
                page.url,
            )
            return False
        return True

    async def query_text(self, page: "Page", selectors: list[str]) -> str | None:
        """Return the first non-empty single-line text among *selectors*.

        Selectors are tried in order. ``<meta>`` selectors read the
        ``content`` attribute instead of the element text.
        """
        for selector in selectors:
            element = await page.query_selector(selector)
            if element is None:
                continue
            text = clean_text(await self._element_text(element, selector))
            if text:
                return text
        return None

    async def query_block_text(self, page: "Page", selectors: list[str]) -> str | None:
        """Return the first non-empty multi-line text among *selectors*.

        Uses the rendered ``inner_text`` so paragraphs and list items keep
        their line breaks.
        """
        for selector in selectors:
            element = await page.query_selector(selector)
            if element is None:
                continue
            raw = await element.inner_text()
            if raw:
                text = normalize_block_text(raw)
                if text:
                    return text
        return None

    async def query_all_texts(
        self,
        page: "Page",
        selectors: list[str],
        first_match_only: bool = False,
    ) -> list[str]:
        """Collect de-duplicated texts of every element matching *selectors*.

        With *first_match_only* the scan stops at the first selector that
        yields any text.
        """
        texts: list[str] = []
        for selector in selectors:
            for element in await page.query_selector_all(selector):
                text = await element.text_content()
                if text:
                    texts.append(text)
            if first_match_only and unique(texts):
                break
        return unique(texts)

    @staticmethod
    async def _element_text(element: "ElementHandle", selector: str) -> str | None:
        if selector.startswith("meta"):
            return await element.get_attribute("content")
        return await element.text_content()

    def build_details(self, url: str, **fields: object) -> JobDetails:
        """Build a ``JobDetails`` stamped with this extractor's platform id."""
        return JobDetails(url=url, platform=self.id, **fields)
