"""Playwright browser session that loads pages for the content script.

A single headless Chromium instance is launched at service startup. Each
extraction gets a fresh browser context (isolated cookies and storage),
which is closed as soon as the extraction finishes.

The caller validates the requested URL; the session keeps the page on
public addresses afterwards. Navigation requests are routed through
``validate_url`` and aborted when rejected, and because redirects bypass
request routing the final ``page.url`` is checked again before the page
is handed out.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator

from playwright.async_api import Error as PlaywrightError

from job_extractor.middleware.error_handler import PageLoadError, ValidationError
from job_extractor.validators.url_validator import validate_url

if TYPE_CHECKING:
    from playwright.async_api import Page, Route

logger = logging.getLogger(__name__)

# Chromium flags for containerized / headless operation
CHROMIUM_ARGS: list[str] = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class BrowserSession:
    """Owns the Playwright process and one Chromium browser.

    Lifecycle
    ---------
    1. ``start()``: launch Playwright and Chromium.
    2. ``open_page(url)``: async context manager yielding a loaded page.
    3. ``shutdown()``: close the browser and stop Playwright.
    """

    def __init__(
        self,
        *,
        headless: bool = True,
        navigation_timeout_ms: int = 30_000,
    ) -> None:
        self._headless = headless
        self._navigation_timeout_ms = navigation_timeout_ms
        self._playwright: Any = None  # Playwright instance (lazy import)
        self._browser: Any = None
        self._pages_opened = 0

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        """Launch Playwright and a Chromium browser."""
        from playwright.async_api import async_playwright

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._headless,
            args=CHROMIUM_ARGS,
        )
        logger.info("Browser session started (headless=%s)", self._headless)

    @asynccontextmanager
    async def open_page(self, url: str, wait_ms: int = 0) -> AsyncIterator["Page"]:
        """Yield a page navigated to *url* in a fresh browser context.

        Raises
        ------
        PageLoadError
            If the session is not running or navigation fails.
        ValidationError
            If the page navigates or redirects to a non-public address.
        """
        if self._browser is None:
            raise PageLoadError("Browser session is not running")

        blocked: list[str] = []

        async def guard(route: "Route") -> None:
            request = route.request
            if request.is_navigation_request() and not await validate_url(request.url):
                # Blocked iframes only lose the frame; a blocked main frame fails the page
                if request.frame.parent_frame is None:
                    blocked.append(request.url)
                await route.abort("blockedbyclient")
                return
            await route.continue_()

        context = await self._browser.new_context()
        try:
            page = await context.new_page()
            await page.route("**/*", guard)
            try:
                await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=self._navigation_timeout_ms,
                )
            except PlaywrightError as exc:
                if blocked:
                    raise _blocked_navigation(url, blocked[0]) from exc
                logger.warning(
                    "Navigation failed",
                    extra={"target_url": url, "error_reason": str(exc)},
                )
                raise PageLoadError(f"Failed to load {url}") from exc

            if wait_ms:
                await asyncio.sleep(wait_ms / 1000)

            if blocked or not await validate_url(page.url):
                raise _blocked_navigation(url, blocked[0] if blocked else page.url)

            self._pages_opened += 1
            yield page
        finally:
            try:
                await context.close()
            except PlaywrightError:
                logger.debug("Error closing browser context for %s", url, exc_info=True)

    async def shutdown(self) -> None:
        """Close the browser and stop Playwright."""
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError:
                logger.debug("Error closing browser (may already be closed)", exc_info=True)
            self._browser = None

        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Browser session shut down")

    def get_stats(self) -> dict:
        """Return session statistics for the health endpoint."""
        return {"running": self.is_running, "pages_opened": self._pages_opened}


def _blocked_navigation(url: str, landed_on: str) -> ValidationError:
    logger.warning(
        "Navigation to non-public address blocked",
        extra={"target_url": url, "error_reason": landed_on},
    )
    return ValidationError("Page navigated to a non-public address", url=url)
