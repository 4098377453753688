"""Headless browser session that loads pages for extraction."""

from job_extractor.browser.session import CHROMIUM_ARGS, BrowserSession

__all__ = ["CHROMIUM_ARGS", "BrowserSession"]
