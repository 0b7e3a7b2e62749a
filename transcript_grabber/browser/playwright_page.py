# transcript_grabber/browser/playwright_page.py
"""
Live PageSnapshot backed by a Playwright page.

Playwright's ElementHandle already provides text_content / get_attribute /
query_selector / query_selector_all / click, so element handles are passed
through untouched; only page-level script and global lookups need
evaluate() calls.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional

from playwright.async_api import ElementHandle, Page, async_playwright


WATCH_READY_SELECTOR = "ytd-watch-flexy, ytd-watch-metadata"
NAVIGATION_TIMEOUT_MS = 30000
READY_TIMEOUT_MS = 15000

_SCRIPT_TEXTS_JS = "() => Array.from(document.querySelectorAll('script'), s => s.textContent || '')"
_GLOBAL_VALUE_JS = "(name) => (typeof window[name] === 'undefined' ? null : window[name])"


class PlaywrightPage:
    """PageSnapshot over a Playwright page."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def query_selector(self, selector: str) -> Optional[ElementHandle]:
        return await self._page.query_selector(selector)

    async def query_selector_all(self, selector: str) -> List[ElementHandle]:
        return await self._page.query_selector_all(selector)

    async def script_texts(self) -> List[str]:
        return await self._page.evaluate(_SCRIPT_TEXTS_JS)

    async def global_value(self, name: str) -> Any:
        return await self._page.evaluate(_GLOBAL_VALUE_JS, name)


@asynccontextmanager
async def open_watch_page(url: str, *, headless: bool = True) -> AsyncIterator[PlaywrightPage]:
    """Launch Chromium, open a watch page and wait for its metadata to render."""
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=headless)
        try:
            context = await browser.new_context(locale="en-US")
            page = await context.new_page()
            await page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS)
            await page.wait_for_selector(WATCH_READY_SELECTOR, timeout=READY_TIMEOUT_MS)
            yield PlaywrightPage(page)
        finally:
            await browser.close()
