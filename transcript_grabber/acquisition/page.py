# transcript_grabber/acquisition/page.py
"""
Read-only view of the host page, as the strategies see it.

The acquisition core never touches a browser directly. It queries a
PageSnapshot; browser/playwright_page.py provides the live implementation
and tests provide an in-memory one.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence


class PageElement(Protocol):
    """One node of the host page. Matches the subset of Playwright's ElementHandle we use."""

    async def text_content(self) -> Optional[str]: ...

    async def get_attribute(self, name: str) -> Optional[str]: ...

    async def query_selector(self, selector: str) -> Optional["PageElement"]: ...

    async def query_selector_all(self, selector: str) -> List["PageElement"]: ...

    async def click(self) -> None: ...


class PageSnapshot(Protocol):
    """Queries the strategies issue against the current page state."""

    @property
    def url(self) -> str: ...

    async def query_selector(self, selector: str) -> Optional[PageElement]: ...

    async def query_selector_all(self, selector: str) -> List[PageElement]: ...

    async def script_texts(self) -> List[str]:
        """Text content of every inline <script> element, in document order."""
        ...

    async def global_value(self, name: str) -> Any:
        """JSON value of window[name], or None when undefined."""
        ...


async def element_text(element: Optional[PageElement]) -> str:
    if element is None:
        return ""
    return ((await element.text_content()) or "").strip()


async def first_match(root: PageSnapshot | PageElement, selectors: Sequence[str]) -> Optional[PageElement]:
    """First element matched by any selector, trying selectors in order."""
    for selector in selectors:
        element = await root.query_selector(selector)
        if element is not None:
            return element
    return None


TITLE_SELECTORS = (
    "h1.ytd-watch-metadata yt-formatted-string",
    "h1.title .ytd-video-primary-info-renderer",
    "h1.style-scope.ytd-watch-metadata",
    "#title h1",
    ".title.ytd-video-primary-info-renderer",
    "ytd-watch-metadata h1",
)


async def read_video_title(page: PageSnapshot) -> Optional[str]:
    """Video title as displayed on the page, or None if no title node has text."""
    for selector in TITLE_SELECTORS:
        title = await element_text(await page.query_selector(selector))
        if title:
            return title
    return None
