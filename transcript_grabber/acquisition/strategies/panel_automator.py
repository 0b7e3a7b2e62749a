# transcript_grabber/acquisition/strategies/panel_automator.py
"""
Strategy 2: open the transcript panel through the page UI, then read it.

Responsibility:
- Locate a "Show transcript" control, directly or inside the overflow menu
- Activate it and poll (bounded) for the panel to appear
- Delegate reading to the rendered_panel strategy

Inapplicable (None) when no control exists, the page fails while being driven,
or the panel never shows up within the polling window. A timeout is not an error.
This is the only strategy that mutates page state.
"""

from __future__ import annotations

import logging
from typing import Optional

from transcript_grabber.acquisition.errors import TranscriptError
from transcript_grabber.acquisition.page import PageElement, PageSnapshot
from transcript_grabber.acquisition.polling import Poller, PollState
from transcript_grabber.acquisition.schema import PlainTextPayload
from transcript_grabber.acquisition.strategies.base import AcquisitionContext
from transcript_grabber.acquisition.strategies.rendered_panel import PANEL_SELECTOR, read_panel


STRATEGY_NAME = "panel_automator"

# Most specific first
TRANSCRIPT_CONTROL_SELECTORS = (
    'button[aria-label*="transcript" i]',
    'button[aria-label*="Show transcript" i]',
    'yt-button-shape[aria-label*="transcript" i]',
    '[role="button"][aria-label*="transcript" i]',
    'ytd-menu-renderer yt-formatted-string:has-text("transcript")',
    'ytd-toggle-button-renderer[aria-label*="transcript" i]',
)
MORE_ACTIONS_SELECTOR = 'ytd-menu-renderer #button, ytd-menu-renderer button[aria-label*="More" i]'
MENU_ITEM_SELECTOR = "ytd-menu-service-item-renderer, tp-yt-paper-item"

KEYWORD = "transcript"


async def _mentions_transcript(element: PageElement, *, check_label: bool = True) -> bool:
    text = ((await element.text_content()) or "").lower()
    if KEYWORD in text:
        return True
    if not check_label:
        return False
    label = ((await element.get_attribute("aria-label")) or "").lower()
    return KEYWORD in label


async def find_transcript_control(page: PageSnapshot) -> Optional[PageElement]:
    for selector in TRANSCRIPT_CONTROL_SELECTORS:
        for element in await page.query_selector_all(selector):
            if await _mentions_transcript(element):
                return element
    return None


async def find_in_more_menu(context: AcquisitionContext) -> Optional[PageElement]:
    """Open the overflow menu and look for a transcript entry in it."""
    more_button = await context.page.query_selector(MORE_ACTIONS_SELECTOR)
    if more_button is None:
        return None

    context.log(logging.INFO, "Opening more-actions menu", strategy=STRATEGY_NAME, event_type="progress")
    await more_button.click()
    await context.config.sleep(context.config.menu_settle_delay)

    for item in await context.page.query_selector_all(MENU_ITEM_SELECTOR):
        if await _mentions_transcript(item, check_label=False):
            return item
    return None


async def _read_after_settle(context: AcquisitionContext, panel: PageElement) -> Optional[PlainTextPayload]:
    await context.config.sleep(context.config.panel_settle_delay)
    return await read_panel(panel)


async def _open_and_read(context: AcquisitionContext) -> Optional[PlainTextPayload]:
    page = context.page
    config = context.config

    context.log(logging.INFO, "Attempting to open transcript panel", strategy=STRATEGY_NAME, event_type="start")

    panel = await page.query_selector(PANEL_SELECTOR)
    if panel is not None:
        # Still empty when rendered_panel looked at it: read now, then once more after settling
        payload = await read_panel(panel)
        if payload is None:
            payload = await _read_after_settle(context, panel)
        context.log(
            logging.INFO,
            "Transcript panel already open",
            strategy=STRATEGY_NAME,
            event_type="success" if payload else "inapplicable",
        )
        return payload

    control = await find_transcript_control(page)
    if control is None:
        control = await find_in_more_menu(context)
    if control is None:
        context.log(logging.INFO, "No transcript control found", strategy=STRATEGY_NAME, event_type="inapplicable")
        return None

    await control.click()

    poller: Poller[PageElement] = Poller(
        lambda: page.query_selector(PANEL_SELECTOR),
        interval=config.poll_interval,
        max_attempts=config.poll_attempts,
        sleep=config.sleep,
    )
    panel = await poller.run()

    if poller.state is PollState.TIMED_OUT or panel is None:
        context.log(
            logging.WARNING,
            "Transcript panel did not open",
            strategy=STRATEGY_NAME,
            event_type="inapplicable",
            metadata={"poll_attempts": poller.attempts},
        )
        return None

    payload = await _read_after_settle(context, panel)
    context.log(
        logging.INFO,
        "Transcript panel opened" if payload else "Transcript panel opened but empty",
        strategy=STRATEGY_NAME,
        event_type="success" if payload else "inapplicable",
        metadata={"poll_attempts": poller.attempts},
    )
    return payload


async def attempt(context: AcquisitionContext) -> Optional[PlainTextPayload]:
    # Page errors (detached controls, closed menus) before any resource is committed to mean inapplicable
    try:
        return await _open_and_read(context)
    except TranscriptError:
        raise
    except Exception as exc:
        context.log(
            logging.WARNING,
            "Opening transcript panel failed unexpectedly",
            strategy=STRATEGY_NAME,
            event_type="inapplicable",
            metadata={"exception": str(exc)},
        )
        return None
