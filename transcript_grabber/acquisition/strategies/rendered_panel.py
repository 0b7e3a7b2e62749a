# transcript_grabber/acquisition/strategies/rendered_panel.py
"""
Strategy 1: read an already-rendered transcript panel.

Responsibility:
- Find the transcript panel in the current page state
- Read each segment's text and optional timestamp label
- Emit "[timestamp] text" lines as a plain-text payload

Inapplicable (None) when no panel is present, it has no non-empty segments,
or the page fails while it is being read.
No network calls, no page mutation.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from transcript_grabber.acquisition.errors import InvalidTimestamp, TranscriptError
from transcript_grabber.acquisition.page import PageElement, element_text, first_match
from transcript_grabber.acquisition.schema import PlainTextPayload, TranscriptLine
from transcript_grabber.acquisition.strategies.base import AcquisitionContext
from transcript_grabber.acquisition.timestamps import decode_timestamp, encode_timestamp


STRATEGY_NAME = "rendered_panel"

PANEL_SELECTOR = "ytd-transcript-renderer"
SEGMENT_SELECTOR = "ytd-transcript-segment-renderer"
SEGMENT_TEXT_SELECTORS = (".segment-text", '[class*="cue-group"] [class*="cue"]')
SEGMENT_TIMESTAMP_SELECTORS = (".segment-timestamp", '[class*="timestamp"]')


def canonical_label(label: str) -> str:
    """Re-encode a panel label (e.g. "1:05") to fixed width; keep unknown labels verbatim."""
    try:
        return encode_timestamp(decode_timestamp(label))
    except InvalidTimestamp:
        return label


async def _read_segment(segment: PageElement) -> Optional[TranscriptLine]:
    text = await element_text(await first_match(segment, SEGMENT_TEXT_SELECTORS))
    if not text:
        return None
    label = await element_text(await first_match(segment, SEGMENT_TIMESTAMP_SELECTORS))
    return TranscriptLine(timestamp=canonical_label(label) if label else None, text=" ".join(text.split()))


async def read_panel(panel: PageElement) -> Optional[PlainTextPayload]:
    """Turn a rendered panel into a plain-text payload, or None if it has no text."""
    lines: List[TranscriptLine] = []
    for segment in await panel.query_selector_all(SEGMENT_SELECTOR):
        line = await _read_segment(segment)
        if line is not None:
            lines.append(line)

    if not lines:
        return None
    return PlainTextPayload(text="\n".join(line.render() for line in lines))


async def _read_open_panel(context: AcquisitionContext) -> Optional[PlainTextPayload]:
    panel = await context.page.query_selector(PANEL_SELECTOR)
    if panel is None:
        context.log(logging.INFO, "No transcript panel on page", strategy=STRATEGY_NAME, event_type="inapplicable")
        return None

    payload = await read_panel(panel)
    if payload is None:
        context.log(
            logging.INFO,
            "Transcript panel has no segments",
            strategy=STRATEGY_NAME,
            event_type="inapplicable",
        )
        return None

    context.log(
        logging.INFO,
        "Read transcript from open panel",
        strategy=STRATEGY_NAME,
        event_type="success",
        metadata={"characters": len(payload.text)},
    )
    return payload


async def attempt(context: AcquisitionContext) -> Optional[PlainTextPayload]:
    # Page errors before any resource is committed to mean inapplicable
    try:
        return await _read_open_panel(context)
    except TranscriptError:
        raise
    except Exception as exc:
        context.log(
            logging.WARNING,
            "Reading transcript panel failed unexpectedly",
            strategy=STRATEGY_NAME,
            event_type="inapplicable",
            metadata={"exception": str(exc)},
        )
        return None
