# transcript_grabber/acquisition/normalizer.py
"""
Normalizer: every raw payload converges to the canonical transcript.

Canonical form is one segment per line, "[timestamp] text" or "text",
in playback order. Plain-text payloads are already canonical; markup
payloads (timedtext XML, classic or srv3) are parsed structurally.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import List, Optional

from transcript_grabber.acquisition.errors import MalformedMarkup, NoTranscriptContent, UnknownFormat
from transcript_grabber.acquisition.schema import (
    MarkupPayload,
    PlainTextPayload,
    RawTranscriptPayload,
    TranscriptLine,
)
from transcript_grabber.acquisition.timestamps import encode_timestamp, parse_offset


_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_FRAGMENT_ROOT = "transcript-fragment"

# Caption text is frequently escaped twice; the parser undoes the first level.
_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)

# tag -> (offset attribute, seconds per unit)
_SEGMENT_TAGS = {
    "text": ("start", 1.0),  # classic timedtext
    "p": ("t", 0.001),  # srv3
}


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def _parse_tree(markup: str) -> ET.Element:
    body = _XML_DECLARATION.sub("", markup, count=1)
    try:
        # Synthetic root so bare fragments (<text/><text/>) parse as well as documents
        return ET.fromstring(f"<{_FRAGMENT_ROOT}>{body}</{_FRAGMENT_ROOT}>")
    except ET.ParseError as exc:
        raise MalformedMarkup(f"Caption markup could not be parsed: {exc}") from exc


def _segment_timestamp(element: ET.Element, attribute: str, scale: float) -> Optional[str]:
    offset = parse_offset(element.get(attribute), scale)
    if offset is None:
        return None
    return encode_timestamp(offset)


def parse_markup(markup: str) -> List[TranscriptLine]:
    """Parse caption markup into ordered transcript lines, skipping blank segments."""
    root = _parse_tree(markup)

    lines: List[TranscriptLine] = []
    for element in root.iter():
        segment_format = _SEGMENT_TAGS.get(element.tag)
        if segment_format is None:
            continue
        attribute, scale = segment_format

        text = decode_entities("".join(element.itertext()))
        text = _WHITESPACE.sub(" ", text).strip()
        if not text:
            continue

        lines.append(TranscriptLine(timestamp=_segment_timestamp(element, attribute, scale), text=text))

    if not lines:
        raise NoTranscriptContent("No transcript text found in caption markup")
    return lines


def render_lines(lines: List[TranscriptLine]) -> str:
    return "\n".join(line.render() for line in lines)


def normalize(payload: RawTranscriptPayload) -> str:
    """Convert a raw payload into canonical transcript text."""
    if isinstance(payload, PlainTextPayload):
        return payload.text.strip()
    if isinstance(payload, MarkupPayload):
        return render_lines(parse_markup(payload.markup))
    raise UnknownFormat(f"Unknown transcript payload type: {type(payload).__name__}")


# High-Level Intent
# normalizer.py is the single convergence point of all strategies.
# The payload type decides the branch; content is never sniffed.

# Edge Cases
# Whitespace-only segments are dropped before rendering.
# Unparsable or negative start offsets produce a line without a timestamp,
# one malformed segment never aborts the transcript.
# Inner newlines of multi-line captions are collapsed so each segment stays
# on one canonical line.
