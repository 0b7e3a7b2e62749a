# transcript_grabber/acquisition/timestamps.py
"""
Timestamp codec: playback offsets in seconds <-> fixed-width clock tokens.

MM:SS below one hour, HH:MM:SS from one hour on. Components are floored.
"""

from __future__ import annotations

import math
import numbers
from typing import Optional

from transcript_grabber.acquisition.errors import InvalidTimestamp


HOUR = 3600


def encode_timestamp(seconds: float) -> str:
    """Render a non-negative offset as MM:SS or HH:MM:SS."""
    if isinstance(seconds, bool) or not isinstance(seconds, numbers.Real):
        raise InvalidTimestamp(f"Timestamp offset must be a number, got {seconds!r}")
    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidTimestamp(f"Timestamp offset must be finite and non-negative, got {seconds!r}")

    total = int(math.floor(seconds))
    hours, remainder = divmod(total, HOUR)
    minutes, secs = divmod(remainder, 60)

    if seconds >= HOUR:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def decode_timestamp(token: str) -> float:
    """
    Parse a clock token (M:SS, MM:SS, H:MM:SS, HH:MM:SS) back to seconds.

    Raises InvalidTimestamp for anything that is not a clock token.
    """
    parts = token.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise InvalidTimestamp(f"Not a timestamp token: {token!r}")

    values = [int(part) for part in parts]
    if values[-1] >= 60 or (len(values) == 3 and values[1] >= 60):
        raise InvalidTimestamp(f"Timestamp component out of range: {token!r}")

    if len(values) == 2:
        minutes, secs = values
        return float(minutes * 60 + secs)
    hours, minutes, secs = values
    return float(hours * HOUR + minutes * 60 + secs)


def parse_offset(value: Optional[str], scale: float = 1.0) -> Optional[float]:
    """
    Parse a start-offset attribute into seconds.

    scale converts the attribute's unit (1.0 for seconds, 0.001 for the
    millisecond offsets of srv3). Missing, unparsable, non-finite or negative
    values mean "no timestamp known" and return None.
    """
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number * scale
