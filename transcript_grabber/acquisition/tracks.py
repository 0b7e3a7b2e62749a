# transcript_grabber/acquisition/tracks.py
"""
Caption track selection.

Priority:
1. Human-authored English track (language starts with "en", kind != "asr")
2. Any English track
3. First available track
"""

from __future__ import annotations

from typing import Sequence

from transcript_grabber.acquisition.errors import NoTrackFound
from transcript_grabber.acquisition.schema import CaptionTrack


def _is_english(track: CaptionTrack) -> bool:
    return track.language_code.startswith("en")


def select_caption_track(tracks: Sequence[CaptionTrack]) -> CaptionTrack:
    """Pick exactly one track; never fails on a non-empty list."""
    if not tracks:
        raise NoTrackFound("No caption tracks to choose from")

    english_tracks = [track for track in tracks if _is_english(track)]

    authored = next((track for track in english_tracks if not track.is_auto_generated), None)
    if authored is not None:
        return authored

    if english_tracks:
        return english_tracks[0]

    return tracks[0]
