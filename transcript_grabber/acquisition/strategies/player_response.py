# transcript_grabber/acquisition/strategies/player_response.py
"""
Strategy 3: embedded player metadata.

Responsibility:
- Locate the ytInitialPlayerResponse object (inline scripts, then the global)
- Read its caption track list and select one track
- Fetch that track's caption markup

Inapplicable (None) when no player response exists on the page.
Raises NoCaptionsAvailable when the response lists no caption tracks; the
runner treats that as "try the next strategy". Once a track is selected,
fetch failures and empty bodies are hard errors.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urljoin, urlsplit, urlunsplit

from pydantic import ValidationError

from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.errors import NoCaptionsAvailable
from transcript_grabber.acquisition.schema import CaptionTrack, MarkupPayload
from transcript_grabber.acquisition.strategies.base import AcquisitionContext, fetch_text
from transcript_grabber.acquisition.tracks import select_caption_track


STRATEGY_NAME = "player_response"

PLAYER_RESPONSE_VAR = "ytInitialPlayerResponse"

# Each pattern ends right before the opening brace of the JSON object
PLAYER_RESPONSE_PATTERNS = (
    re.compile(r"ytInitialPlayerResponse\s*=\s*(?=\{)"),
    re.compile(r'ytInitialPlayerResponse"\s*:\s*(?=\{)'),
    re.compile(r'"ytInitialPlayerResponse"\s*:\s*(?=\{)'),
)

_DECODER = json.JSONDecoder()


def parse_player_response(script: str) -> Optional[Dict[str, Any]]:
    """Decode the player response object embedded in one script's text."""
    if PLAYER_RESPONSE_VAR not in script:
        return None

    for pattern in PLAYER_RESPONSE_PATTERNS:
        for match in pattern.finditer(script):
            try:
                value, _ = _DECODER.raw_decode(script, match.end())
            except json.JSONDecodeError:
                continue
            if isinstance(value, dict):
                return value
    return None


async def find_player_response(context: AcquisitionContext) -> Optional[Dict[str, Any]]:
    for script in await context.page.script_texts():
        player_response = parse_player_response(script)
        if player_response is not None:
            context.log(logging.INFO, "Extracted player response from script", strategy=STRATEGY_NAME, event_type="progress")
            return player_response

    value = await context.page.global_value(PLAYER_RESPONSE_VAR)
    if isinstance(value, dict):
        context.log(logging.INFO, "Found player response as global variable", strategy=STRATEGY_NAME, event_type="progress")
        return value
    return None


def caption_tracks(player_response: Dict[str, Any]) -> List[CaptionTrack]:
    """Valid caption tracks listed in a player response, in listed order."""
    entries: Any = player_response
    for key in ("captions", "playerCaptionsTracklistRenderer", "captionTracks"):
        if not isinstance(entries, dict):
            return []
        entries = entries.get(key)
    if not isinstance(entries, list):
        return []

    tracks: List[CaptionTrack] = []
    for entry in entries:
        try:
            tracks.append(CaptionTrack.model_validate(entry))
        except ValidationError:
            continue
    return tracks


def caption_url(track: CaptionTrack, config: AcquisitionConfig) -> str:
    """Absolute https URL for a track, with a format parameter."""
    url = track.source_url
    scheme = urlsplit(url).scheme
    if not scheme:
        url = urljoin(config.host_root + "/", url)
    elif scheme == "http":
        url = "https" + url[len("http"):]

    parts = urlsplit(url)
    if "fmt" not in parse_qs(parts.query, keep_blank_values=True):
        fmt = f"fmt={config.caption_format}"
        url = urlunsplit(parts._replace(query=f"{parts.query}&{fmt}" if parts.query else fmt))
    return url


async def attempt(context: AcquisitionContext) -> Optional[MarkupPayload]:
    player_response = await find_player_response(context)
    if player_response is None:
        context.log(logging.INFO, "No player response found", strategy=STRATEGY_NAME, event_type="inapplicable")
        return None

    tracks = caption_tracks(player_response)
    if not tracks:
        raise NoCaptionsAvailable("No captions found in player response")

    context.log(
        logging.INFO,
        f"Found {len(tracks)} caption tracks",
        strategy=STRATEGY_NAME,
        event_type="progress",
        metadata={"tracks": [{"language": t.language_code, "kind": t.kind, "name": t.display_name} for t in tracks]},
    )

    track = select_caption_track(tracks)
    url = caption_url(track, context.config)

    context.log(
        logging.INFO,
        "Using caption track",
        strategy=STRATEGY_NAME,
        event_type="track_selected",
        metadata={"language": track.language_code, "kind": track.kind, "name": track.display_name},
    )

    markup = await fetch_text(context, url, strategy=STRATEGY_NAME, what="caption track")
    return MarkupPayload(markup=markup)
