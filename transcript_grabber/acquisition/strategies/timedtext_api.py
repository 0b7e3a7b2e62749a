# transcript_grabber/acquisition/strategies/timedtext_api.py
"""
Strategy 4 (last resort): direct timedtext API.

Flow: list tracks -> take the first track's language -> fetch its captions.
There is nothing to fall back to after this strategy, so every failure is
raised to the runner.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from urllib.parse import urlencode

from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.errors import MalformedMarkup, NoCaptionsAvailable
from transcript_grabber.acquisition.schema import MarkupPayload
from transcript_grabber.acquisition.strategies.base import AcquisitionContext, fetch_text


STRATEGY_NAME = "timedtext_api"

DEFAULT_LANGUAGE = "en"


def track_list_url(video_id: str, config: AcquisitionConfig) -> str:
    return f"{config.timedtext_endpoint}?{urlencode({'type': 'list', 'v': video_id})}"


def caption_content_url(video_id: str, language_code: str, config: AcquisitionConfig) -> str:
    query = urlencode({"lang": language_code, "v": video_id, "fmt": config.caption_format})
    return f"{config.timedtext_endpoint}?{query}"


def first_track_language(listing: str) -> str:
    """Language code of the first <track> in a track listing."""
    try:
        root = ET.fromstring(listing)
    except ET.ParseError as exc:
        raise MalformedMarkup(f"Track listing could not be parsed: {exc}") from exc

    track = next(root.iter("track"), None)
    if track is None:
        raise NoCaptionsAvailable("No transcript tracks found via API")
    return track.get("lang_code") or DEFAULT_LANGUAGE


async def attempt(context: AcquisitionContext) -> MarkupPayload:
    context.log(logging.INFO, "Trying timedtext API", strategy=STRATEGY_NAME, event_type="start")

    listing = await fetch_text(
        context,
        track_list_url(context.video_id, context.config),
        strategy=STRATEGY_NAME,
        what="track listing",
    )
    language_code = first_track_language(listing)

    context.log(
        logging.INFO,
        "Using first listed track",
        strategy=STRATEGY_NAME,
        event_type="track_selected",
        metadata={"language": language_code},
    )

    markup = await fetch_text(
        context,
        caption_content_url(context.video_id, language_code, context.config),
        strategy=STRATEGY_NAME,
        what="caption content",
    )
    return MarkupPayload(markup=markup)
