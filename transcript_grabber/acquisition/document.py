# transcript_grabber/acquisition/document.py
"""
Output document contract: header + canonical transcript, and its filename.

Also resolves the video id from a page URL, which is how callers obtain
the id they pass to the runner.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from transcript_grabber.acquisition.errors import InvalidVideoId


UNKNOWN_TITLE = "Unknown Video"

# Covers watch, youtu.be, embeds, shorts
YOUTUBE_REGEX = re.compile(
    r"(?:https?://)?"
    r"(?:www\.|m\.)?"
    r"(?:youtube\.com|youtu\.be|youtube-nocookie\.com)"
    r"/(?:watch\?v=|embed/|v/|shorts/)?([^&\n?#/]+)"
)

_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")


def extract_video_id(url: str) -> str:
    """Video id of a YouTube URL; the v= query parameter wins over path forms."""
    url = url.strip()
    if not url:
        raise InvalidVideoId("No URL provided")

    video_ids = parse_qs(urlsplit(url).query).get("v")
    if video_ids and video_ids[0].strip():
        return video_ids[0].strip()

    match = YOUTUBE_REGEX.search(url)
    if match and match.group(1) != "watch":
        return match.group(1)
    raise InvalidVideoId(f"Could not extract video ID from URL: {url}")


def format_document(transcript: str, *, title: Optional[str], url: str) -> str:
    """The delivered text: a small header followed by the canonical transcript."""
    header = f"Title: {title or UNKNOWN_TITLE}\nURL: {url}\n\n--- TRANSCRIPT ---\n\n"
    return header + transcript


def sanitize_title(title: str) -> str:
    return _WHITESPACE.sub(" ", _UNSAFE_FILENAME_CHARS.sub("-", title)).strip()


def derive_filename(title: Optional[str], video_id: str) -> str:
    """Filesystem-safe "<title>.txt", or "transcript-<videoId>.txt" without a usable title."""
    safe_title = sanitize_title(title) if title else ""
    if safe_title:
        return f"{safe_title}.txt"
    return f"transcript-{video_id}.txt"
