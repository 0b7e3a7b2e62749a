"""Transcript acquisition core: strategies, normalizer and runner."""

from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.document import derive_filename, extract_video_id, format_document
from transcript_grabber.acquisition.normalizer import normalize
from transcript_grabber.acquisition.runner import acquire, run_acquisition
from transcript_grabber.acquisition.timestamps import encode_timestamp
from transcript_grabber.acquisition.tracks import select_caption_track

__all__ = [
    "AcquisitionConfig",
    "acquire",
    "derive_filename",
    "encode_timestamp",
    "extract_video_id",
    "format_document",
    "normalize",
    "run_acquisition",
    "select_caption_track",
]
