# transcript_grabber/acquisition/errors.py
"""
Error taxonomy for transcript acquisition.

Inapplicable strategies are not errors: they return None. Everything raised
from this module is a classified failure that carries a human-readable
message, a FailureType and suggested fixes.

    TranscriptError
    +-- InvalidInput            (InvalidTimestamp, InvalidVideoId)
    +-- StructuralParseFailure  (MalformedMarkup, NoTranscriptContent, UnknownFormat)
    +-- ResourceUnavailable     (NoCaptionsAvailable, NoTrackFound)
    +-- NetworkFailure          (TranscriptFetchFailed, EmptyTranscript)
    +-- NoTranscriptAvailable

The runner downgrades ResourceUnavailable to "try the next strategy";
every other subclass aborts the acquisition.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from transcript_grabber.acquisition.schema import FailureType, StrategyFailure

if TYPE_CHECKING:
    from transcript_grabber.acquisition.schema import AcquisitionDiagnostics


class TranscriptError(Exception):
    """Base class for every classified acquisition failure."""

    failure_type: FailureType = FailureType.SOURCE_ERROR
    cause: str = "transcript_error"
    default_fixes: tuple[str, ...] = ()

    def __init__(self, message: str, *, suggested_fixes: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggested_fixes = list(suggested_fixes) if suggested_fixes is not None else list(self.default_fixes)
        self.diagnostics: Optional[AcquisitionDiagnostics] = None

    def to_failure(self, strategy: str) -> StrategyFailure:
        return StrategyFailure(
            strategy=strategy,
            type=self.failure_type,
            cause=self.cause,
            message=self.message,
            suggested_fixes=self.suggested_fixes,
        )


# Input

class InvalidInput(TranscriptError):
    failure_type = FailureType.INPUT_ERROR
    cause = "invalid_input"


class InvalidTimestamp(InvalidInput, ValueError):
    cause = "invalid_timestamp"


class InvalidVideoId(InvalidInput, ValueError):
    cause = "invalid_video_id"
    default_fixes = ("Pass a youtube.com/watch?v=... or youtu.be/... URL",)


# Structure

class StructuralParseFailure(TranscriptError):
    failure_type = FailureType.STRUCTURE_ERROR
    cause = "structural_parse_failure"


class MalformedMarkup(StructuralParseFailure):
    cause = "malformed_markup"
    default_fixes = ("Inspect the caption payload; the host may have changed its format",)


class NoTranscriptContent(StructuralParseFailure):
    cause = "no_transcript_content"


class UnknownFormat(StructuralParseFailure):
    cause = "unknown_format"


# Resources

class ResourceUnavailable(TranscriptError):
    failure_type = FailureType.SOURCE_ERROR
    cause = "resource_unavailable"


class NoCaptionsAvailable(ResourceUnavailable):
    cause = "no_captions"
    default_fixes = ("Check that the video has captions enabled",)


class NoTrackFound(ResourceUnavailable):
    cause = "no_track"


# Network

class NetworkFailure(TranscriptError):
    failure_type = FailureType.NETWORK_ERROR
    cause = "network_failure"
    default_fixes = ("Retry later (transient host issue)", "Check network connectivity")


class TranscriptFetchFailed(NetworkFailure):
    cause = "fetch_failed"

    def __init__(self, message: str, *, status_code: Optional[int] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code


class EmptyTranscript(NetworkFailure):
    cause = "empty_response"


# Terminal

class NoTranscriptAvailable(TranscriptError):
    failure_type = FailureType.EXHAUSTED
    cause = "all_strategies_exhausted"
    default_fixes = (
        "Open the video page and confirm a transcript is offered",
        "Retry once the page has fully loaded",
    )
