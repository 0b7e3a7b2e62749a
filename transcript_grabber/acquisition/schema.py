# transcript_grabber/acquisition/schema.py
"""
Authoritative data contracts for transcript acquisition.

This module defines:
- CaptionTrack, as read from the host page's player JSON
- The raw payload sum type handed from a strategy to the normalizer
- TranscriptLine, one spoken segment of the canonical transcript
- The attempt/diagnostics records produced by the runner
- Typed failure categories

Everything here is created fresh per acquisition and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FailureType(str, Enum):
    """Typed failure categories for machine-parsable diagnostics."""
    INPUT_ERROR = "input_error"
    STRUCTURE_ERROR = "structure_error"
    SOURCE_ERROR = "source_error"
    NETWORK_ERROR = "network_error"
    EXHAUSTED = "exhausted"


class AttemptOutcome(str, Enum):
    """How a single strategy run ended."""
    SUCCESS = "success"
    INAPPLICABLE = "inapplicable"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class CaptionTrack(BaseModel):
    """
    One caption stream available for a video.

    Field aliases follow the player JSON (captionTracks entries), so a raw
    entry validates directly with CaptionTrack.model_validate(entry).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    language_code: str = Field(alias="languageCode", min_length=1)
    kind: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="name")
    source_url: str = Field(alias="baseUrl", min_length=1)

    @field_validator("display_name", mode="before")
    @classmethod
    def _flatten_name(cls, value: Any) -> Any:
        # Player JSON renders names as {"simpleText": ...} or {"runs": [{"text": ...}]}
        if isinstance(value, dict):
            if "simpleText" in value:
                return value["simpleText"]
            runs = value.get("runs") or []
            return "".join(run.get("text", "") for run in runs) or None
        return value

    @property
    def is_auto_generated(self) -> bool:
        return self.kind == "asr"


@dataclass(frozen=True)
class PlainTextPayload:
    """Transcript text that already carries inline [timestamp] markers."""
    kind: ClassVar[str] = "plain-text-with-timestamps"
    text: str


@dataclass(frozen=True)
class MarkupPayload:
    """Caption markup (timedtext XML) that still needs structural parsing."""
    kind: ClassVar[str] = "markup"
    markup: str


RawTranscriptPayload: TypeAlias = Union[PlainTextPayload, MarkupPayload]


@dataclass(frozen=True)
class TranscriptLine:
    """One spoken segment; order of lines is playback order."""
    timestamp: Optional[str]
    text: str

    def render(self) -> str:
        if self.timestamp:
            return f"[{self.timestamp}] {self.text}"
        return self.text


class StrategyFailure(BaseModel):
    """Structured representation of a single strategy failure."""
    strategy: str
    type: FailureType
    cause: str
    message: str
    suggested_fixes: List[str] = Field(default_factory=list)


class StrategyAttempt(BaseModel):
    """Record of one strategy run inside an acquisition."""
    strategy: str
    outcome: AttemptOutcome
    failure: Optional[StrategyFailure] = None
    execution_time_ms: Optional[float] = None

    model_config = ConfigDict(frozen=True)


class AcquisitionDiagnostics(BaseModel):
    """Explainability trail for one acquisition."""
    video_id: str
    run_id: str
    attempts: List[StrategyAttempt] = Field(default_factory=list)
    suggested_fixes: List[str] = Field(default_factory=list)


class AcquisitionOutcome(BaseModel):
    """Successful acquisition: canonical text plus where it came from."""
    video_id: str
    transcript: str
    strategy: str
    payload_kind: str
    diagnostics: AcquisitionDiagnostics

    def summary(self) -> Dict[str, Any]:
        return {
            "video_id": self.video_id,
            "strategy": self.strategy,
            "payload_kind": self.payload_kind,
            "characters": len(self.transcript),
            "attempts": [attempt.strategy for attempt in self.diagnostics.attempts],
        }


# High-Level Intent
# schema.py is the contract shared by strategies, normalizer and runner.
# Raw payloads are a closed sum type: a strategy returns exactly one of
# PlainTextPayload / MarkupPayload (or None when inapplicable), and the
# normalizer matches on the concrete type instead of sniffing the content.

# Edge Cases
# Caption entries without baseUrl or languageCode fail validation; the
# player_response strategy skips them rather than aborting.
# An empty "kind" is treated like an absent one (not auto-generated).
