# transcript_grabber/acquisition/strategies/base.py
"""
Shared contract and utilities for all acquisition strategies.

This module defines:
- AcquisitionContext, the per-run bundle every strategy receives
- The Strategy record and its attempt() signature
- A lightweight timer for execution_time_ms measurement
- HTTP helpers shared by the network-backed strategies

No extraction logic belongs here.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, Optional, TypeAlias

import httpx

from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.errors import EmptyTranscript, TranscriptFetchFailed
from transcript_grabber.acquisition.page import PageSnapshot
from transcript_grabber.acquisition.schema import RawTranscriptPayload
from transcript_grabber.logging_core.logger import log_event


@dataclass
class AcquisitionContext:
    """Everything a strategy may use during one acquisition."""
    video_id: str
    page: PageSnapshot
    client: httpx.AsyncClient
    config: AcquisitionConfig
    run_id: uuid.UUID
    logger: logging.Logger

    def log(
        self,
        level: int,
        message: str,
        *,
        strategy: str,
        event_type: str,
        metadata: Dict[str, Any] | None = None,
    ) -> None:
        log_event(self.logger, level, message, strategy=strategy, event_type=event_type, metadata=metadata)


AttemptFn: TypeAlias = Callable[[AcquisitionContext], Awaitable[Optional[RawTranscriptPayload]]]
"""
Signature of a strategy attempt.

    attempt(context) -> RawTranscriptPayload | None

None means "inapplicable right now"; raised TranscriptError subclasses are
real failures.
"""


@dataclass(frozen=True)
class Strategy:
    name: str
    attempt: AttemptFn


@contextmanager
def timer() -> Iterator[Callable[[], float]]:
    """
    Context manager yielding a function that returns elapsed milliseconds.

    Usage:
        with timer() as end:
            ...
        execution_time_ms = end()
    """
    start = time.perf_counter()

    def end() -> float:
        return (time.perf_counter() - start) * 1000

    yield end


async def fetch_text(context: AcquisitionContext, url: str, *, strategy: str, what: str) -> str:
    """
    GET url and return its non-blank body.

    Raises TranscriptFetchFailed on transport errors or non-2xx status and
    EmptyTranscript on a blank body. Only call this after the strategy has
    committed to the resource.
    """
    context.log(logging.INFO, f"Fetching {what}", strategy=strategy, event_type="fetch", metadata={"url": url})

    try:
        response = await context.client.get(url)
    except httpx.HTTPError as exc:
        raise TranscriptFetchFailed(f"Failed to fetch {what}: {exc}") from exc

    if not response.is_success:
        raise TranscriptFetchFailed(
            f"Failed to fetch {what}: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
        )

    body = response.text
    if not body.strip():
        raise EmptyTranscript(f"Empty {what} response from server")

    context.log(
        logging.INFO,
        f"Received {what}",
        strategy=strategy,
        event_type="fetched",
        metadata={"characters": len(body), "preview": body[:200]},
    )
    return body
