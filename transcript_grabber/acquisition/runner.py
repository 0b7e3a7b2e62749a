# transcript_grabber/acquisition/runner.py
"""
Orchestration runner for transcript acquisition.

Responsibilities:
- Initialize traceability (run_id, logger, diagnostics collector)
- Execute strategies strictly one at a time, in fixed order
- Stop at the first payload and hand it to the normalizer
- Classify strategy errors: ResourceUnavailable means "try next" while a
  later strategy remains, anything else aborts the run

No extraction logic lives here.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

import httpx

from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.diagnostics import DiagnosticsCollector
from transcript_grabber.acquisition.errors import (
    InvalidVideoId,
    NoTranscriptAvailable,
    NoTranscriptContent,
    ResourceUnavailable,
    TranscriptError,
)
from transcript_grabber.acquisition.normalizer import normalize
from transcript_grabber.acquisition.page import PageSnapshot
from transcript_grabber.acquisition.schema import AcquisitionOutcome, AttemptOutcome, RawTranscriptPayload
from transcript_grabber.acquisition.strategies import DEFAULT_STRATEGIES
from transcript_grabber.acquisition.strategies.base import AcquisitionContext, Strategy, timer
from transcript_grabber.logging_core.logger import get_logger, log_event, release_logger


HTTP_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
    ),
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.9",
}


@asynccontextmanager
async def _http_client(client: Optional[httpx.AsyncClient], config: AcquisitionConfig) -> AsyncIterator[httpx.AsyncClient]:
    """Use the injected client as-is, or own one for the duration of the run."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=config.http_timeout, headers=HTTP_HEADERS, follow_redirects=True) as owned:
        yield owned


def _record_failure(
    strategy: Strategy,
    context: AcquisitionContext,
    collector: DiagnosticsCollector,
    exc: TranscriptError,
    execution_time_ms: float,
) -> None:
    collector.record(
        strategy.name,
        AttemptOutcome.FAILED,
        execution_time_ms=execution_time_ms,
        failure=exc.to_failure(strategy.name),
    )
    log_event(
        context.logger,
        logging.ERROR,
        "Strategy failed",
        strategy=strategy.name,
        event_type="failure",
        metadata={"error": exc.message, "type": exc.failure_type.value},
    )


async def _run_strategy(
    strategy: Strategy,
    context: AcquisitionContext,
    collector: DiagnosticsCollector,
    *,
    has_fallback: bool,
) -> Optional[RawTranscriptPayload]:
    log_event(context.logger, logging.INFO, "Starting strategy", strategy=strategy.name, event_type="start")

    with timer() as end:
        try:
            payload = await strategy.attempt(context)
        except ResourceUnavailable as exc:
            if not has_fallback:
                # Last strategy: the unavailable source is the result of the run
                _record_failure(strategy, context, collector, exc, end())
                raise
            collector.record(
                strategy.name,
                AttemptOutcome.UNAVAILABLE,
                execution_time_ms=end(),
                failure=exc.to_failure(strategy.name),
            )
            log_event(
                context.logger,
                logging.WARNING,
                "Strategy source unavailable, trying next",
                strategy=strategy.name,
                event_type="unavailable",
                metadata={"error": exc.message},
            )
            return None
        except TranscriptError as exc:
            _record_failure(strategy, context, collector, exc, end())
            raise

        outcome = AttemptOutcome.INAPPLICABLE if payload is None else AttemptOutcome.SUCCESS
        collector.record(strategy.name, outcome, execution_time_ms=end())

    log_event(
        context.logger,
        logging.INFO,
        "Strategy completed",
        strategy=strategy.name,
        event_type=outcome.value,
        metadata={"payload_kind": payload.kind} if payload is not None else None,
    )
    return payload


async def run_acquisition(
    video_id: str,
    page: PageSnapshot,
    *,
    client: Optional[httpx.AsyncClient] = None,
    config: Optional[AcquisitionConfig] = None,
    strategies: Optional[Sequence[Strategy]] = None,
) -> AcquisitionOutcome:
    """
    Acquire the canonical transcript of one video.

    Args:
        video_id: YouTube video id of the page being read
        page: read-only snapshot of the host page
        client: optional HTTP client; when omitted the run owns one
        config: tunables; defaults to AcquisitionConfig()
        strategies: override of the strategy order (tests, embedding)

    Returns:
        AcquisitionOutcome with the transcript and per-strategy diagnostics.

    Raises:
        TranscriptError subclasses. The raised error carries the diagnostics
        collected so far in its `diagnostics` attribute.
    """
    if not video_id or not video_id.strip():
        raise InvalidVideoId("Video ID not found")

    config = config or AcquisitionConfig()
    strategies = DEFAULT_STRATEGIES if strategies is None else tuple(strategies)

    run_id = uuid.uuid4()
    logger = get_logger(run_id)
    collector = DiagnosticsCollector(run_id, video_id)

    log_event(
        logger,
        logging.INFO,
        "Starting transcript acquisition",
        event_type="acquisition_start",
        metadata={"video_id": video_id, "strategies": [strategy.name for strategy in strategies]},
    )

    try:
        async with _http_client(client, config) as http:
            context = AcquisitionContext(
                video_id=video_id,
                page=page,
                client=http,
                config=config,
                run_id=run_id,
                logger=logger,
            )

            for index, strategy in enumerate(strategies):
                has_fallback = index < len(strategies) - 1
                payload = await _run_strategy(strategy, context, collector, has_fallback=has_fallback)
                if payload is None:
                    continue

                transcript = normalize(payload)
                if not transcript:
                    raise NoTranscriptContent("No transcript text found")

                outcome = AcquisitionOutcome(
                    video_id=video_id,
                    transcript=transcript,
                    strategy=strategy.name,
                    payload_kind=payload.kind,
                    diagnostics=collector.build_diagnostics(),
                )
                log_event(
                    logger,
                    logging.INFO,
                    "Transcript acquired",
                    event_type="acquisition_success",
                    metadata=outcome.summary(),
                )
                return outcome

            raise NoTranscriptAvailable(f"No transcript available for video {video_id}")

    except TranscriptError as exc:
        exc.diagnostics = collector.build_diagnostics()
        log_event(
            logger,
            logging.ERROR,
            "Transcript acquisition failed",
            event_type="acquisition_failure",
            metadata={"error": exc.message, "type": exc.failure_type.value, "cause": exc.cause},
        )
        raise
    finally:
        release_logger(run_id)


async def acquire(
    video_id: str,
    page: PageSnapshot,
    *,
    client: Optional[httpx.AsyncClient] = None,
    config: Optional[AcquisitionConfig] = None,
    strategies: Optional[Sequence[Strategy]] = None,
) -> str:
    """Canonical transcript text of one video; see run_acquisition."""
    outcome = await run_acquisition(video_id, page, client=client, config=config, strategies=strategies)
    return outcome.transcript


# High-Level Intent
# runner.py is the orchestration heart of acquisition. It owns ordering,
# short-circuiting and error classification; strategies own extraction,
# the normalizer owns output shape.

# Data Flow
# caller -> run_acquisition(video_id, page)
# -> for each strategy: attempt(context) -> payload | None | raise
# -> first payload -> normalize() -> AcquisitionOutcome
# -> all None -> NoTranscriptAvailable

# Edge Cases & Failure Scenarios
# NoCaptionsAvailable from player_response -> recorded as "unavailable", next strategy runs.
# NoCaptionsAvailable from timedtext_api (last strategy) -> raised as is, not NoTranscriptAvailable.
# TranscriptFetchFailed / EmptyTranscript after a track was selected -> run aborts, later strategies never run.
# Payload normalizes to nothing -> NoTranscriptContent, not a silent empty transcript.
