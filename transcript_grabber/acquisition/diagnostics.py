# transcript_grabber/acquisition/diagnostics.py
"""
Diagnostics aggregation for one acquisition run.

Collects one StrategyAttempt per strategy the runner executed and
synthesizes the AcquisitionDiagnostics attached to the outcome (or to the
raised error).
"""

from __future__ import annotations

from typing import Dict, List, Optional
from uuid import UUID

from transcript_grabber.acquisition.schema import (
    AcquisitionDiagnostics,
    AttemptOutcome,
    StrategyAttempt,
    StrategyFailure,
)


class DiagnosticsCollector:
    """
    Accumulates strategy attempts in execution order.

    Not thread-safe; an acquisition runs on a single task.
    """

    def __init__(self, run_id: UUID, video_id: str) -> None:
        self.run_id = run_id
        self.video_id = video_id
        self._attempts: Dict[str, StrategyAttempt] = {}
        self._suggested_fixes: List[str] = []

    def record(
        self,
        strategy: str,
        outcome: AttemptOutcome,
        *,
        execution_time_ms: float | None = None,
        failure: Optional[StrategyFailure] = None,
    ) -> StrategyAttempt:
        if strategy in self._attempts:
            raise ValueError(f"Duplicate attempt for strategy {strategy}")

        attempt = StrategyAttempt(
            strategy=strategy,
            outcome=outcome,
            failure=failure,
            execution_time_ms=execution_time_ms,
        )
        self._attempts[strategy] = attempt

        if failure is not None:
            for fix in failure.suggested_fixes:
                if fix not in self._suggested_fixes:
                    self._suggested_fixes.append(fix)
        return attempt

    @property
    def attempts(self) -> List[StrategyAttempt]:
        return list(self._attempts.values())

    def build_diagnostics(self) -> AcquisitionDiagnostics:
        return AcquisitionDiagnostics(
            video_id=self.video_id,
            run_id=str(self.run_id),
            attempts=self.attempts,
            suggested_fixes=list(self._suggested_fixes),
        )
