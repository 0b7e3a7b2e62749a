# transcript_grabber/acquisition/polling.py
"""
Bounded polling for host-page state.

A Poller checks a condition at a fixed interval for at most N attempts and
ends in exactly one of two terminal states: FOUND (with the value the
condition produced) or TIMED_OUT. It never waits unboundedly.
"""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class PollState(str, Enum):
    SEARCHING = "searching"
    FOUND = "found"
    TIMED_OUT = "timed_out"


class Poller(Generic[T]):
    """
    searching -> found | timed_out

    Each attempt sleeps one interval, then evaluates the probe. A probe
    result other than None moves the poller to FOUND.
    """

    def __init__(
        self,
        probe: Callable[[], Awaitable[Optional[T]]],
        *,
        interval: float,
        max_attempts: int,
        sleep: Callable[[float], Awaitable[None]],
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._probe = probe
        self.interval = interval
        self.max_attempts = max_attempts
        self._sleep = sleep
        self.state = PollState.SEARCHING
        self.attempts = 0
        self.value: Optional[T] = None

    async def step(self) -> PollState:
        """Run one attempt. No-op once a terminal state is reached."""
        if self.state is not PollState.SEARCHING:
            return self.state

        await self._sleep(self.interval)
        self.attempts += 1

        value = await self._probe()
        if value is not None:
            self.value = value
            self.state = PollState.FOUND
        elif self.attempts >= self.max_attempts:
            self.state = PollState.TIMED_OUT
        return self.state

    async def run(self) -> Optional[T]:
        """Step until terminal; the found value, or None on timeout."""
        while self.state is PollState.SEARCHING:
            await self.step()
        return self.value
