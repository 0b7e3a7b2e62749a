"""Tests for the bounded poller."""

import asyncio

import pytest

from fakes import RecordingSleep
from transcript_grabber.acquisition.polling import Poller, PollState


def make_probe(results):
    remaining = list(results)

    async def probe():
        return remaining.pop(0) if remaining else None

    return probe


class TestPoller:
    def test_finds_value(self):
        sleep = RecordingSleep()
        poller = Poller(make_probe([None, None, "panel"]), interval=0.5, max_attempts=20, sleep=sleep)

        assert asyncio.run(poller.run()) == "panel"
        assert poller.state is PollState.FOUND
        assert poller.attempts == 3
        assert sleep.delays == [0.5, 0.5, 0.5]

    def test_times_out_on_hard_cap(self):
        sleep = RecordingSleep()
        poller = Poller(make_probe([]), interval=0.5, max_attempts=20, sleep=sleep)

        assert asyncio.run(poller.run()) is None
        assert poller.state is PollState.TIMED_OUT
        assert poller.attempts == 20
        assert sum(sleep.delays) == pytest.approx(10.0)

    def test_step_is_noop_after_terminal_state(self):
        sleep = RecordingSleep()
        poller = Poller(make_probe(["x"]), interval=1, max_attempts=3, sleep=sleep)

        async def drive():
            first = await poller.step()
            second = await poller.step()
            return first, second

        assert asyncio.run(drive()) == (PollState.FOUND, PollState.FOUND)
        assert poller.attempts == 1
        assert sleep.delays == [1]

    def test_starts_searching(self):
        poller = Poller(make_probe([]), interval=1, max_attempts=1, sleep=RecordingSleep())
        assert poller.state is PollState.SEARCHING

    def test_requires_positive_attempts(self):
        with pytest.raises(ValueError):
            Poller(make_probe([]), interval=1, max_attempts=0, sleep=RecordingSleep())
