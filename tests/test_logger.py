"""Tests for the JSON-line run logger."""

import io
import json
import logging
import uuid

from transcript_grabber.logging_core.logger import get_logger, log_event, release_logger


def read_lines(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestRunLogger:
    def test_emits_one_json_object_per_event(self):
        run_id = uuid.uuid4()
        stream = io.StringIO()
        logger = get_logger(run_id, stream=stream)
        try:
            log_event(logger, logging.INFO, "Starting strategy", strategy="rendered_panel", event_type="start")
            log_event(logger, logging.WARNING, "Done", event_type="unavailable", metadata={"id": run_id})
        finally:
            release_logger(run_id)

        first, second = read_lines(stream)
        assert first["message"] == "Starting strategy"
        assert first["level"] == "INFO"
        assert first["run_id"] == str(run_id)
        assert first["strategy"] == "rendered_panel"
        assert first["event_type"] == "start"
        assert "metadata" not in first
        assert first["timestamp"].endswith("Z")
        assert "strategy" not in second
        assert second["metadata"] == {"id": str(run_id)}

    def test_cached_per_run(self):
        run_id = uuid.uuid4()
        try:
            assert get_logger(run_id, stream=io.StringIO()) is get_logger(run_id)
        finally:
            release_logger(run_id)

    def test_release_closes_handlers(self):
        run_id = uuid.uuid4()
        logger = get_logger(run_id, stream=io.StringIO())

        release_logger(run_id)

        assert logger.handlers == []
        release_logger(run_id)

    def test_does_not_propagate(self):
        run_id = uuid.uuid4()
        try:
            assert get_logger(run_id, stream=io.StringIO()).propagate is False
        finally:
            release_logger(run_id)

    def test_released_runs_leave_no_registered_logger(self):
        run_id = uuid.uuid4()
        logger = get_logger(run_id, stream=io.StringIO())

        release_logger(run_id)

        assert logger.name not in logging.Logger.manager.loggerDict
        assert get_logger(run_id, stream=io.StringIO()) is not logger
        release_logger(run_id)
