"""Tests for the command line entrypoint."""

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from transcript_grabber.acquisition.errors import InvalidVideoId, NoTranscriptAvailable
from transcript_grabber.cli.youtube import GrabResult, app


runner = CliRunner()

DOCUMENT = "Title: Demo\nURL: https://www.youtube.com/watch?v=vid123\n\n--- TRANSCRIPT ---\n\n[00:01] hi"
URL = "https://www.youtube.com/watch?v=vid123"


def patched_grab(**kwargs):
    return patch("transcript_grabber.cli.youtube.grab_transcript", new=AsyncMock(**kwargs))


class TestGrab:
    def test_writes_document(self, tmp_path):
        result_value = GrabResult(document=DOCUMENT, filename="Demo.txt", strategy="player_response")
        with patched_grab(return_value=result_value) as grab:
            result = runner.invoke(app, [URL, "--out", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "Demo.txt").read_text(encoding="utf-8") == DOCUMENT
        assert "Transcript saved" in result.output
        grab.assert_awaited_once_with(URL, headless=True)

    def test_no_headless_and_print(self, tmp_path):
        result_value = GrabResult(document=DOCUMENT, filename="Demo.txt", strategy="rendered_panel")
        with patched_grab(return_value=result_value) as grab:
            result = runner.invoke(app, [URL, "-o", str(tmp_path / "nested"), "--no-headless", "--print"])

        assert result.exit_code == 0
        assert "[00:01] hi" in result.output
        assert (tmp_path / "nested" / "Demo.txt").exists()
        grab.assert_awaited_once_with(URL, headless=False)

    def test_acquisition_failure_exits_nonzero(self, tmp_path):
        with patched_grab(side_effect=NoTranscriptAvailable("No transcript available for video vid123")):
            result = runner.invoke(app, [URL, "--out", str(tmp_path)])

        assert result.exit_code == 1
        assert "No transcript available for video vid123" in result.output
        assert "Open the video page and confirm a transcript is offered" in result.output
        assert list(tmp_path.iterdir()) == []

    def test_invalid_url(self, tmp_path):
        with patched_grab(side_effect=InvalidVideoId("Could not extract video ID from URL: nope")):
            result = runner.invoke(app, ["nope", "--out", str(tmp_path)])

        assert result.exit_code == 1
        assert "Could not extract video ID" in result.output
