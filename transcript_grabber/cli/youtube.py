# transcript_grabber/cli/youtube.py
"""
CLI entrypoint for transcript extraction.

Thin adapter, no extraction logic.
Responsibilities:
- Parse arguments
- Open the watch page and invoke the acquisition runner
- Write the transcript document under its derived filename
- Provide clear user feedback

Structured JSON logs from the runner go to stderr.
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

import typer

from transcript_grabber.acquisition.document import derive_filename, extract_video_id, format_document
from transcript_grabber.acquisition.errors import TranscriptError
from transcript_grabber.acquisition.page import read_video_title
from transcript_grabber.acquisition.runner import run_acquisition
from transcript_grabber.browser.playwright_page import open_watch_page


app = typer.Typer(
    name="transcript-grabber",
    help="Download the timestamped transcript of a YouTube video",
    no_args_is_help=True,
)


@dataclass
class GrabResult:
    document: str
    filename: str
    strategy: str


async def grab_transcript(url: str, *, headless: bool = True) -> GrabResult:
    """Open the page, acquire the transcript and build the output document."""
    video_id = extract_video_id(url)
    async with open_watch_page(url, headless=headless) as page:
        outcome = await run_acquisition(video_id, page)
        title = await read_video_title(page)
        page_url = page.url

    return GrabResult(
        document=format_document(outcome.transcript, title=title, url=page_url),
        filename=derive_filename(title, video_id),
        strategy=outcome.strategy,
    )


@app.command()
def grab(
    url: str = typer.Argument(..., help="YouTube video URL"),
    out: str = typer.Option("./transcripts", "--out", "-o", help="Directory for the transcript file"),
    headless: bool = typer.Option(True, "--headless/--no-headless", help="Run the browser without a window"),
    print_document: bool = typer.Option(False, "--print", help="Also print the transcript to stdout"),
) -> None:
    """
    Extract the transcript of a YouTube video and save it as a text file.
    """
    try:
        result = asyncio.run(grab_transcript(url, headless=headless))
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user.", err=True)
        sys.exit(1)
    except TranscriptError as exc:
        typer.echo(typer.style("✗ Transcript extraction failed", fg=typer.colors.RED, bold=True), err=True)
        typer.echo(f"Error: {exc.message}", err=True)
        for fix in exc.suggested_fixes:
            typer.echo(f"  - {fix}", err=True)
        raise typer.Exit(code=1)

    output_dir = Path(out).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / result.filename
    output_path.write_text(result.document, encoding="utf-8")

    if print_document:
        typer.echo(result.document)

    typer.echo(typer.style("✓ Transcript saved", fg=typer.colors.GREEN, bold=True), err=print_document)
    typer.echo(f"File: {output_path} (via {result.strategy})", err=print_document)


if __name__ == "__main__":
    app()


# High-Level Intent
# cli/youtube.py is the glue around the acquisition core: it supplies the
# video id and a live page, and turns the outcome into a file on disk.

# Edge Cases & Failure Scenarios
# Invalid URL -> InvalidVideoId before a browser is launched, exit code 1.
# All strategies exhausted -> NoTranscriptAvailable message + suggested fixes, exit code 1.
# --print keeps stdout clean for piping: status lines move to stderr.
