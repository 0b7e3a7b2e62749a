"""transcript-grabber: canonical timestamped transcripts from YouTube watch pages."""

__version__ = "0.1.0"
