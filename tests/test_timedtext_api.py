"""Tests for the direct timedtext API strategy."""

import httpx
import pytest

from fakes import Router, run_attempt
from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.errors import (
    EmptyTranscript,
    MalformedMarkup,
    NoCaptionsAvailable,
    TranscriptFetchFailed,
)
from transcript_grabber.acquisition.schema import MarkupPayload
from transcript_grabber.acquisition.strategies import timedtext_api


LIST_URL = "https://www.youtube.com/api/timedtext?type=list&v=vid123"
LISTING = """<?xml version="1.0" encoding="utf-8" ?>
<transcript_list docid="123">
  <track id="0" name="" lang_code="de" lang_original="Deutsch" lang_translated="German"/>
  <track id="1" name="" lang_code="en" lang_original="English" lang_translated="English"/>
</transcript_list>"""
CONTENT_URL_DE = "https://www.youtube.com/api/timedtext?lang=de&v=vid123&fmt=srv3"
CONTENT_URL_EN = "https://www.youtube.com/api/timedtext?lang=en&v=vid123&fmt=srv3"
MARKUP = '<transcript><text start="2">hallo</text></transcript>'


class TestUrls:
    def test_track_list_url(self):
        assert timedtext_api.track_list_url("vid123", AcquisitionConfig()) == LIST_URL

    def test_caption_content_url(self):
        assert timedtext_api.caption_content_url("vid123", "de", AcquisitionConfig()) == CONTENT_URL_DE


class TestFirstTrackLanguage:
    def test_first_track_wins(self):
        assert timedtext_api.first_track_language(LISTING) == "de"

    def test_defaults_to_english(self):
        assert timedtext_api.first_track_language('<transcript_list><track id="0"/></transcript_list>') == "en"

    def test_no_tracks(self):
        with pytest.raises(NoCaptionsAvailable):
            timedtext_api.first_track_language("<transcript_list/>")

    def test_unparsable_listing(self):
        with pytest.raises(MalformedMarkup):
            timedtext_api.first_track_language("<transcript_list><track")


class TestAttempt:
    def test_lists_then_fetches_first_track(self):
        router = Router(
            {
                LIST_URL: httpx.Response(200, text=LISTING),
                CONTENT_URL_DE: httpx.Response(200, text=MARKUP),
            }
        )

        assert run_attempt(timedtext_api.attempt, router=router) == MarkupPayload(MARKUP)
        assert router.urls == [LIST_URL, CONTENT_URL_DE]

    def test_failed_listing(self):
        router = Router({LIST_URL: httpx.Response(500, text="oops")})

        with pytest.raises(TranscriptFetchFailed):
            run_attempt(timedtext_api.attempt, router=router)
        assert router.urls == [LIST_URL]

    def test_empty_listing(self):
        router = Router({LIST_URL: httpx.Response(200, text="")})

        with pytest.raises(EmptyTranscript):
            run_attempt(timedtext_api.attempt, router=router)

    def test_failed_content_fetch(self):
        router = Router({LIST_URL: httpx.Response(200, text='<transcript_list><track lang_code="en"/></transcript_list>')})

        with pytest.raises(TranscriptFetchFailed):
            run_attempt(timedtext_api.attempt, router=router)
        assert router.urls[-1] == CONTENT_URL_EN

    def test_empty_content_body(self):
        router = Router(
            {
                LIST_URL: httpx.Response(200, text=LISTING),
                CONTENT_URL_DE: httpx.Response(200, text=""),
            }
        )

        with pytest.raises(EmptyTranscript):
            run_attempt(timedtext_api.attempt, router=router)
