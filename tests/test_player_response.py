"""Tests for the embedded player metadata strategy."""

import json

import httpx
import pytest

from fakes import FakePage, Router, fast_config, run_attempt
from transcript_grabber.acquisition.config import AcquisitionConfig
from transcript_grabber.acquisition.errors import (
    EmptyTranscript,
    NetworkFailure,
    NoCaptionsAvailable,
    TranscriptFetchFailed,
)
from transcript_grabber.acquisition.schema import CaptionTrack, MarkupPayload
from transcript_grabber.acquisition.strategies import player_response


CAPTION_MARKUP = '<transcript><text start="1">hello</text></transcript>'
GB_URL = "https://www.youtube.com/api/timedtext?v=vid123&lang=en-GB&fmt=srv3"


def player_json(*tracks):
    return {
        "videoDetails": {"videoId": "vid123", "title": "A {braced} title"},
        "captions": {"playerCaptionsTracklistRenderer": {"captionTracks": list(tracks)}},
    }


ASR_EN = {"baseUrl": "/api/timedtext?v=vid123&lang=en&kind=asr", "languageCode": "en", "kind": "asr"}
MANUAL_GB = {"baseUrl": "/api/timedtext?v=vid123&lang=en-GB", "languageCode": "en-GB", "name": {"simpleText": "English (UK)"}}


def assignment_script(data):
    return f"var ytInitialPlayerResponse = {json.dumps(data)};var meta = {{\"x\": 1}};"


class TestParsePlayerResponse:
    def test_direct_assignment(self):
        data = player_json(ASR_EN)
        assert player_response.parse_player_response(assignment_script(data)) == data

    def test_nested_property(self):
        script = 'window.config = {"ytInitialPlayerResponse": {"captions": {}}, "other": true};'
        assert player_response.parse_player_response(script) == {"captions": {}}

    def test_skips_undecodable_match(self):
        script = 'ytInitialPlayerResponse = {broken: ; ({"ytInitialPlayerResponse": {"ok": 1}})'
        assert player_response.parse_player_response(script) == {"ok": 1}

    def test_ignores_scripts_without_marker(self):
        assert player_response.parse_player_response('var other = {"captions": {}};') is None

    def test_marker_without_object(self):
        assert player_response.parse_player_response("if (window.ytInitialPlayerResponse) {}") is None


class TestCaptionTracks:
    def test_skips_invalid_entries(self):
        tracks = player_response.caption_tracks(player_json({"languageCode": "en"}, MANUAL_GB))
        assert [track.language_code for track in tracks] == ["en-GB"]

    @pytest.mark.parametrize(
        "data",
        [{}, {"captions": None}, {"captions": {"playerCaptionsTracklistRenderer": {}}}, player_json()],
    )
    def test_missing_list(self, data):
        assert player_response.caption_tracks(data) == []


class TestCaptionUrl:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("/api/timedtext?v=a", "https://www.youtube.com/api/timedtext?v=a&fmt=srv3"),
            ("//www.youtube.com/api/timedtext?v=a", "https://www.youtube.com/api/timedtext?v=a&fmt=srv3"),
            ("http://www.youtube.com/api/timedtext?v=a", "https://www.youtube.com/api/timedtext?v=a&fmt=srv3"),
            ("https://www.youtube.com/api/timedtext", "https://www.youtube.com/api/timedtext?fmt=srv3"),
            ("https://www.youtube.com/api/timedtext?v=a&fmt=vtt", "https://www.youtube.com/api/timedtext?v=a&fmt=vtt"),
        ],
    )
    def test_normalization(self, source, expected):
        track = CaptionTrack(language_code="en", source_url=source)
        assert player_response.caption_url(track, AcquisitionConfig()) == expected


class TestAttempt:
    def test_no_player_response_is_inapplicable(self):
        router = Router()
        page = FakePage(scripts=["var a = 1;"])

        assert run_attempt(player_response.attempt, page=page, router=router) is None
        assert router.requests == []

    def test_selects_track_and_fetches_markup(self):
        router = Router({GB_URL: httpx.Response(200, text=CAPTION_MARKUP)})
        page = FakePage(scripts=["var a = 1;", assignment_script(player_json(ASR_EN, MANUAL_GB))])

        payload = run_attempt(player_response.attempt, page=page, router=router)

        assert payload == MarkupPayload(CAPTION_MARKUP)
        assert router.urls == [GB_URL]

    def test_uses_global_variable(self):
        router = Router({GB_URL: httpx.Response(200, text=CAPTION_MARKUP)})
        page = FakePage(globals_={"ytInitialPlayerResponse": player_json(MANUAL_GB)})

        assert run_attempt(player_response.attempt, page=page, router=router) == MarkupPayload(CAPTION_MARKUP)

    def test_no_captions_raises_without_fetching(self):
        router = Router()
        page = FakePage(globals_={"ytInitialPlayerResponse": player_json()})

        with pytest.raises(NoCaptionsAvailable):
            run_attempt(player_response.attempt, page=page, router=router)
        assert router.requests == []

    def test_non_success_status_is_hard_failure(self):
        router = Router({GB_URL: httpx.Response(403, text="forbidden")})
        page = FakePage(globals_={"ytInitialPlayerResponse": player_json(MANUAL_GB)})

        with pytest.raises(TranscriptFetchFailed) as excinfo:
            run_attempt(player_response.attempt, page=page, router=router)
        assert excinfo.value.status_code == 403

    def test_transport_error_is_hard_failure(self):
        router = Router({GB_URL: httpx.ConnectError("connection refused")})
        page = FakePage(globals_={"ytInitialPlayerResponse": player_json(MANUAL_GB)})

        with pytest.raises(NetworkFailure):
            run_attempt(player_response.attempt, page=page, router=router)

    def test_blank_body_is_empty_transcript(self):
        router = Router({GB_URL: httpx.Response(200, text="  \n")})
        page = FakePage(globals_={"ytInitialPlayerResponse": player_json(MANUAL_GB)})

        with pytest.raises(EmptyTranscript):
            run_attempt(player_response.attempt, page=page, router=router, config=fast_config())
