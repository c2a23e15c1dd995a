import importlib
import json
import logging

import pytest


watch_page = importlib.import_module("src.transcripts.watch_page")
http_client = importlib.import_module("src.transcripts.http_client")
errors = importlib.import_module("src.transcripts.errors")

HttpResponse = http_client.HttpResponse
WatchPageFetcher = watch_page.WatchPageFetcher
extract_captions_json = watch_page.extract_captions_json


CONSENT_PAGE = (
    '<html><form action="https://consent.youtube.com/s" method="POST">'
    '<input type="hidden" name="v" value="cb.20210328-17-p0.en+FX+123"></form></html>'
)


def _watch_page(renderer):
    captions = json.dumps({"playerCaptionsTracklistRenderer": renderer}, indent=1)
    return (
        '<html><script>var ytInitialPlayerResponse = {"playabilityStatus":{"status":"OK"},'
        f'"captions":{captions},"videoDetails":{{"videoId":"vid"}}}};</script></html>'
    )


RENDERER = {
    "captionTracks": [
        {
            "baseUrl": "https://www.youtube.com/api/timedtext?v=vid&lang=en",
            "name": {"simpleText": "English"},
            "languageCode": "en",
            "isTranslatable": True,
        }
    ],
    "translationLanguages": [{"languageCode": "de", "languageName": {"simpleText": "German"}}],
}


class SequenceTransport:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []
        self.cookies = []

    def __call__(self, method, url, headers):
        self.calls.append((method, url, headers))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def set_cookie(self, name, value, domain):
        self.cookies.append((name, value, domain))


def _ok(html):
    return HttpResponse(status_code=200, body=html.encode("utf-8"), headers={})


def test_extract_captions_json_returns_renderer_across_newlines():
    result = extract_captions_json(_watch_page(RENDERER), "vid")

    assert result["captionTracks"][0]["languageCode"] == "en"


def test_extract_captions_json_rejects_url_passed_as_video_id():
    with pytest.raises(errors.InvalidVideoIdError):
        extract_captions_json("<html></html>", "https://www.youtube.com/watch?v=vid")


def test_extract_captions_json_reports_captcha_before_unavailable():
    page = '<html><div class="g-recaptcha" data-sitekey="x"></div></html>'

    with pytest.raises(errors.TooManyRequestsError):
        extract_captions_json(page, "vid")


def test_extract_captions_json_reports_unavailable_without_playability_status():
    with pytest.raises(errors.VideoUnavailableError):
        extract_captions_json("<html>nothing here</html>", "vid")


def test_extract_captions_json_reports_disabled_when_only_playability_status():
    page = '<html>{"playabilityStatus":{"status":"OK"},"videoDetails":{}}</html>'

    with pytest.raises(errors.TranscriptsDisabledError):
        extract_captions_json(page, "vid")


def test_extract_captions_json_reports_disabled_for_empty_renderer():
    with pytest.raises(errors.TranscriptsDisabledError):
        extract_captions_json(_watch_page({}), "vid")


def test_extract_captions_json_wraps_json_decode_errors():
    page = '"playabilityStatus":{},"captions":{not json,"videoDetails":{}'

    with pytest.raises(errors.TranscriptStageError) as exc_info:
        extract_captions_json(page, "vid")

    assert exc_info.value.stage == "decode JSON"
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


def test_fetch_sends_browser_user_agent_and_returns_manifest():
    transport = SequenceTransport([_ok(_watch_page(RENDERER))])

    manifest = WatchPageFetcher(transport).fetch("vid")

    method, url, headers = transport.calls[0]
    assert method == "GET"
    assert url == "https://www.youtube.com/watch?v=vid"
    assert headers["User-Agent"].startswith("Mozilla/5.0")
    assert manifest.tracks[0].language_code == "en"
    assert manifest.translation_languages[0].language_code == "de"


def test_fetch_without_caption_tracks_raises_no_transcript_found():
    transport = SequenceTransport([_ok(_watch_page({"audioTracks": [{}]}))])

    with pytest.raises(errors.NoTranscriptFoundError):
        WatchPageFetcher(transport).fetch("vid")


def test_fetch_sets_consent_cookie_and_refetches_once():
    transport = SequenceTransport([_ok(CONSENT_PAGE), _ok(_watch_page(RENDERER))])

    manifest = WatchPageFetcher(transport).fetch("vid")

    assert len(transport.calls) == 2
    assert transport.cookies == [("CONSENT", "YES+cb.20210328-17-p0.en+FX+123", ".youtube.com")]
    assert len(manifest.tracks) == 1


def test_fetch_fails_when_consent_page_persists():
    transport = SequenceTransport([_ok(CONSENT_PAGE), _ok(CONSENT_PAGE)])

    with pytest.raises(errors.ConsentCookieError):
        WatchPageFetcher(transport).fetch("vid")

    assert len(transport.calls) == 2


def test_fetch_fails_when_consent_token_missing():
    page = '<form action="https://consent.youtube.com/s"></form>'
    transport = SequenceTransport([_ok(page)])

    with pytest.raises(errors.ConsentCookieError):
        WatchPageFetcher(transport).fetch("vid")

    assert transport.cookies == []
    assert len(transport.calls) == 1


def test_fetch_wraps_transport_errors_with_stage():
    transport = SequenceTransport([ConnectionError("reset by peer")])

    with pytest.raises(errors.TranscriptStageError) as exc_info:
        WatchPageFetcher(transport).fetch("vid")

    assert exc_info.value.stage == "fetch watch page"
    assert "reset by peer" in str(exc_info.value)


def test_fetch_raises_platform_request_failed_on_non_200():
    transport = SequenceTransport([HttpResponse(status_code=500, body=b"", headers={})])

    with pytest.raises(errors.PlatformRequestFailedError) as exc_info:
        WatchPageFetcher(transport).fetch("vid")

    assert exc_info.value.status_code == 500


def test_fetch_logs_consent_cookie_creation(caplog):
    transport = SequenceTransport([_ok(CONSENT_PAGE), _ok(_watch_page(RENDERER))])

    with caplog.at_level(logging.INFO, logger="src.transcripts.watch_page"):
        WatchPageFetcher(transport).fetch("vid")

    levels = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert any(level == logging.WARNING and "consent interstitial" in message for level, message in levels)
    assert any(level == logging.INFO and "CONSENT cookie on .youtube.com" in message for level, message in levels)
