"""Watch-page scraping for the embedded caption manifest.

The watch page is not an API. The manifest is located by splitting on literal
markers, and every way the page can diverge from the expected shape is mapped
to a specific error. Nothing outside this module knows about the markers.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping

from .config import Settings
from .errors import (
    ConsentCookieError,
    InvalidVideoIdError,
    PlatformRequestFailedError,
    TooManyRequestsError,
    TranscriptsDisabledError,
    TranscriptStageError,
    VideoUnavailableError,
)
from .http_client import Transport
from .manifest import CaptionManifest, parse_manifest


LOGGER = logging.getLogger(__name__)

CONSENT_FORM_MARKER = 'action="https://consent.youtube.com/s"'
CONSENT_TOKEN_PATTERN = re.compile(r'name="v" value="(.*?)"')
CONSENT_COOKIE_NAME = "CONSENT"
CAPTIONS_MARKER = '"captions":'
VIDEO_DETAILS_MARKER = ',"videoDetails'
CAPTCHA_MARKER = 'class="g-recaptcha'
PLAYABILITY_MARKER = '"playabilityStatus":'

FETCH_STAGE = "fetch watch page"
DECODE_STAGE = "decode JSON"


def extract_captions_json(page_html: str, video_id: str) -> Mapping[str, object]:
    """Return the ``playerCaptionsTracklistRenderer`` object embedded in ``page_html``."""
    parts = page_html.split(CAPTIONS_MARKER, 1)
    if len(parts) < 2:
        if video_id.startswith(("http://", "https://")):
            raise InvalidVideoIdError(video_id)
        if CAPTCHA_MARKER in page_html:
            raise TooManyRequestsError(video_id)
        if PLAYABILITY_MARKER not in page_html:
            raise VideoUnavailableError(video_id)
        raise TranscriptsDisabledError(video_id)

    chunk = parts[1].split(VIDEO_DETAILS_MARKER, 1)[0].replace("\n", "")
    try:
        captions = json.loads(chunk)
    except json.JSONDecodeError as exc:
        raise TranscriptStageError(video_id, DECODE_STAGE, cause=exc) from exc

    renderer = captions.get("playerCaptionsTracklistRenderer") if isinstance(captions, dict) else None
    if not isinstance(renderer, dict) or not renderer:
        raise TranscriptsDisabledError(video_id)
    return renderer


class WatchPageFetcher:
    def __init__(self, transport: Transport, settings: Settings = Settings()) -> None:
        self._transport = transport
        self._settings = settings

    def fetch(self, video_id: str) -> CaptionManifest:
        page_html = self.fetch_video_html(video_id)
        return parse_manifest(extract_captions_json(page_html, video_id), video_id)

    def fetch_video_html(self, video_id: str) -> str:
        page_html = self._fetch_html(video_id)
        if CONSENT_FORM_MARKER not in page_html:
            return page_html

        LOGGER.warning("consent interstitial served for %s; retrying with consent cookie", video_id)
        self._create_consent_cookie(page_html, video_id)
        page_html = self._fetch_html(video_id)
        if CONSENT_FORM_MARKER in page_html:
            raise ConsentCookieError(video_id)
        return page_html

    def _create_consent_cookie(self, page_html: str, video_id: str) -> None:
        match = CONSENT_TOKEN_PATTERN.search(page_html)
        if match is None:
            raise ConsentCookieError(video_id)
        self._transport.set_cookie(
            CONSENT_COOKIE_NAME,
            f"YES+{match.group(1)}",
            self._settings.consent_cookie_domain,
        )
        LOGGER.info(
            "set %s cookie on %s for %s",
            CONSENT_COOKIE_NAME,
            self._settings.consent_cookie_domain,
            video_id,
        )

    def _fetch_html(self, video_id: str) -> str:
        url = self._settings.watch_url.format(video_id=video_id)
        try:
            response = self._transport("GET", url, {"User-Agent": self._settings.user_agent})
        except Exception as exc:
            raise TranscriptStageError(video_id, FETCH_STAGE, cause=exc) from exc

        if response.status_code != 200:
            raise PlatformRequestFailedError(video_id, response.status_code, url)
        return response.text()
