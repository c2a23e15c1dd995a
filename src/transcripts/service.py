"""Transcript retrieval pipeline: watch page -> catalog -> track -> segments."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from .caption_parser import Segment
from .catalog import TranscriptCatalog
from .config import Settings, load_settings
from .http_client import RequestsTransport, Transport
from .transcript import Transcript
from .watch_page import WatchPageFetcher


LOGGER = logging.getLogger(__name__)


class TranscriptService:
    """Fetches transcripts for individual videos.

    Each call builds its own catalog; the only state shared between calls is
    the transport (and the cookie jar it owns).
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or load_settings()
        self._transport = transport or RequestsTransport(
            timeout_seconds=self._settings.timeout_seconds
        )
        self._watch_page = WatchPageFetcher(self._transport, self._settings)

    def list_transcripts(self, video_id: str) -> TranscriptCatalog:
        manifest = self._watch_page.fetch(video_id)
        return TranscriptCatalog.build(
            video_id,
            manifest,
            self._transport,
            accept_language=self._settings.accept_language,
        )

    def fetch_transcript(
        self,
        video_id: str,
        languages: Sequence[str],
        preserve_formatting: bool = False,
    ) -> tuple[Transcript, list[Segment]]:
        """Resolve the preferred track and return it with its segments."""
        catalog = self.list_transcripts(video_id)
        transcript = catalog.find_transcript(languages)
        LOGGER.info(
            "fetching %s transcript (%s) for %s",
            "generated" if transcript.is_generated else "manual",
            transcript.language_code,
            video_id,
        )
        return transcript, transcript.fetch(preserve_formatting=preserve_formatting)

    def fetch_segments(
        self,
        video_id: str,
        languages: Sequence[str],
        preserve_formatting: bool = False,
    ) -> list[Segment]:
        _, segments = self.fetch_transcript(video_id, languages, preserve_formatting)
        return segments

    def get_transcript(
        self,
        video_id: str,
        languages: Sequence[str],
        preserve_formatting: bool = False,
    ) -> str:
        segments = self.fetch_segments(video_id, languages, preserve_formatting)
        return " ".join(segment.text for segment in segments)


def get_transcript(
    video_id: str,
    languages: Sequence[str] = (),
    preserve_formatting: bool = False,
    service: Optional[TranscriptService] = None,
) -> str:
    """Return the transcript of ``video_id`` as one space-joined string.

    ``languages`` is tried in order; an empty sequence never matches.

    Raises:
        TranscriptError: One of its subclasses, naming why retrieval failed.
    """
    return (service or TranscriptService()).get_transcript(
        video_id, languages, preserve_formatting=preserve_formatting
    )
