from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .caption_parser import Segment, parse_caption_document
from .errors import (
    NotTranslatableError,
    PlatformRequestFailedError,
    TranscriptStageError,
    TranslationLanguageNotAvailableError,
)
from .http_client import Transport
from .manifest import TranslationLanguage


LOGGER = logging.getLogger(__name__)
FETCH_STAGE = "fetch track"


@dataclass(frozen=True)
class Transcript:
    """One fetchable caption track of a video."""

    transport: Transport = field(repr=False, compare=False)
    video_id: str
    url: str
    language: str
    language_code: str
    is_generated: bool
    is_translatable: bool
    translation_languages: tuple[TranslationLanguage, ...] = ()
    accept_language: str = "en-US"

    def fetch(self, preserve_formatting: bool = False) -> list[Segment]:
        try:
            response = self.transport("GET", self.url, {"Accept-Language": self.accept_language})
        except Exception as exc:
            raise TranscriptStageError(self.video_id, FETCH_STAGE, cause=exc) from exc

        if response.status_code != 200:
            raise PlatformRequestFailedError(self.video_id, response.status_code, self.url)

        segments = parse_caption_document(
            response.body,
            preserve_formatting=preserve_formatting,
            video_id=self.video_id,
        )
        LOGGER.debug(
            "parsed %d segments for %s (%s)", len(segments), self.video_id, self.language_code
        )
        return segments

    def translation_language(self, language_code: str) -> TranslationLanguage:
        """Return the advertised translation target for ``language_code``.

        Only reports availability; no translated document is requested.
        """
        if not self.is_translatable:
            raise NotTranslatableError(self.video_id)
        for candidate in self.translation_languages:
            if candidate.language_code == language_code:
                return candidate
        raise TranslationLanguageNotAvailableError(
            self.video_id,
            requested_language_codes=[language_code],
            message=(
                f"translation language {language_code!r} is not available "
                f"for video {self.video_id!r}"
            ),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "language": self.language,
            "language_code": self.language_code,
            "is_generated": self.is_generated,
            "is_translatable": self.is_translatable,
        }

    def __str__(self) -> str:
        suffix = " [TRANSLATABLE]" if self.is_translatable else ""
        return f'{self.language_code} ("{self.language}"){suffix}'
