from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from .errors import NoTranscriptFoundError
from .http_client import Transport
from .manifest import CaptionManifest, TranslationLanguage
from .transcript import Transcript


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptCatalog:
    """All caption tracks a video advertises, split into manual and generated."""

    video_id: str
    manually_created: Mapping[str, Transcript]
    generated: Mapping[str, Transcript]
    translation_languages: tuple[TranslationLanguage, ...] = ()

    @classmethod
    def build(
        cls,
        video_id: str,
        manifest: CaptionManifest,
        transport: Transport,
        accept_language: str = "en-US",
    ) -> "TranscriptCatalog":
        manually_created: dict[str, Transcript] = {}
        generated: dict[str, Transcript] = {}

        for entry in manifest.tracks:
            transcript = Transcript(
                transport=transport,
                video_id=video_id,
                url=entry.base_url,
                language=entry.name,
                language_code=entry.language_code,
                is_generated=entry.is_generated,
                is_translatable=entry.is_translatable,
                translation_languages=(
                    manifest.translation_languages if entry.is_translatable else ()
                ),
                accept_language=accept_language,
            )
            # Duplicate codes: the track listed last wins.
            target = generated if entry.is_generated else manually_created
            target[entry.language_code] = transcript

        LOGGER.info(
            "catalog for %s: %d manual, %d generated, %d translation languages",
            video_id,
            len(manually_created),
            len(generated),
            len(manifest.translation_languages),
        )
        return cls(
            video_id=video_id,
            manually_created=MappingProxyType(manually_created),
            generated=MappingProxyType(generated),
            translation_languages=manifest.translation_languages,
        )

    def find_transcript(self, language_codes: Sequence[str]) -> Transcript:
        return self._find(language_codes, (self.manually_created, self.generated))

    def find_manually_created_transcript(self, language_codes: Sequence[str]) -> Transcript:
        return self._find(language_codes, (self.manually_created,))

    def find_generated_transcript(self, language_codes: Sequence[str]) -> Transcript:
        return self._find(language_codes, (self.generated,))

    def _find(
        self,
        language_codes: Sequence[str],
        partitions: Sequence[Mapping[str, Transcript]],
    ) -> Transcript:
        for language_code in language_codes:
            for partition in partitions:
                transcript = partition.get(language_code)
                if transcript is not None:
                    return transcript

        raise NoTranscriptFoundError(
            self.video_id,
            requested_language_codes=language_codes,
            available=str(self),
        )

    def __iter__(self) -> Iterator[Transcript]:
        yield from self.manually_created.values()
        yield from self.generated.values()

    def __str__(self) -> str:
        def describe(transcripts: Mapping[str, Transcript]) -> str:
            if not transcripts:
                return "None"
            return "\n".join(f" - {transcript}" for transcript in transcripts.values())

        translations = (
            "\n".join(
                f' - {language.language_code} ("{language.language}")'
                for language in self.translation_languages
            )
            or "None"
        )
        return (
            f"For this video ({self.video_id}) transcripts are available in the following languages:\n\n"
            f"(MANUALLY CREATED)\n{describe(self.manually_created)}\n\n"
            f"(GENERATED)\n{describe(self.generated)}\n\n"
            f"(TRANSLATION LANGUAGES)\n{translations}"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "video_id": self.video_id,
            "manually_created": [t.to_dict() for t in self.manually_created.values()],
            "generated": [t.to_dict() for t in self.generated.values()],
            "translation_languages": [language.to_dict() for language in self.translation_languages],
        }
