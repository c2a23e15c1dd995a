"""Typed view of the caption manifest embedded in a watch page.

``parse_manifest`` is the single place that touches the untyped JSON. Every
missing or mis-typed field is reported as a ``TranscriptStageError`` naming the
field path, so later stages only ever see validated values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .errors import NoTranscriptFoundError, TranscriptStageError


MANIFEST_STAGE = "extract manifest"
GENERATED_KIND = "asr"


@dataclass(frozen=True)
class TranslationLanguage:
    language: str
    language_code: str

    def to_dict(self) -> dict[str, object]:
        return {"language": self.language, "language_code": self.language_code}


@dataclass(frozen=True)
class CaptionTrackEntry:
    base_url: str
    name: str
    language_code: str
    kind: Optional[str] = None
    is_translatable: bool = False

    @property
    def is_generated(self) -> bool:
        return self.kind == GENERATED_KIND


@dataclass(frozen=True)
class CaptionManifest:
    tracks: tuple[CaptionTrackEntry, ...]
    translation_languages: tuple[TranslationLanguage, ...] = ()


def _invalid(video_id: str, path: str, expected: str) -> TranscriptStageError:
    return TranscriptStageError(video_id, MANIFEST_STAGE, detail=f"{path} must be {expected}")


def _require_mapping(value: object, path: str, video_id: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise _invalid(video_id, path, "an object")
    return value


def _require_list(value: object, path: str, video_id: str) -> list[object]:
    if not isinstance(value, list):
        raise _invalid(video_id, path, "a list")
    return value


def _require_text(value: object, path: str, video_id: str) -> str:
    if not isinstance(value, str):
        raise _invalid(video_id, path, "a string")
    return value


def _parse_track(raw: object, path: str, video_id: str) -> CaptionTrackEntry:
    track = _require_mapping(raw, path, video_id)
    name = _require_mapping(track.get("name"), f"{path}.name", video_id)

    kind = track.get("kind")
    if kind is not None and not isinstance(kind, str):
        raise _invalid(video_id, f"{path}.kind", "a string")

    is_translatable = track.get("isTranslatable", False)
    if not isinstance(is_translatable, bool):
        raise _invalid(video_id, f"{path}.isTranslatable", "a boolean")

    return CaptionTrackEntry(
        base_url=_require_text(track.get("baseUrl"), f"{path}.baseUrl", video_id),
        name=_require_text(name.get("simpleText"), f"{path}.name.simpleText", video_id),
        language_code=_require_text(track.get("languageCode"), f"{path}.languageCode", video_id),
        kind=kind,
        is_translatable=is_translatable,
    )


def _parse_translation_language(raw: object, path: str, video_id: str) -> TranslationLanguage:
    entry = _require_mapping(raw, path, video_id)
    language_name = _require_mapping(entry.get("languageName"), f"{path}.languageName", video_id)
    return TranslationLanguage(
        language=_require_text(
            language_name.get("simpleText"), f"{path}.languageName.simpleText", video_id
        ),
        language_code=_require_text(entry.get("languageCode"), f"{path}.languageCode", video_id),
    )


def parse_manifest(raw: Mapping[str, object], video_id: str) -> CaptionManifest:
    if "captionTracks" not in raw:
        raise NoTranscriptFoundError(video_id, message=f"no caption tracks listed for video {video_id!r}")

    raw_tracks = _require_list(raw["captionTracks"], "captionTracks", video_id)
    tracks = tuple(
        _parse_track(item, f"captionTracks[{index}]", video_id)
        for index, item in enumerate(raw_tracks)
    )

    raw_languages = raw.get("translationLanguages")
    if raw_languages is None:
        translation_languages: tuple[TranslationLanguage, ...] = ()
    else:
        translation_languages = tuple(
            _parse_translation_language(item, f"translationLanguages[{index}]", video_id)
            for index, item in enumerate(
                _require_list(raw_languages, "translationLanguages", video_id)
            )
        )

    return CaptionManifest(tracks=tracks, translation_languages=translation_languages)
