"""Error kinds raised by the transcript pipeline.

Every error is terminal: nothing in the pipeline retries. Each class carries a
``hint`` so callers can show an actionable message without matching on text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional


class TranscriptError(Exception):
    hint: str = "Check the video ID and try again."

    def __init__(self, video_id: str, message: str = "") -> None:
        self.video_id = video_id
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return f"could not retrieve a transcript for video {self.video_id!r}"

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, object]:
        return {
            "error": str(self),
            "kind": self.kind,
            "video_id": self.video_id,
            "hint": self.hint,
        }


class InvalidVideoIdError(TranscriptError):
    hint = "Pass the bare video ID (e.g. 'dQw4w9WgXcQ'), not the full URL."

    def default_message(self) -> str:
        return f"invalid video ID {self.video_id!r}: looks like a URL"


class TooManyRequestsError(TranscriptError):
    hint = "The platform is serving a CAPTCHA to this client; wait and try again later."

    def default_message(self) -> str:
        return f"too many requests while fetching video {self.video_id!r}"


class VideoUnavailableError(TranscriptError):
    hint = "The video does not exist or is private/removed."

    def default_message(self) -> str:
        return f"video {self.video_id!r} is unavailable"


class TranscriptsDisabledError(TranscriptError):
    hint = "Captions are turned off for this video."

    def default_message(self) -> str:
        return f"transcripts are disabled for video {self.video_id!r}"


class NoTranscriptFoundError(TranscriptError):
    hint = "Try another language code; run the 'list' command to see what is available."

    def __init__(
        self,
        video_id: str,
        requested_language_codes: Sequence[str] = (),
        available: str = "",
        message: str = "",
    ) -> None:
        self.requested_language_codes = tuple(requested_language_codes)
        self.available = available
        super().__init__(video_id, message)

    def default_message(self) -> str:
        message = (
            f"no transcript found for video {self.video_id!r} "
            f"in languages {list(self.requested_language_codes)}"
        )
        if self.available:
            message = f"{message}\n{self.available}"
        return message


class TranslationLanguageNotAvailableError(NoTranscriptFoundError):
    hint = "Pick one of the translation languages advertised for this track."


class NotTranslatableError(TranscriptError):
    hint = "This track cannot be translated; request another track instead."

    def default_message(self) -> str:
        return f"transcript of video {self.video_id!r} is not translatable"


class ConsentCookieError(TranscriptError):
    hint = "The consent page could not be bypassed; try from another region or network."

    def default_message(self) -> str:
        return f"failed to create consent cookie for video {self.video_id!r}"


class PlatformRequestFailedError(TranscriptError):
    hint = "The platform rejected the request; try again later."

    def __init__(self, video_id: str, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(video_id)

    def default_message(self) -> str:
        return f"platform request failed with status {self.status_code}: {self.url}"


class TranscriptStageError(TranscriptError):
    """Wraps a transport, decode or parse failure with the stage it happened in.

    The underlying exception is chained as ``__cause__``.
    """

    hint = "The page or caption format may have changed; re-run with --verbose for details."

    def __init__(self, video_id: str, stage: str, cause: Optional[BaseException] = None, detail: str = "") -> None:
        self.stage = stage
        self.detail = detail or (str(cause) if cause is not None else "")
        super().__init__(video_id)

    def default_message(self) -> str:
        if self.detail:
            return f"failed to {self.stage}: {self.detail}"
        return f"failed to {self.stage}"
