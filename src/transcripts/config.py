import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Optional


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class Settings:
    watch_url: str = "https://www.youtube.com/watch?v={video_id}"
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US"
    consent_cookie_domain: str = ".youtube.com"
    timeout_seconds: float = 30.0


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    source = os.environ if env is None else env
    settings = Settings()

    user_agent = source.get("TRANSCRIPTS_USER_AGENT", "").strip()
    if user_agent:
        settings = replace(settings, user_agent=user_agent)

    accept_language = source.get("TRANSCRIPTS_ACCEPT_LANGUAGE", "").strip()
    if accept_language:
        settings = replace(settings, accept_language=accept_language)

    raw_timeout = source.get("TRANSCRIPTS_TIMEOUT_SECONDS", "").strip()
    if raw_timeout:
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError as exc:
            raise ValueError("TRANSCRIPTS_TIMEOUT_SECONDS must be a number") from exc
        if timeout_seconds <= 0:
            raise ValueError("TRANSCRIPTS_TIMEOUT_SECONDS must be positive")
        settings = replace(settings, timeout_seconds=timeout_seconds)

    return settings
