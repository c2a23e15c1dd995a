from __future__ import annotations

import logging

from src.transcripts.config import load_settings
from src.transcripts.service import TranscriptService
from src.transcripts.viewer import run_transcript_viewer

LOGGER = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    LOGGER.info("starting transcript viewer (timeout=%ss)", settings.timeout_seconds)
    run_transcript_viewer(TranscriptService(settings=settings))


if __name__ == "__main__":
    main()
