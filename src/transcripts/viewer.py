from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from src.transcripts.errors import TranscriptError
from src.transcripts.service import TranscriptService


LOGGER = logging.getLogger(__name__)


def parse_language_codes(raw_value: str) -> list[str]:
    return [code.strip() for code in raw_value.split(",") if code.strip()]


def run_transcript_viewer(
    service: Optional[TranscriptService] = None,
    configure_page: bool = True,
) -> None:
    if configure_page:
        st.set_page_config(page_title="Transcript viewer", layout="wide")
    st.title("Transcript viewer")
    st.caption("Fetch the captions of a video by its ID.")

    video_id = st.text_input("Video ID").strip()
    languages = parse_language_codes(st.text_input("Languages (comma-separated, in order of preference)", value="en"))
    preserve_formatting = st.checkbox("Preserve formatting", value=False)

    if not st.button("Fetch transcript"):
        return
    if not video_id:
        st.warning("Enter a video ID.")
        return

    try:
        segments = (service or TranscriptService()).fetch_segments(
            video_id, languages, preserve_formatting=preserve_formatting
        )
    except TranscriptError as exc:
        LOGGER.warning("transcript fetch failed: %s", exc)
        st.error(str(exc))
        st.info(exc.hint)
        return

    st.subheader("Transcript")
    st.text_area("Text", " ".join(segment.text for segment in segments), height=300)
    st.subheader(f"Segments ({len(segments)})")
    st.dataframe([segment.to_dict() for segment in segments])
