"""Timed-text caption document parser.

The platform serves captions as a small XML dialect::

    <transcript>
      <text start="0.5" dur="2.3">Hello &amp; welcome</text>
      ...
    </transcript>

Each ``text`` element becomes one :class:`Segment`, in document order.
"""

from __future__ import annotations

import html
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from xml.sax.saxutils import escape

from .errors import TranscriptStageError
from .formatting import strip_formatting


PARSE_STAGE = "parse document"


@dataclass(frozen=True)
class Segment:
    text: str
    start: float
    duration: float

    def to_dict(self) -> dict[str, object]:
        return {"text": self.text, "start": self.start, "duration": self.duration}


def _inner_markup(element: ET.Element) -> str:
    # Rebuild the element's raw content so entity unescaping below runs exactly once.
    parts = [escape(element.text or "")]
    for child in element:
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


def _float_attribute(element: ET.Element, name: str, video_id: str) -> float:
    raw_value = element.get(name)
    if raw_value is None:
        return 0.0
    try:
        return float(raw_value)
    except ValueError as exc:
        raise TranscriptStageError(
            video_id,
            PARSE_STAGE,
            cause=exc,
            detail=f"invalid {name!r} attribute {raw_value!r}",
        ) from exc


def parse_caption_document(
    body: bytes,
    preserve_formatting: bool = False,
    video_id: str = "",
) -> list[Segment]:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise TranscriptStageError(video_id, PARSE_STAGE, cause=exc) from exc

    segments: list[Segment] = []
    for element in root:
        if element.tag != "text":
            continue

        # Strip before unescaping: only real child elements are formatting,
        # entity-escaped brackets are visible text.
        markup = _inner_markup(element)
        if not preserve_formatting:
            markup = strip_formatting(markup)
        text = html.unescape(markup)

        segments.append(
            Segment(
                text=text,
                start=_float_attribute(element, "start", video_id),
                duration=_float_attribute(element, "dur", video_id),
            )
        )

    return segments
