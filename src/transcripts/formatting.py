import re


FORMATTING_TAGS: tuple[str, ...] = (
    "strong",
    "em",
    "b",
    "i",
    "mark",
    "small",
    "del",
    "ins",
    "sub",
    "sup",
)

# Matches open and close forms (<b>, </b>, <i class="x">) of the listed tags only.
_FORMATTING_TAG_PATTERN = re.compile(r"</?(?:%s)\b[^>]*>" % "|".join(FORMATTING_TAGS))


def strip_formatting(text: str) -> str:
    return _FORMATTING_TAG_PATTERN.sub("", text)
