"""
Turn timestamped transcript segments into a single block of plain text.
"""

import re
from typing import Any, Iterable, Mapping, Optional

NAMED_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&nbsp;": " ",
    "&copy;": "©",
    "&reg;": "®",
    "&trade;": "™",
    "&#x27;": "'",
    "&#x2F;": "/",
    "&#x60;": "`",
    "&#x3D;": "=",
    "&#x3C;": "<",
    "&#x3E;": ">",
    "&#x26;": "&",
    "&#x22;": '"',
}

DECIMAL_ENTITY = re.compile(r"&#(\d+);", re.ASCII)
HEX_ENTITY = re.compile(r"&#x([0-9A-Fa-f]+);")
NAMED_ENTITY = re.compile(r"&[a-zA-Z0-9#]+;")
WHITESPACE = re.compile(r"\s+")


def _from_codepoint(match: "re.Match", base: int) -> str:
    codepoint = int(match.group(1), base)
    # Surrogates and out-of-range values cannot be encoded, keep them verbatim
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        return match.group(0)
    return chr(codepoint)


def decode_html_entities(text: str) -> str:
    """
    Decode HTML character references.

    Decimal references are decoded first, then hex references, then the
    named entities in ``NAMED_ENTITIES``. Unknown entities are left as-is.
    """
    decoded = DECIMAL_ENTITY.sub(lambda m: _from_codepoint(m, 10), text)
    decoded = HEX_ENTITY.sub(lambda m: _from_codepoint(m, 16), decoded)
    return NAMED_ENTITY.sub(lambda m: NAMED_ENTITIES.get(m.group(0), m.group(0)), decoded)


def _segment_text(segment: Any) -> str:
    if isinstance(segment, Mapping):
        text = segment.get("text")
    else:
        text = getattr(segment, "text", None)
    return text if isinstance(text, str) else ""


def _is_sequence(transcript: Any) -> bool:
    return isinstance(transcript, Iterable) and not isinstance(transcript, (str, bytes, Mapping))


def clean_transcript(transcript: Optional[Iterable[Any]]) -> str:
    """
    Decode entities and collapse whitespace for every segment, then join them.

    Args:
        transcript: Ordered segments (dicts or objects with a ``text`` attribute)

    Returns:
        Cleaned transcript text
    """
    if not _is_sequence(transcript):
        return ""

    cleaned = []
    for segment in transcript:
        text = decode_html_entities(_segment_text(segment))
        text = WHITESPACE.sub(" ", text).strip()
        # Blank segments would leave a double space behind
        if text:
            cleaned.append(text)

    return " ".join(cleaned)
