"""
Text-piece collection from loosely typed Gemini responses.

Gemini nests generated text several levels deep
(``candidates[*].content.parts[*].text``) and the exact shape drifts
between API versions, so instead of addressing one path we walk the whole
structure and gather every string that sits under a text-looking key.
"""

import re
from typing import Any

# Tunable heuristic for keys that hold generated text.
TEXT_KEY_PATTERN = re.compile(r"text|content|message|output", re.IGNORECASE)


def collect_text_pieces(
    value: Any,
    pieces: list[str] | None = None,
    *,
    key_pattern: re.Pattern[str] = TEXT_KEY_PATTERN,
    skip: Any = None,
) -> list[str]:
    """
    Gather text fragments from ``value`` in pre-order.

    Args:
        value: Any JSON-like value (str, list, dict or scalar).
        pieces: Existing list to append to. A new list is created if None.
        key_pattern: Regex searched against mapping keys.
        skip: Object whose subtree is not visited (matched by identity).

    Returns:
        The list of collected fragments (``pieces`` if one was passed).
    """
    if pieces is None:
        pieces = []
    if skip is not None and value is skip:
        return pieces

    match value:
        case str():
            if value:
                pieces.append(value)
        case list() | tuple():
            for item in value:
                collect_text_pieces(item, pieces, key_pattern=key_pattern, skip=skip)
        case dict():
            for key, item in value.items():
                if isinstance(item, str):
                    if key_pattern.search(str(key)):
                        pieces.append(item)
                    continue
                collect_text_pieces(item, pieces, key_pattern=key_pattern, skip=skip)
        case _:
            pass

    return pieces


def join_text_pieces(pieces: list[str]) -> str:
    """Join fragments with newlines and trim the result."""
    return "\n".join(pieces).strip()
