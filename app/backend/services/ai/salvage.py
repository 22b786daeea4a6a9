"""
JSON salvage for generated text.

Length-capped generation fails in two typical ways: valid JSON wrapped in
prose, and output cut off mid-stream. The strategies below go from
trusting the text completely to assuming only its leading part is sound.
The first slice that parses wins.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import SalvageExhaustedError, bounded_json

logger = logging.getLogger(__name__)

RAW_PREVIEW_CHARS = 32_000


@dataclass(frozen=True)
class SalvageResult:
    """Parsed JSON value and the strategy that recovered it."""

    data: Any
    strategy: str


# =============================================================================
# Strategies
# =============================================================================


def _direct(text: str) -> str | None:
    return text


def _outer_braces(text: str) -> str | None:
    """Slice from the first ``{`` through the last ``}``."""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first : last + 1]
    return None


def _last_close(text: str) -> str | None:
    """Drop everything after the last ``}`` (truncated tail)."""
    last = text.rfind("}")
    if last > 0:
        return text[: last + 1]
    return None


SALVAGE_STRATEGIES: tuple[tuple[str, Callable[[str], str | None]], ...] = (
    ("direct", _direct),
    ("outer-braces", _outer_braces),
    ("last-close", _last_close),
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """``json.loads`` that refuses NaN/Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


# =============================================================================
# Salvage Chain
# =============================================================================


def salvage_json(
    text: str,
    *,
    pieces_collected: int = 0,
    usage_metadata: Any = None,
    candidate: Any = None,
    preview_chars: int = RAW_PREVIEW_CHARS,
) -> SalvageResult:
    """
    Recover a JSON value from generated text.

    Args:
        text: Joined text collected from the response.
        pieces_collected: Number of fragments behind ``text`` (diagnostics).
        usage_metadata: Token usage reported upstream (diagnostics).
        candidate: The selected candidate, previewed on failure.
        preview_chars: Upper bound for every preview in the failure.

    Returns:
        SalvageResult with the parsed value.

    Raises:
        SalvageExhaustedError: If no strategy produced parseable JSON.
    """
    first_error = ""

    for name, strategy in SALVAGE_STRATEGIES:
        sliced = strategy(text)
        if sliced is None:
            continue
        try:
            data = loads_strict(sliced)
        except (ValueError, RecursionError) as e:
            if not first_error:
                first_error = str(e)
            logger.warning("Salvage strategy '%s' failed: %s", name, e)
            continue
        if name != "direct":
            logger.info("Salvage parse succeeded (%s strategy)", name)
        return SalvageResult(data=data, strategy=name)

    logger.error(
        "All salvage strategies failed (%d pieces, %d chars, usage=%s). Raw preview: %s",
        pieces_collected,
        len(text),
        usage_metadata,
        text[:preview_chars],
    )
    raise SalvageExhaustedError(
        parse_error=first_error,
        raw_preview=text[:preview_chars],
        pieces_collected=pieces_collected,
        usage_metadata=usage_metadata,
        candidate_preview=bounded_json(candidate, preview_chars),
    )
