"""
AI service package for bank statement extraction.

This package is split into:
- collector: Text-piece collection from Gemini responses
- salvage: Escalating JSON recovery strategies
- gemini_client: HTTP transport to the Gemini API
- extraction: The orchestrator tying them together
"""

import logging

# Handle both package imports and standalone imports
try:
    from ...config import ExtractionConfig, get_settings
except ImportError:
    from config import ExtractionConfig, get_settings

from .collector import TEXT_KEY_PATTERN, collect_text_pieces, join_text_pieces
from .exceptions import (
    ClientInputError,
    ConfigurationError,
    NoCandidateError,
    SalvageExhaustedError,
    StatementExtractionError,
    TransportError,
)
from .extraction import (
    STATEMENT_SCHEMA,
    StatementExtractor,
    build_extraction_request,
    select_candidate,
    usage_metadata_of,
)
from .gemini_client import GeminiClient
from .salvage import SALVAGE_STRATEGIES, SalvageResult, salvage_json

logger = logging.getLogger(__name__)

__all__ = [
    "ClientInputError",
    "ConfigurationError",
    "GeminiClient",
    "NoCandidateError",
    "SALVAGE_STRATEGIES",
    "STATEMENT_SCHEMA",
    "SalvageExhaustedError",
    "SalvageResult",
    "StatementExtractionError",
    "StatementExtractor",
    "TEXT_KEY_PATTERN",
    "TransportError",
    "build_extraction_request",
    "close_statement_extractor",
    "collect_text_pieces",
    "get_statement_extractor",
    "join_text_pieces",
    "salvage_json",
    "select_candidate",
    "usage_metadata_of",
]


# =============================================================================
# Singleton Factory
# =============================================================================

_extractor: StatementExtractor | None = None


def get_statement_extractor() -> StatementExtractor:
    """Get or create the statement extractor singleton."""
    global _extractor
    if _extractor is None:
        _extractor = StatementExtractor(ExtractionConfig.from_settings(get_settings()))
    return _extractor


async def close_statement_extractor() -> None:
    """Close the singleton's HTTP client and drop it."""
    global _extractor
    if _extractor is not None:
        await _extractor.aclose()
        _extractor = None
        logger.info("Statement extractor closed")
