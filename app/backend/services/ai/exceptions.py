"""
Shared exceptions for the statement extraction pipeline.

Every failure the pipeline can produce is a ``StatementExtractionError``;
the FastAPI exception handler turns ``to_payload()`` into the JSON error
body and ``status_code`` into the HTTP status.
"""

import json
from typing import Any


def bounded_json(value: Any, limit: int) -> str:
    """Serialize ``value`` as JSON and truncate it to ``limit`` characters."""
    try:
        serialized = json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        serialized = repr(value)
    return serialized[:limit]


class StatementExtractionError(Exception):
    """Raised when statement extraction fails."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        """JSON body returned to the caller."""
        return {"error": self.message}


class ClientInputError(StatementExtractionError):
    """No document was supplied with the request."""

    status_code = 400


class ConfigurationError(StatementExtractionError):
    """A required setting (the Gemini API key) is missing."""


class TransportError(StatementExtractionError):
    """The upstream call failed: network error, timeout or non-2xx status."""

    def __init__(
        self,
        message: str,
        detail: Any = None,
        status: int | None = None,
    ):
        super().__init__(message)
        self.detail = detail
        self.status = status

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "detail": self.detail}


class NoCandidateError(StatementExtractionError):
    """The upstream call succeeded but returned no completion."""

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "rawResponse": self.raw_response}


class SalvageExhaustedError(StatementExtractionError):
    """No JSON could be recovered from the generated text."""

    def __init__(
        self,
        parse_error: str,
        raw_preview: str,
        pieces_collected: int,
        usage_metadata: Any = None,
        candidate_preview: str = "",
    ):
        super().__init__("Failed to parse JSON from Gemini response")
        self.parse_error = parse_error
        self.raw_preview = raw_preview
        self.pieces_collected = pieces_collected
        self.usage_metadata = usage_metadata
        self.candidate_preview = candidate_preview

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "message": self.parse_error,
            "rawPreview": self.raw_preview,
            "piecesCollected": self.pieces_collected,
            "usageMetadata": self.usage_metadata,
            "candidatePreview": self.candidate_preview,
        }
