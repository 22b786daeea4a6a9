"""
Statement extraction: send a PDF to Gemini and recover the structured JSON.

Pipeline per request:
    build request -> generateContent -> select candidate
    -> collect text pieces -> salvage JSON
"""

import logging
import re
from typing import Any

# Handle both package imports and standalone imports
try:
    from ...config import ExtractionConfig
    from ...models import ExtractionRequest, GenerationConfig
except ImportError:
    from config import ExtractionConfig
    from models import ExtractionRequest, GenerationConfig

from .collector import collect_text_pieces, join_text_pieces
from .exceptions import (
    ClientInputError,
    ConfigurationError,
    NoCandidateError,
    bounded_json,
)
from .gemini_client import GeminiClient
from .salvage import salvage_json

logger = logging.getLogger(__name__)


# =============================================================================
# Extraction Prompt
# =============================================================================

EXTRACTION_INSTRUCTION = (
    "Extract structured data from this PDF according to the provided schema."
)

FIELD_INSTRUCTIONS = (
    "Extract the following fields only if present in the document. "
    "Ensure you process all pages of the document to extract all transactions. "
    "If a field is missing, return an empty string or null. "
    "Do not invent data. Represent withdrawals as negative amounts."
)

STATEMENT_SCHEMA: dict[str, Any] = {
    "statement_info": {
        "billing_start_cycle": "mm/dd/yyyy",
        "billing_end_cycle": "mm/dd/yyyy",
        "account_holder_name": "",
        "account_number": "",
        "account_holder_address": "",
        "bank_name": "",
    },
    "account_summary": {
        "total_withdrawals": "",
        "total_deposits": "",
    },
    "transactions": [
        {
            "date": "",
            "amount": "",
            "description": "",
            "daily_balance": "",
            "transaction_id": "",
        }
    ],
}


# =============================================================================
# Helper Functions
# =============================================================================


def build_extraction_request(
    document: bytes, config: ExtractionConfig
) -> ExtractionRequest:
    """Combine the document with the fixed prompt, schema and limits."""
    return ExtractionRequest(
        document=document,
        instruction=EXTRACTION_INSTRUCTION,
        instructions_block=FIELD_INSTRUCTIONS,
        schema_descriptor=STATEMENT_SCHEMA,
        generation=GenerationConfig(
            max_output_tokens=config.max_output_tokens,
            temperature=config.temperature,
            response_mime_type=config.response_mime_type,
        ),
    )


def select_candidate(response: Any) -> Any:
    """Return the first candidate, or None if there is none."""
    if not isinstance(response, dict):
        return None
    candidates = response.get("candidates")
    if isinstance(candidates, list) and candidates:
        return candidates[0]
    return None


def usage_metadata_of(response: Any) -> Any:
    """Token usage counters, if the response carries any."""
    if not isinstance(response, dict):
        return None
    return response.get("usageMetadata") or response.get("usage") or None


# =============================================================================
# Orchestrator
# =============================================================================


class StatementExtractor:
    """
    Extracts bank statement data from PDFs through Gemini.

    Configuration is fixed at construction; the instance holds no
    per-request state and can serve concurrent requests.
    """

    def __init__(
        self,
        config: ExtractionConfig,
        client: GeminiClient | None = None,
    ):
        """
        Initialize the extractor.

        Args:
            config: Immutable extraction settings.
            client: Gemini client. Created from ``config`` if None.
        """
        self.config = config
        self.client = client if client is not None else GeminiClient(config)
        self._key_pattern = re.compile(config.text_key_pattern, re.IGNORECASE)

        if not config.api_key:
            logger.warning(
                "GEMINI_API_KEY is not set. Extraction requests will fail until it is configured."
            )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def extract(self, document: bytes | None, filename: str | None = None) -> Any:
        """
        Extract the statement JSON from one PDF.

        Args:
            document: PDF bytes.
            filename: Original filename, used for logging only.

        Returns:
            The parsed statement (normally a dict with ``statement_info``,
            ``account_summary`` and ``transactions``), unchanged.

        Raises:
            ClientInputError: If no document was supplied.
            ConfigurationError: If the API key is missing.
            TransportError: If the Gemini call failed.
            NoCandidateError: If Gemini returned no candidate.
            SalvageExhaustedError: If no JSON could be recovered.
        """
        if not document:
            raise ClientInputError("No PDF file uploaded.")
        if not self.config.api_key:
            raise ConfigurationError("GEMINI_API_KEY not set")

        logger.info(
            "Extracting statement from '%s' (%d bytes) with model %s",
            filename or "<upload>",
            len(document),
            self.config.model,
        )

        request = build_extraction_request(document, self.config)
        response = await self.client.generate_content(request.to_payload())

        if isinstance(response, dict):
            logger.info("Gemini response keys: %s", list(response.keys()))
        logger.debug(
            "Gemini response preview: %s",
            bounded_json(response, self.config.log_preview_chars),
        )

        candidate = select_candidate(response)
        if candidate is None:
            logger.error(
                "No candidate returned from Gemini: %s",
                bounded_json(response, self.config.log_preview_chars),
            )
            raise NoCandidateError(
                "No candidate returned from Gemini",
                raw_response=bounded_json(response, self.config.preview_chars),
            )

        pieces = collect_text_pieces(candidate, key_pattern=self._key_pattern)
        collect_text_pieces(
            response, pieces, key_pattern=self._key_pattern, skip=candidate
        )
        joined_text = join_text_pieces(pieces)

        usage = usage_metadata_of(response)
        logger.info(
            "Collected %d text piece(s), joined length %d chars",
            len(pieces),
            len(joined_text),
        )
        logger.info("Gemini usage metadata: %s", usage or "none reported")

        result = salvage_json(
            joined_text,
            pieces_collected=len(pieces),
            usage_metadata=usage,
            candidate=candidate,
            preview_chars=self.config.preview_chars,
        )
        logger.info("Statement extracted via '%s' parse", result.strategy)
        return result.data

