"""
Pydantic models for the statement extraction pipeline.

Covers the outbound Gemini request and the API response envelopes. The
extracted statement itself is passed through as plain JSON: its shape is
advisory and only the upstream model decides what it contains.
"""

import base64
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Handle both package imports and standalone imports
try:
    from .config import APP_VERSION
except ImportError:
    from config import APP_VERSION


class GenerationConfig(BaseModel):
    """Generation limits attached to every Gemini request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_output_tokens: int = Field(
        default=65535,
        ge=1,
        alias="maxOutputTokens",
    )
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    response_mime_type: str = Field(
        default="application/json",
        alias="responseMimeType",
    )


class ExtractionRequest(BaseModel):
    """
    One document plus the fixed instructions sent to Gemini.

    Attributes:
        document: Raw PDF bytes.
        instruction: Natural-language instruction placed before the document.
        instructions_block: Field-level instructions serialized next to the schema.
        schema_descriptor: Expected output shape (field names and example formats).
        mime_type: MIME type of ``document``.
        generation: Output limits for the call.
    """

    model_config = ConfigDict(frozen=True)

    document: bytes = Field(..., min_length=1)
    instruction: str
    instructions_block: str
    schema_descriptor: dict[str, Any]
    mime_type: str = "application/pdf"
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    def to_payload(self) -> dict[str, Any]:
        """Build the ``generateContent`` JSON body."""
        encoded = base64.b64encode(self.document).decode("ascii")
        return {
            "contents": [
                {
                    "parts": [
                        {"text": self.instruction},
                        {"inline_data": {"mime_type": self.mime_type, "data": encoded}},
                        {
                            "text": json.dumps(
                                {
                                    "instructions": self.instructions_block,
                                    "schema": self.schema_descriptor,
                                }
                            )
                        },
                    ]
                }
            ],
            "generationConfig": self.generation.model_dump(by_alias=True),
        }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default=APP_VERSION)
    model: str = Field(..., description="Configured Gemini model")
    api_key_configured: bool = Field(
        ...,
        description="Whether GEMINI_API_KEY is set",
    )


class ErrorResponse(BaseModel):
    """JSON error body (extra diagnostic keys depend on the failure)."""

    model_config = ConfigDict(extra="allow")

    error: str = Field(..., description="Human-readable failure message")
