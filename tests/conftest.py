"""Pytest configuration and fixtures."""

import json
from typing import Any, Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.backend.config import ExtractionConfig
from app.backend.main import app
from app.backend.services.ai import GeminiClient, StatementExtractor, get_statement_extractor


@pytest.fixture
def extraction_config() -> ExtractionConfig:
    """Extraction settings with a fake API key and small previews."""
    return ExtractionConfig(
        api_key="test-key",
        model="gemini-test",
        base_url="https://gemini.invalid/v1beta",
        timeout_ms=5000,
        preview_chars=200,
        log_preview_chars=200,
    )


@pytest.fixture
def mock_gemini_client() -> AsyncMock:
    """Gemini client double; set ``generate_content.return_value`` per test."""
    return AsyncMock(spec=GeminiClient)


@pytest.fixture
def extractor(
    extraction_config: ExtractionConfig, mock_gemini_client: AsyncMock
) -> StatementExtractor:
    return StatementExtractor(extraction_config, client=mock_gemini_client)


@pytest.fixture
def client(extractor: StatementExtractor) -> Generator[TestClient, None, None]:
    """Create a test client with the extractor dependency overridden."""
    app.dependency_overrides[get_statement_extractor] = lambda: extractor
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_statement() -> dict[str, Any]:
    """A two-transaction statement in the requested output shape."""
    return {
        "statement_info": {
            "billing_start_cycle": "01/01/2024",
            "billing_end_cycle": "01/31/2024",
            "account_holder_name": "Jane Doe",
            "account_number": "****1234",
            "account_holder_address": "1 Main St, Springfield",
            "bank_name": "First Example Bank",
        },
        "account_summary": {
            "total_withdrawals": "-150.25",
            "total_deposits": "2000.00",
        },
        "transactions": [
            {
                "date": "01/03/2024",
                "amount": "2000.00",
                "description": "Payroll deposit",
                "daily_balance": "3000.00",
                "transaction_id": "TX-001",
            },
            {
                "date": "01/15/2024",
                "amount": "-150.25",
                "description": "Utility payment",
                "daily_balance": "2849.75",
                "transaction_id": "TX-002",
            },
        ],
    }


def _gemini_response(text: str, **extra: Any) -> dict[str, Any]:
    """Wrap generated text the way generateContent returns it."""
    body: dict[str, Any] = {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
                "index": 0,
            }
        ],
    }
    body.update(extra)
    return body


@pytest.fixture
def make_gemini_response():
    """Factory fixture building generateContent bodies from text."""
    return _gemini_response


@pytest.fixture
def statement_response(sample_statement: dict[str, Any]) -> dict[str, Any]:
    """Gemini response whose candidate text is the sample statement."""
    return _gemini_response(
        json.dumps(sample_statement),
        usageMetadata={
            "promptTokenCount": 1200,
            "candidatesTokenCount": 340,
            "totalTokenCount": 1540,
        },
        modelVersion="gemini-test",
    )


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal two-page PDF for testing.

    The content is never parsed locally; it only has to look like a PDF.
    """
    return b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R 4 0 R] /Count 2 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] >>
endobj
4 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] >>
endobj
trailer
<< /Size 5 /Root 1 0 R >>
%%EOF"""
