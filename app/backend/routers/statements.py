"""
Router for bank statement processing.

Handles:
- PDF statement upload and extraction
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

# Handle both package imports and standalone imports
try:
    from ..models import ErrorResponse
    from ..services.ai import ClientInputError, StatementExtractor, get_statement_extractor
except ImportError:
    from models import ErrorResponse
    from services.ai import ClientInputError, StatementExtractor, get_statement_extractor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["statements"])


@router.post(
    "/process-pdf",
    responses={
        400: {"model": ErrorResponse, "description": "No PDF file uploaded"},
        500: {"model": ErrorResponse, "description": "Extraction failed"},
    },
)
async def process_pdf(
    extractor: Annotated[StatementExtractor, Depends(get_statement_extractor)],
    bank_statement: Annotated[
        UploadFile | None,
        File(alias="bankStatement", description="Bank statement PDF"),
    ] = None,
) -> JSONResponse:
    """
    Extract structured data from an uploaded bank statement.

    Returns the statement JSON (``statement_info``, ``account_summary``,
    ``transactions``) exactly as recovered from the model output.
    """
    if bank_statement is None:
        raise ClientInputError("No PDF file uploaded.")

    try:
        file_bytes = await bank_statement.read()
        if not file_bytes:
            raise ClientInputError("No PDF file uploaded.")

        logger.info(
            "Processing statement: %s (%d bytes)",
            bank_statement.filename,
            len(file_bytes),
        )
        statement = await extractor.extract(file_bytes, filename=bank_statement.filename)
        return JSONResponse(content=statement)
    finally:
        await bank_statement.close()
