"""
FastAPI application for bank statement extraction.

Provides endpoints for:
- Uploading a PDF bank statement and receiving structured JSON
- Health checks
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .config import APP_VERSION, get_settings
    from .models import HealthResponse
    from .routers import statements
    from .services.ai import (
        StatementExtractionError,
        close_statement_extractor,
        get_statement_extractor,
    )
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    backend_dir = Path(__file__).parent
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))
    from config import APP_VERSION, get_settings
    from models import HealthResponse
    from routers import statements
    from services.ai import (
        StatementExtractionError,
        close_statement_extractor,
        get_statement_extractor,
    )

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Bank Statement Extraction Service...")
    get_statement_extractor()
    logger.info("Services initialized successfully")
    yield
    await close_statement_extractor()
    logger.info("Shutting down Bank Statement Extraction Service...")


settings = get_settings()

# Create FastAPI application
app = FastAPI(
    title="Bank Statement Extraction API",
    description="Structured bank statement extraction from PDFs using Gemini",
    version=APP_VERSION,
    lifespan=lifespan,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


def _health() -> HealthResponse:
    current = get_settings()
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        model=current.gemini_model,
        api_key_configured=bool(current.gemini_api_key),
    )


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return _health()


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(statements.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(StatementExtractionError)
async def statement_extraction_error_handler(
    request: Request, exc: StatementExtractionError
):
    """Convert extraction failures into JSON error bodies."""
    if exc.status_code >= 500:
        logger.error(
            "Statement extraction failed (%s): %s",
            type(exc).__name__,
            exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_payload(),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
