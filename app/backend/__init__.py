"""
Bank Statement Extraction Backend Application.

A FastAPI service that extracts structured data (statement info, account
summary, transactions) from PDF bank statements using Google Gemini.
"""

from .config import APP_VERSION as __version__

__all__ = ["__version__"]
