"""
Routers package for FastAPI endpoints.

Organized by domain:
- statements: Bank statement upload and extraction
"""

from . import statements

__all__ = ["statements"]
