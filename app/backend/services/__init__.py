"""
Services package for the bank statement extraction application.

Contains:
- ai: Gemini integration and JSON salvage for statement extraction
"""

from .ai import StatementExtractor, get_statement_extractor

__all__ = ["StatementExtractor", "get_statement_extractor"]
