"""
Custom exceptions for trek.

Error philosophy:
  - ParseError          → FAIL HARD: the tokenizer rejected the document, parse() raises.
  - ExtractorError      → FAIL HARD: a matching site-specific extractor failed.
                          No fallback to the generic path once an extractor was selected.
  - StructuredDataError → RECOVERED: a JSON-LD block or embed payload was malformed.
                          The block is dropped, a debug line is logged, parsing continues.

Unparseable numeric attributes (image dimensions) and unparseable source URLs
are recovered inline and never raise.
"""

from typing import Optional


class TrekError(Exception):
    """Base exception for all trek errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- FAIL HARD: stops the parse call ---

class ParseError(TrekError):
    """
    Raised when the HTML tokenizer rejects the document.

    Metadata collection never returns a partial snapshot; the whole
    parse() call fails instead.
    """
    pass


class ExtractorError(TrekError):
    """Raised when a selected site-specific extractor fails."""

    def __init__(
        self,
        message: str,
        extractor: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.extractor = extractor  # registry name, e.g. "farcaster"

    def to_response(self) -> dict:
        """Convert to an error payload for callers that serialise failures."""
        return {
            "error": "ExtractorError",
            "message": self.message,
            "extractor": self.extractor,
            "details": self.details
        }


# --- RECOVERED: caught inside the collector / resolver ---

class StructuredDataError(TrekError):
    """
    Raised when a JSON-LD block or the mini-app embed payload is malformed.

    Never escapes parse(): the offending block is dropped.
    """

    def __init__(
        self,
        message: str,
        source: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.source = source  # "ld+json" or "fc:frame"
