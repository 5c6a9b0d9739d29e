"""
Site-specific extractor interface.

Each extractor implements BaseExtractor so the Pipeline Controller doesn't
need to know which site it is handling.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..schemas import ExtractedContent


class BaseExtractor(ABC):
    """Abstract base class for site-specific extractors."""

    @abstractmethod
    def can_extract(self, url: str, schema_org_data: Sequence[Any]) -> bool:
        """
        Check whether this extractor handles the current document.

        Args:
            url: Page URL ("" when unknown)
            schema_org_data: Structured-data entries from the collection pass

        Returns:
            True if this extractor should take over the document
        """
        pass

    @abstractmethod
    def extract(self, html: str) -> ExtractedContent:
        """
        Extract content from the raw HTML document.

        Args:
            html: Raw HTML, untouched by clutter removal

        Returns:
            ExtractedContent; fields left as None keep the resolver's values
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """Registry name, reported as Response.extractor_type."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name()!r})"
