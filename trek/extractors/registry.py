"""
Extractor registry: an ordered list of site-specific extractors.

Lookup is strictly first-match in registration order; there is no scoring
and no ambiguity resolution.
"""

from typing import Any, Optional, Sequence

from ..logger import get_module_logger
from .base import BaseExtractor

logger = get_module_logger("extractors")


class ExtractorRegistry:
    """
    Registry of site-specific extractors.

    Usage:
        registry = ExtractorRegistry.default()
        extractor = registry.find("https://warpcast.com/~/x", schema_org_data)
        if extractor is None:
            ...  # generic extraction
    """

    def __init__(self):
        self._extractors: list[BaseExtractor] = []

    @classmethod
    def default(cls) -> "ExtractorRegistry":
        """Registry with the built-in extractors, in their fixed order."""
        from .farcaster import FarcasterExtractor
        from .generic import GenericExtractor

        registry = cls()
        registry.register(GenericExtractor())
        registry.register(FarcasterExtractor())
        return registry

    def register(self, extractor: BaseExtractor) -> None:
        """Append an extractor; earlier registrations take precedence."""
        logger.debug(f"Registering extractor: {extractor.name()}")
        self._extractors.append(extractor)

    def find(self, url: str, schema_org_data: Sequence[Any]) -> Optional[BaseExtractor]:
        """Return the first extractor whose can_extract() is true, else None."""
        for extractor in self._extractors:
            if extractor.can_extract(url, schema_org_data):
                logger.debug(f"Found matching extractor: {extractor.name()}")
                return extractor
        return None

    def names(self) -> list[str]:
        return [extractor.name() for extractor in self._extractors]

    def __len__(self) -> int:
        return len(self._extractors)

    def __repr__(self) -> str:
        return f"ExtractorRegistry(extractors={self.names()!r})"
