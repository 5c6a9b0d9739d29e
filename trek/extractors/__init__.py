"""Site-specific extractors and the registry that selects between them."""

from .base import BaseExtractor
from .registry import ExtractorRegistry
from .generic import GenericExtractor
from .farcaster import FarcasterExtractor

__all__ = [
    "BaseExtractor",
    "ExtractorRegistry",
    "GenericExtractor",
    "FarcasterExtractor",
]
