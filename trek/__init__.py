"""
trek

Extracts the main readable content and page metadata from HTML documents.
- MetadataCollector: One streaming pass gathering meta tags, title, favicon, JSON-LD
- MetadataResolver: Priority-ordered resolution of title, author, image, ...
- ClutterRemover: Selector-based removal of navigation, ads and widgets
- standardize_content: Whitespace, comment, heading and wrapper normalization

Public API surface:
  Pipeline: Trek, parse_html, parse_html_file
  Stages: MetadataCollector, MetadataResolver, ClutterRemover, ContentScorer
  Extractors: BaseExtractor, ExtractorRegistry
  Data models: TrekOptions, Response, Metadata, CollectedData, MetaTag, ...
  Error types: TrekError, ParseError (fatal), ExtractorError (fatal),
               StructuredDataError (recovered)
"""

# --- Pipeline ---
from .main import Trek, parse_html, parse_html_file

# --- Pipeline stages ---
from .collector import MetadataCollector
from .metadata import MetadataResolver
from .clutter import ClutterRemover
from .scoring import ContentScorer
from .standardize import standardize_content
from .text import html_to_markdown, html_to_text

# --- Site-specific extractors ---
from .extractors import BaseExtractor, ExtractorRegistry, FarcasterExtractor, GenericExtractor

# --- Data models ---
from .schemas import (
    CollectedData,
    ExtractedContent,
    Metadata,
    MetaTag,
    MiniAppEmbed,
    Response,
    TrekOptions,
)

# --- Exceptions ---
from .exceptions import ExtractorError, ParseError, StructuredDataError, TrekError

__version__ = "0.2.0"
__all__ = [
    "Trek",
    "parse_html",
    "parse_html_file",
    "MetadataCollector",
    "MetadataResolver",
    "ClutterRemover",
    "ContentScorer",
    "standardize_content",
    "html_to_markdown",
    "html_to_text",
    "BaseExtractor",
    "ExtractorRegistry",
    "FarcasterExtractor",
    "GenericExtractor",
    "CollectedData",
    "ExtractedContent",
    "Metadata",
    "MetaTag",
    "MiniAppEmbed",
    "Response",
    "TrekOptions",
    "TrekError",
    "ParseError",
    "ExtractorError",
    "StructuredDataError",
]
