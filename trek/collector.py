"""
Metadata Collector: one streaming pass over the raw HTML.

Gathers meta tags, the <title> text, the favicon link, JSON-LD blocks and
the raw fc:frame embed payload into an immutable CollectedData snapshot.

The pass is driven by lxml's event-based parser interface: the document is
fed in chunks, so the text of a single element can arrive as several
data() events. Title and JSON-LD text are buffered from the element's
start() and flushed at its end(), which is the "last chunk" signal.
"""

import json
from typing import Any, Optional

from lxml import etree

from .exceptions import ParseError, StructuredDataError
from .logger import get_module_logger
from .schemas import CollectedData, MetaTag

logger = get_module_logger("collector")

# Characters handed to the tokenizer per feed() call
CHUNK_SIZE = 16384

JSON_LD_TYPE = "application/ld+json"
MINI_APP_META_NAME = "fc:frame"


class _CollectorTarget:
    """
    Parser target receiving start/data/end events in document order.

    Each buffer is either None (idle) or a list of chunks (accumulating).
    """

    def __init__(self):
        self.meta_tags: list[MetaTag] = []
        self.schema_org_data: list[Any] = []
        self.title: Optional[str] = None
        self.favicon: Optional[str] = None
        self.mini_app_embed: Optional[str] = None

        self._title_buffer: Optional[list[str]] = None
        self._script_buffer: Optional[list[str]] = None

    # --- parser events ---

    def start(self, tag, attrib):
        tag = tag.lower()
        if tag == 'meta':
            self._collect_meta(attrib)
        elif tag == 'link':
            self._collect_favicon(attrib)
        elif tag == 'title':
            # A new title element discards whatever was buffered before
            self._title_buffer = []
        elif tag == 'script' and (attrib.get('type') or '').strip().lower() == JSON_LD_TYPE:
            self._script_buffer = []

    def data(self, data):
        if self._title_buffer is not None:
            self._title_buffer.append(data)
        if self._script_buffer is not None:
            self._script_buffer.append(data)

    def end(self, tag):
        tag = tag.lower()
        if tag == 'title' and self._title_buffer is not None:
            self._flush_title()
        elif tag == 'script' and self._script_buffer is not None:
            self._flush_script()

    def close(self) -> CollectedData:
        return CollectedData(
            meta_tags=tuple(self.meta_tags),
            schema_org_data=tuple(self.schema_org_data),
            title=self.title,
            favicon=self.favicon,
            mini_app_embed=self.mini_app_embed,
        )

    # --- element handlers ---

    def _collect_meta(self, attrib):
        name = attrib.get('name')
        prop = attrib.get('property')
        content = attrib.get('content')
        if content is None or (name is None and prop is None):
            return

        if name == MINI_APP_META_NAME:
            self.mini_app_embed = content

        # The tokenizer has already decoded character references in attributes
        self.meta_tags.append(MetaTag(name=name, property=prop, content=content))

    def _collect_favicon(self, attrib):
        href = attrib.get('href')
        rel = (attrib.get('rel') or '').strip()
        tokens = rel.lower().split()
        if href is None or not ('icon' in tokens or 'shortcut' in tokens):
            return

        # First favicon wins, except that rel="icon" replaces a shortcut icon
        if self.favicon is None or rel == 'icon':
            self.favicon = href

    def _flush_title(self):
        chunks = self._title_buffer
        self._title_buffer = None
        if chunks:
            self.title = ''.join(chunks).strip()

    def _flush_script(self):
        raw = ''.join(self._script_buffer)
        self._script_buffer = None
        try:
            entries = parse_json_ld(raw)
        except StructuredDataError as e:
            logger.debug(f"Dropping JSON-LD block: {e.message}")
            return
        self.schema_org_data.extend(entries)


def parse_json_ld(raw: str) -> list[Any]:
    """
    Parse one JSON-LD block into structured-data entries.

    A top-level "@graph" list is flattened into its elements; any other
    value is a single entry.

    Raises:
        StructuredDataError: if the block is not strict JSON
    """
    try:
        value = json.loads(raw)
    except ValueError as e:
        raise StructuredDataError(
            f"Invalid JSON-LD: {e}",
            source="ld+json",
            details={"length": len(raw)}
        )

    if isinstance(value, dict) and isinstance(value.get('@graph'), list):
        return list(value['@graph'])
    return [value]


class MetadataCollector:
    """Builds a CollectedData snapshot from raw HTML in one forward pass."""

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        self.chunk_size = chunk_size

    def collect(self, html: str) -> CollectedData:
        """
        Run the collection pass.

        Args:
            html: Raw HTML document

        Returns:
            Immutable CollectedData

        Raises:
            ParseError: if the tokenizer rejects the document
        """
        if not html or not html.strip():
            return CollectedData()

        target = _CollectorTarget()
        parser = etree.HTMLParser(target=target)

        try:
            for offset in range(0, len(html), self.chunk_size):
                parser.feed(html[offset:offset + self.chunk_size])
            collected = parser.close()
        except etree.LxmlError as e:
            logger.error(f"Tokenizer rejected the document: {e}")
            raise ParseError(
                f"Failed to parse HTML: {e}",
                details={"length": len(html)}
            ) from e

        logger.debug(
            f"Collected {len(collected.meta_tags)} meta tags, "
            f"{len(collected.schema_org_data)} structured-data entries"
        )
        return collected


def collect(html: str) -> CollectedData:
    """Convenience function to collect metadata from HTML."""
    return MetadataCollector().collect(html)
