"""
Metadata Resolver: CollectedData × optional page URL → Metadata.

Pure and total. Each field walks its sources in priority order and the
first hit wins; a missing source yields the field default, never an error.
An empty string counts as a missing source. IP-address hosts have no domain.

Field priorities:
  title       ld headline → ld name → og:title → twitter:title → <title>
  description ld description → description → og:description → twitter:description
  author      ld author.name / author → byl → author → article:author (non-URL only)
  published   ld datePublished → article:published_time / publish_date
  site        og:site_name → twitter:site
  image       ld image (string | {url} | [first]) → og:image → twitter:image
"""

import ipaddress
from typing import Any, Iterable, Optional
from urllib.parse import urlsplit

from pydantic import ValidationError

from .exceptions import StructuredDataError
from .logger import get_module_logger
from .schemas import CollectedData, MetaTag, Metadata, MiniAppEmbed

logger = get_module_logger("metadata")


def _text(value: Any) -> Optional[str]:
    """The value if it is a non-empty string; empty strings count as missing."""
    if isinstance(value, str) and value:
        return value
    return None


def _meta_content(meta_tags: Iterable[MetaTag], *, name: Optional[str] = None,
                  prop: Optional[str] = None) -> Optional[str]:
    """Content of the first non-empty meta tag with the given name or property."""
    for tag in meta_tags:
        if not tag.content:
            continue
        if name is not None and tag.name == name:
            return tag.content
        if prop is not None and tag.property == prop:
            return tag.content
    return None


def _schema_string(schema_org_data: Iterable[Any], key: str) -> Optional[str]:
    """First non-empty string value of `key` across structured-data entries."""
    for item in schema_org_data:
        if isinstance(item, dict) and _text(item.get(key)):
            return item[key]
    return None


def _is_absolute_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def _is_ip_literal(hostname: str) -> bool:
    """IP hosts have no domain name."""
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True


class MetadataResolver:
    """Resolves page metadata from a collected snapshot."""

    def resolve(self, data: CollectedData, url: Optional[str] = None) -> Metadata:
        """
        Resolve every metadata field.

        word_count and parse_time are left at 0; the Pipeline Controller
        fills them once the final content is known.
        """
        meta = data.meta_tags
        schema = data.schema_org_data

        return Metadata(
            title=self.resolve_title(schema, meta) or data.title or "",
            description=self.resolve_description(schema, meta) or "",
            author=self.resolve_author(schema, meta) or "",
            published=self.resolve_published(schema, meta) or "",
            site=self.resolve_site(meta) or "",
            image=self.resolve_image(schema, meta) or "",
            favicon=data.favicon or "",
            domain=self.resolve_domain(url),
            schema_org_data=list(schema),
            mini_app_embed=self.resolve_mini_app_embed(data.mini_app_embed),
        )

    def resolve_title(self, schema, meta) -> Optional[str]:
        # headline and name are checked per entry, so an earlier entry's
        # name beats a later entry's headline
        for item in schema:
            if not isinstance(item, dict):
                continue
            title = _text(item.get("headline")) or _text(item.get("name"))
            if title:
                return title

        return (
            _meta_content(meta, prop="og:title")
            or _meta_content(meta, prop="twitter:title")
        )

    def resolve_description(self, schema, meta) -> Optional[str]:
        return (
            _schema_string(schema, "description")
            or _meta_content(meta, name="description")
            or _meta_content(meta, prop="og:description")
            or _meta_content(meta, prop="twitter:description")
        )

    def resolve_author(self, schema, meta) -> Optional[str]:
        for item in schema:
            if not isinstance(item, dict) or "author" not in item:
                continue
            author = item["author"]
            if isinstance(author, dict):
                author = author.get("name")
            if _text(author):
                return author

        byline = _meta_content(meta, name="byl") or _meta_content(meta, name="author")
        if byline:
            return byline

        # Profile URLs are not names; skip them rather than fall through
        for tag in meta:
            if tag.property == "article:author" and tag.content and not _is_absolute_url(tag.content):
                return tag.content
        return None

    def resolve_published(self, schema, meta) -> Optional[str]:
        published = _schema_string(schema, "datePublished")
        if published:
            return published

        # Both meta sources share one document-order walk
        return _meta_content(meta, name="publish_date", prop="article:published_time")

    def resolve_site(self, meta) -> Optional[str]:
        return (
            _meta_content(meta, prop="og:site_name")
            or _meta_content(meta, name="twitter:site")
        )

    def resolve_image(self, schema, meta) -> Optional[str]:
        for item in schema:
            if not isinstance(item, dict) or "image" not in item:
                continue
            image = item["image"]
            if isinstance(image, list):
                if not image:
                    continue
                image = image[0]
            if isinstance(image, dict):
                image = image.get("url")
            if _text(image):
                return image

        return (
            _meta_content(meta, prop="og:image")
            or _meta_content(meta, name="twitter:image")
        )

    def resolve_domain(self, url: Optional[str]) -> str:
        if not url:
            return ""
        try:
            hostname = urlsplit(url).hostname
        except ValueError:
            logger.debug(f"Unparseable URL, leaving domain empty: {url!r}")
            return ""
        if not hostname or _is_ip_literal(hostname):
            return ""
        if hostname.startswith("www."):
            hostname = hostname[len("www."):]
        return hostname

    def resolve_mini_app_embed(self, raw: Optional[str]) -> Optional[MiniAppEmbed]:
        if raw is None:
            return None
        try:
            return parse_mini_app_embed(raw)
        except StructuredDataError as e:
            logger.debug(f"Ignoring malformed fc:frame payload: {e.message}")
            return None


def parse_mini_app_embed(raw: str) -> MiniAppEmbed:
    """
    Validate the raw fc:frame payload.

    Raises:
        StructuredDataError: if the payload is not JSON or has the wrong shape
    """
    try:
        return MiniAppEmbed.model_validate_json(raw)
    except ValidationError as e:
        raise StructuredDataError(
            f"Invalid mini-app embed: {e.error_count()} error(s)",
            source="fc:frame",
            details={"errors": e.errors(include_url=False)}
        )


def resolve(data: CollectedData, url: Optional[str] = None) -> Metadata:
    """Convenience function to resolve metadata."""
    return MetadataResolver().resolve(data, url)
