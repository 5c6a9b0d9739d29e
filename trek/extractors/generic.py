"""Library-default extractor. Never selected by the registry."""

import re
from typing import Any, Sequence

from ..schemas import ExtractedContent
from ..utils import decode_html_entities
from .base import BaseExtractor

TITLE_PATTERN = re.compile(r'<title[^>]*>(.*?)</title>', re.IGNORECASE | re.DOTALL)


class GenericExtractor(BaseExtractor):
    """
    Catch-all extractor.

    can_extract() is always False so the pipeline's own generic path
    (clutter removal, standardization, retry) is used instead of a
    trivial pass-through.
    """

    def can_extract(self, url: str, schema_org_data: Sequence[Any]) -> bool:
        return False

    def extract(self, html: str) -> ExtractedContent:
        content = ExtractedContent()
        m = TITLE_PATTERN.search(html)
        if m:
            content.title = decode_html_entities(m.group(1)).strip()
        return content

    def name(self) -> str:
        return "generic"
