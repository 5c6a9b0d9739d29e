"""
Extractor for Farcaster mini apps.

Mini-app pages are mostly a frame description in metadata (the fc:frame
meta tag, resolved separately); their visible body is usually minimal.
"""

from typing import Any, Sequence

from ..logger import get_module_logger
from ..schemas import ExtractedContent
from ..utils import find_body_content
from .base import BaseExtractor

logger = get_module_logger("extractors.farcaster")

# Hosts serving Farcaster mini apps
MINI_APP_HOSTS = [
    'crowdfund.seedclub.com',
    'yoink.party',
    'farcaster.xyz',
    'warpcast.com',
]


class FarcasterExtractor(BaseExtractor):
    """Handles pages served by known Farcaster mini-app hosts."""

    def can_extract(self, url: str, schema_org_data: Sequence[Any]) -> bool:
        return any(host in url for host in MINI_APP_HOSTS)

    def extract(self, html: str) -> ExtractedContent:
        logger.debug("Using Farcaster extractor")

        content = ExtractedContent()
        body = find_body_content(html)
        if body is None:
            return content

        # Markup is kept; only whitespace runs are collapsed
        collapsed = ' '.join(body.split())
        if collapsed:
            content.content = collapsed
            content.content_html = f"<div>{collapsed}</div>"
        return content

    def name(self) -> str:
        return "farcaster"
