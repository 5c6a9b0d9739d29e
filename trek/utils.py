"""
Small helpers shared across the pipeline: word counting, tag stripping,
entity decoding, timing, body isolation and byte-level charset sniffing.
"""

import html
import re
import time
from typing import Optional

from bs4.dammit import EncodingDetector

TAG_PATTERN = re.compile(r'<[^>]+>')
WHITESPACE_PATTERN = re.compile(r'\s+')
BODY_OPEN_PATTERN = re.compile(r'<body\b[^>]*>', re.IGNORECASE)
BODY_CLOSE_PATTERN = re.compile(r'</body\s*>', re.IGNORECASE)

# Labels that browsers decode with a wider Windows code page
BROWSER_CHARSETS = {
    'iso-8859-1': 'windows-1252',
    'latin1': 'windows-1252',
    'us-ascii': 'windows-1252',
    'ascii': 'windows-1252',
    'iso-8859-9': 'windows-1254',
}


def current_time_ms() -> int:
    """Monotonic clock in milliseconds, for measuring parse duration."""
    return int(time.monotonic() * 1000)


def strip_html_tags(text: str) -> str:
    """Replace every tag with a space and collapse whitespace."""
    without_tags = TAG_PATTERN.sub(' ', text)
    return WHITESPACE_PATTERN.sub(' ', without_tags).strip()


def count_words(content: str) -> int:
    """Count whitespace-separated words in HTML content, ignoring tags."""
    return len(strip_html_tags(content).split())


def decode_html_entities(text: str) -> str:
    """Decode named and numeric character references."""
    return html.unescape(text)


def find_body_content(document: str) -> Optional[str]:
    """Markup between the opening <body> tag and the last </body>, or None."""
    opening = BODY_OPEN_PATTERN.search(document)
    closings = list(BODY_CLOSE_PATTERN.finditer(document))
    if opening and closings and closings[-1].start() >= opening.end():
        return document[opening.end():closings[-1].start()]
    return None


def extract_body_content(document: str) -> str:
    """
    Return the trimmed body markup.

    Documents without both body tags are returned whole.
    """
    body = find_body_content(document)
    if body is None:
        return document.lstrip('\n')
    return body.strip()


def sniff_charset(raw_bytes: bytes) -> str:
    """
    Pick the charset a browser would use for a saved page.

    A byte order mark wins, then a <meta> declaration in the head (either
    form), then utf-8.
    """
    _, charset = EncodingDetector.strip_byte_order_mark(raw_bytes[:4])
    if not charset:
        charset = EncodingDetector.find_declared_encoding(raw_bytes, is_html=True)
    if not charset:
        return 'utf-8'
    return BROWSER_CHARSETS.get(charset, charset)


def decode_document(raw_bytes: bytes) -> str:
    """Decode raw HTML bytes with the sniffed charset, replacing bad bytes."""
    charset = sniff_charset(raw_bytes)
    data, _ = EncodingDetector.strip_byte_order_mark(raw_bytes)
    try:
        return data.decode(charset, errors='replace')
    except LookupError:
        # Unknown charset label in the document
        return data.decode('utf-8', errors='replace')
