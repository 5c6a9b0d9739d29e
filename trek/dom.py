"""
BeautifulSoup helpers for the rewriting passes.

Fragments (body content being cleaned or standardized) are parsed with the
built-in html.parser builder, which adds no <html>/<body> wrappers. A
round trip keeps the element structure but not the exact text: attributes
may come back reordered and whitespace-only text may be folded. Passes
therefore hand back their input string when they change nothing.
Whole documents go through the html5lib → lxml → html.parser fallback
chain instead.
"""

from bs4 import BeautifulSoup

from .logger import get_module_logger

logger = get_module_logger("dom")


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment without restructuring it."""
    return BeautifulSoup(html, 'html.parser')


def serialize(soup: BeautifulSoup) -> str:
    """Serialize a parsed fragment back to markup."""
    return soup.decode()


def parse_document(html: str) -> BeautifulSoup:
    """
    Parse a whole document, tolerating badly malformed markup.

    html5lib implements the WHATWG parsing algorithm; lxml and the
    built-in parser are tried in turn if it fails.
    """
    try:
        return BeautifulSoup(html, 'html5lib')
    except Exception as e:
        logger.warning(f"html5lib parsing failed, trying lxml: {e}")

    try:
        return BeautifulSoup(html, 'lxml')
    except Exception as e:
        logger.warning(f"lxml parsing also failed: {e}")
        return BeautifulSoup(html, 'html.parser')
