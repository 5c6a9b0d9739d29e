"""
Plain-text and Markdown renderings of extracted content.

html_to_text walks the parsed tree and emits one line per block element,
bulleting list items and describing images by their alt text.
html_to_markdown goes through markdownify with ATX headings.
"""

import re
from typing import Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from markdownify import MarkdownConverter

from .constants import HEADING_TAGS
from .dom import parse_document, parse_fragment
from .logger import get_module_logger

logger = get_module_logger("text")

SKIP_TAGS = ['script', 'style', 'noscript', 'template']
TEXT_BLOCK_TAGS = {'p', 'div', 'article', 'section', 'blockquote'}
BLANK_LINES_PATTERN = re.compile(r'\n{3,}')


def _ensure_newline(parts: list[str]) -> None:
    if parts and not parts[-1].endswith('\n'):
        parts.append('\n')


def _render_text(node: Union[BeautifulSoup, Tag], parts: list[str]) -> None:
    for child in node.children:
        # Comments, doctypes, CDATA
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            if child:
                parts.append(str(child))
            continue
        if not isinstance(child, Tag):
            continue

        name = child.name
        if name == 'br':
            parts.append('\n')
        elif name == 'hr':
            parts.append('\n---\n')
        elif name == 'img':
            alt = (child.get('alt') or '').strip()
            if alt:
                parts.append(f" [Image: {alt}] ")
        elif name in HEADING_TAGS:
            _ensure_newline(parts)
            _render_text(child, parts)
            parts.append('\n\n')
        elif name == 'li':
            _ensure_newline(parts)
            parts.append('• ')
            _render_text(child, parts)
            parts.append('\n')
        elif name in TEXT_BLOCK_TAGS:
            _ensure_newline(parts)
            _render_text(child, parts)
            parts.append('\n')
        else:
            _render_text(child, parts)


def clean_text(text: str) -> str:
    """Collapse whitespace inside lines; keep at most one blank line in a row."""
    result = []
    prev_empty = False
    for line in text.split('\n'):
        line = ' '.join(line.split())
        if not line:
            if not prev_empty and result:
                result.append('')
            prev_empty = True
            continue
        result.append(line)
        prev_empty = False

    while result and not result[-1]:
        result.pop()
    return '\n'.join(result)


def html_to_text(html: str) -> str:
    """
    Render HTML as readable plain text.

    Args:
        html: A document or fragment

    Returns:
        Text with one line per block, "• " bullets for list items,
        "[Image: alt]" for described images and "---" for rules
    """
    soup = parse_document(html)
    for elem in soup.find_all(SKIP_TAGS):
        elem.decompose()

    root = soup.body or soup
    parts: list[str] = []
    _render_text(root, parts)
    return clean_text(''.join(parts))


class TrekMarkdownConverter(MarkdownConverter):
    """markdownify converter that keeps fenced code blocks with their language."""

    def convert_pre(self, el, text, *args, **kwargs):
        code = el.find('code')
        lang = ''
        if code:
            for cls in code.get('class', []):
                if cls.startswith('language-'):
                    lang = cls[len('language-'):]
                    break
            text = code.get_text()
        else:
            text = el.get_text()
        code_text = text.strip("\n")
        return f"\n```{lang}\n{code_text}\n```\n"


_CONVERTER = TrekMarkdownConverter(heading_style="ATX", bullets="-")


def html_to_markdown(html: str) -> str:
    """Convert HTML content to Markdown."""
    if not html.strip():
        return ""
    soup = parse_fragment(html)
    for elem in soup.find_all(SKIP_TAGS):
        elem.decompose()
    markdown = _CONVERTER.convert_soup(soup)
    markdown = BLANK_LINES_PATTERN.sub('\n\n', markdown)
    logger.debug(f"Converted {len(html)} chars of HTML to {len(markdown)} chars of Markdown")
    return markdown.strip()
