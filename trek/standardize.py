"""
HTML standardization.

A fixed sequence of idempotent passes over the cleaned body content:

  1. standardize_spaces         collapse space runs, trim lines, squeeze blank lines
  2. remove_html_comments
  3. standardize_headings       role="heading" + aria-level → real h1-h6
  4. strip_unwanted_attributes  drop presentational / handler attributes (non-debug)
  5. remove_trailing_headings   drop trailing headings that repeat the title
  6. non-debug only: remove_empty_elements, flatten_wrapper_elements and
     remove_trailing_headings, repeated until the content stops changing
  7. standardize_spaces again

Order is load-bearing: comments and whitespace must be gone before empty
elements are detected, and flattening must follow empty-element removal so
emptied wrapper chains collapse fully. Dropping a heading can empty its
wrapper and dropping a wrapper can leave a heading last, hence the loop.

Every tree-based pass returns its input string untouched when it finds
nothing to change, so re-running the sequence on its own output is a no-op.
"""

import re
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from .constants import (
    HEADING_KEEP_ATTRIBUTES,
    HEADING_TAGS,
    IMAGE_KEEP_ATTRIBUTES,
    SEMANTIC_ATTRIBUTES,
    SEMANTIC_CLASSES,
)
from .dom import parse_fragment, serialize
from .logger import get_module_logger

logger = get_module_logger("standardize")

MULTI_SPACE_PATTERN = re.compile(r' {2,}')
COMMENT_PATTERN = re.compile(r'<!--.*?-->', re.DOTALL)
HEADING_LEVELS = {str(level): f"h{level}" for level in range(1, 7)}


def standardize_content(html: str, title: str = "", debug: bool = False) -> str:
    """
    Run the standardization passes over body content.

    Args:
        html: Cleaned body content
        title: Resolved page title, used to spot duplicate headings
        debug: Skip the lossy passes so output stays close to the source

    Returns:
        Standardized HTML
    """
    logger.debug(f"Standardizing content with title: {title}")

    content = standardize_spaces(html)
    content = remove_html_comments(content)
    content = standardize_headings(content, title)
    content = strip_unwanted_attributes(content, debug)
    content = remove_trailing_headings(content, title)

    if not debug:
        # Every round removes elements, so this stops once a round removes none
        while True:
            previous = content
            content = remove_empty_elements(content)
            content = flatten_wrapper_elements(content)
            content = remove_trailing_headings(content, title)
            if content == previous:
                break

    # Removed comments and unwrapped elements leave blank lines behind
    return standardize_spaces(content)


def standardize_spaces(html: str) -> str:
    """Collapse runs of spaces, trim every line, keep at most one blank line in a row."""
    collapsed = MULTI_SPACE_PATTERN.sub(' ', html)

    cleaned_lines = []
    empty_count = 0
    for line in collapsed.split('\n'):
        line = line.strip()
        if line:
            empty_count = 0
            cleaned_lines.append(line)
            continue
        empty_count += 1
        if empty_count <= 1:
            cleaned_lines.append(line)

    return '\n'.join(cleaned_lines).strip()


def remove_html_comments(html: str) -> str:
    """Strip HTML comments, including ones spanning several lines."""
    return COMMENT_PATTERN.sub('', html)


def standardize_headings(html: str, title: str = "") -> str:
    """Turn ARIA headings (role="heading" with aria-level 1-6) into real heading tags."""
    if 'heading' not in html:
        return html

    soup = parse_fragment(html)
    changed = False

    for elem in soup.find_all(attrs={'role': 'heading'}):
        new_name = HEADING_LEVELS.get((elem.get('aria-level') or '').strip())
        if new_name is None:
            continue
        elem.name = new_name
        del elem['role']
        del elem['aria-level']
        changed = True

    if not changed:
        return html
    logger.debug("Converted ARIA headings")
    return serialize(soup)


def strip_unwanted_attributes(html: str, debug: bool = False) -> str:
    """
    Drop attributes that carry no content (debug mode keeps everything).

    Inline styles and event handlers go everywhere; headings keep only id
    and class; images keep only the attributes describing the image.
    """
    if debug:
        return html

    soup = parse_fragment(html)
    changed = False

    for elem in soup.find_all(True):
        if elem.name in HEADING_TAGS:
            keep = HEADING_KEEP_ATTRIBUTES
        elif elem.name == 'img':
            keep = IMAGE_KEEP_ATTRIBUTES
        else:
            keep = None

        for attr in list(elem.attrs):
            unwanted = attr == 'style' or attr.startswith('on')
            if keep is not None and attr not in keep:
                unwanted = True
            if unwanted:
                del elem[attr]
                changed = True

    return serialize(soup) if changed else html


def _normalize_text(text: str) -> str:
    return ' '.join(text.replace('\xa0', ' ').split()).lower()


def _is_empty_block(elem: Tag) -> bool:
    """A p or div with no child elements and only whitespace text."""
    return elem.name in ('p', 'div') and elem.find(True) is None and not elem.get_text().strip()


def _last_significant(node: Union[BeautifulSoup, Tag]) -> Optional[Union[Tag, NavigableString]]:
    """Last child that is an element or non-blank text, looking past empty p/div."""
    for child in reversed(node.contents):
        if isinstance(child, Tag):
            if _is_empty_block(child):
                continue
            return child
        if isinstance(child, NavigableString) and child.strip():
            return child
    return None


def remove_trailing_headings(html: str, title: str = "") -> str:
    """Drop headings at the very end of the content whose text repeats the title."""
    normalized_title = _normalize_text(title)
    if not normalized_title:
        return html

    soup = parse_fragment(html)
    changed = False
    node = soup

    while True:
        last = _last_significant(node)
        if not isinstance(last, Tag):
            break
        if last.name in HEADING_TAGS:
            if _normalize_text(last.get_text()) != normalized_title:
                break
            last.decompose()
            changed = True
            # Something earlier may now be trailing
            node = soup
            continue
        node = last

    if not changed:
        return html
    logger.debug("Removed trailing heading matching the title")
    return serialize(soup)


def remove_empty_elements(html: str) -> str:
    """Remove p and div elements holding nothing but whitespace."""
    soup = parse_fragment(html)
    changed = False

    # Innermost first, so parents emptied by a removal are caught in the same walk
    for elem in reversed(soup.find_all(['p', 'div'])):
        if _is_empty_block(elem):
            elem.decompose()
            changed = True

    return serialize(soup) if changed else html


def _is_semantic_div(elem: Tag) -> bool:
    if any(elem.has_attr(attr) for attr in SEMANTIC_ATTRIBUTES):
        return True
    class_value = elem.get('class') or ''
    if isinstance(class_value, list):
        class_value = ' '.join(class_value)
    class_lower = class_value.lower()
    return any(cls in class_lower for cls in SEMANTIC_CLASSES)


def flatten_wrapper_elements(html: str) -> str:
    """Replace wrapper divs (no semantic attribute or class) by their children."""
    soup = parse_fragment(html)
    changed = False

    for elem in soup.find_all('div'):
        if _is_semantic_div(elem):
            continue
        elem.unwrap()
        changed = True

    return serialize(soup) if changed else html
