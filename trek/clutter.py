"""
Clutter-Removal Engine.

Deletes boilerplate regions (navigation, ads, social widgets, comments)
from body content. Two independent tiers, evaluated in one document-order
walk:

  exact:   structural tags removed outright, plus candidate containers
           whose class tokens include "navigation" or "sidebar"
  partial: candidate containers whose test attributes (id, class,
           data-testid, ...) contain a known noise pattern, matched
           case-insensitively as a substring

Tag.decompose() deletes an element together with its descendants, so no
marker/regex post-pass is needed; descendants of a removed element are
skipped when the walk reaches them.
"""

from typing import Optional

from bs4 import Tag

from .constants import (
    CANDIDATE_TAGS,
    EXACT_REMOVE_CLASSES,
    EXACT_REMOVE_TAGS,
    PARTIAL_SELECTORS,
    TEST_ATTRIBUTES,
)
from .dom import parse_fragment, serialize
from .logger import get_module_logger

logger = get_module_logger("clutter")


def _attr_value(elem: Tag, name: str) -> Optional[str]:
    """Attribute value as a string; multi-valued attributes are space-joined."""
    value = elem.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return ' '.join(value)
    return value


class ClutterRemover:
    """Removes clutter elements from an HTML fragment."""

    def __init__(self, remove_exact: bool = True, remove_partial: bool = True):
        self.remove_exact = remove_exact
        self.remove_partial = remove_partial

    @property
    def enabled(self) -> bool:
        return self.remove_exact or self.remove_partial

    def remove(self, html: str) -> str:
        """
        Remove clutter from an HTML fragment.

        Args:
            html: Body content

        Returns:
            The fragment without clutter elements; unchanged when both
            tiers are disabled
        """
        if not self.enabled:
            return html

        soup = parse_fragment(html)
        removed = 0

        for elem in soup.find_all(True):
            # Already gone with a removed ancestor
            if elem.decomposed:
                continue
            if self.matches_exact(elem) or self.matches_partial(elem):
                elem.decompose()
                removed += 1

        logger.debug(f"Removed {removed} clutter elements")
        return serialize(soup) if removed else html

    def matches_exact(self, elem: Tag) -> bool:
        """Exact tier: structural tags, or candidates with a clutter class token."""
        if not self.remove_exact:
            return False
        if elem.name in EXACT_REMOVE_TAGS:
            return True
        if elem.name in CANDIDATE_TAGS:
            classes = (_attr_value(elem, 'class') or '').split()
            return any(cls in EXACT_REMOVE_CLASSES for cls in classes)
        return False

    def matches_partial(self, elem: Tag) -> bool:
        """Partial tier: a test attribute contains a noise pattern."""
        if not self.remove_partial or elem.name not in CANDIDATE_TAGS:
            return False
        for attr in TEST_ATTRIBUTES:
            value = _attr_value(elem, attr)
            if not value:
                continue
            value_lower = value.lower()
            if any(pattern in value_lower for pattern in PARTIAL_SELECTORS):
                return True
        return False


def remove_clutter(html: str, remove_exact: bool = True, remove_partial: bool = True) -> str:
    """Convenience function to remove clutter from an HTML fragment."""
    return ClutterRemover(remove_exact, remove_partial).remove(html)
