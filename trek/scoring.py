"""
Content scoring heuristics.

Two independent, deterministic scorers: one over a text/HTML fragment and
one over an element's tag, class and id. Clutter removal itself is
selector based; these scores serve ranking-based policies and diagnostics.
"""

import re
from typing import Optional

from .constants import (
    CONTENT_CLASS_HINTS,
    CONTENT_ID_HINTS,
    CONTENT_INDICATORS,
    NAVIGATION_CLASS_HINTS,
    NAVIGATION_ID_HINTS,
    NAVIGATION_INDICATORS,
    NON_CONTENT_PATTERNS,
)
from .logger import get_module_logger

logger = get_module_logger("scoring")

DATE_PATTERN = re.compile(
    r'\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+\d{1,2},?\s+\d{4}\b'
)
AUTHOR_PATTERN = re.compile(r'\b(?:by|written by|author:)\s+[A-Za-z\s]+\b')
PARAGRAPH_PATTERN = re.compile(r'<p[^>]*>.*?</p>', re.DOTALL)
LINK_PATTERN = re.compile(r'<a[^>]*>.*?</a>', re.DOTALL)
IMAGE_PATTERN = re.compile(r'<img[^>]*>')

TAG_SCORES = {
    'article': 20.0,
    'main': 20.0,
    'section': 10.0,
    'div': 5.0,
    'nav': -20.0,
    'aside': -20.0,
    'footer': -20.0,
    'header': -20.0,
}


class ContentScorer:
    """Heuristic relevance scores for fragments and elements."""

    @staticmethod
    def score_text(text: str) -> float:
        """
        Score a text or HTML fragment; never negative.

        Words count one point each, paragraphs add 5 and images 3. More
        than one link per two words halves the running score. Keyword
        hits add or subtract, and a date or byline adds 5 each.
        """
        word_count = len(text.split())
        score = float(word_count)

        score += len(PARAGRAPH_PATTERN.findall(text)) * 5.0

        links = len(LINK_PATTERN.findall(text))
        if word_count > 0 and links / word_count > 0.5:
            score *= 0.5

        score += len(IMAGE_PATTERN.findall(text)) * 3.0

        for indicator in CONTENT_INDICATORS:
            if indicator in text:
                score += 10.0
        for indicator in NAVIGATION_INDICATORS:
            if indicator in text:
                score -= 20.0
        for pattern in NON_CONTENT_PATTERNS:
            if pattern in text:
                score -= 30.0

        if DATE_PATTERN.search(text):
            score += 5.0
        if AUTHOR_PATTERN.search(text):
            score += 5.0

        logger.debug(f"Scored content with {word_count} words: {score}")
        return max(score, 0.0)

    @staticmethod
    def score_by_attributes(tag: str, class_: Optional[str] = None,
                            id_: Optional[str] = None) -> float:
        """Score an element by its tag name, class and id (may be negative)."""
        score = TAG_SCORES.get(tag.lower(), 0.0)

        if class_:
            class_lower = class_.lower()
            if any(hint in class_lower for hint in CONTENT_CLASS_HINTS):
                score += 15.0
            if any(hint in class_lower for hint in NAVIGATION_CLASS_HINTS):
                score -= 15.0

        if id_:
            id_lower = id_.lower()
            if any(hint in id_lower for hint in CONTENT_ID_HINTS):
                score += 10.0
            if any(hint in id_lower for hint in NAVIGATION_ID_HINTS):
                score -= 10.0

        return score


def score_text(text: str) -> float:
    """Convenience function for ContentScorer.score_text."""
    return ContentScorer.score_text(text)


def score_by_attributes(tag: str, class_: Optional[str] = None,
                        id_: Optional[str] = None) -> float:
    """Convenience function for ContentScorer.score_by_attributes."""
    return ContentScorer.score_by_attributes(tag, class_, id_)
