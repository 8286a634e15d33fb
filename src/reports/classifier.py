"""
Rule-based severity classification for report descriptions.

Keyword matching is case-insensitive and substring based, so "smells"
matches "smell" and "overflowing" matches "overflow". A single high
keyword outranks any number of medium keywords.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from src.core.constants import HIGH_SEVERITY_KEYWORDS, MEDIUM_SEVERITY_KEYWORDS
from src.reports.models import Indicator, Severity, SEVERITY_INDICATORS


@dataclass(frozen=True)
class Classification:
    """Result of classifying a description."""
    level: Severity
    indicator: Indicator
    matched_keywords: Tuple[str, ...] = ()


def _matches(text: str, keywords: FrozenSet[str]) -> List[str]:
    return sorted(word for word in keywords if word in text)


def classify(description: str) -> Classification:
    """
    Assign a severity level and indicator to a free-text description.

    Args:
        description: Report description

    Returns:
        Classification with level, indicator and the keywords that decided it
    """
    text = (description or "").lower()

    high_hits = _matches(text, HIGH_SEVERITY_KEYWORDS)
    if high_hits:
        level, hits = Severity.HIGH, high_hits
    else:
        medium_hits = _matches(text, MEDIUM_SEVERITY_KEYWORDS)
        if medium_hits:
            level, hits = Severity.MEDIUM, medium_hits
        else:
            level, hits = Severity.LOW, []

    return Classification(
        level=level,
        indicator=SEVERITY_INDICATORS[level],
        matched_keywords=tuple(hits),
    )
