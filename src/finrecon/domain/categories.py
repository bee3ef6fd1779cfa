"""Category label normalization.

Free-text category strings arrive with inconsistent case and spacing
("Food", "food ", " FOOD"). Grouping always happens on a canonical key while
the first label seen for that key is kept for display.
"""

from typing import Iterable, Optional

UNCATEGORIZED = "Uncategorized"
ALL_CATEGORIES = "All"


def clean_label(value: object) -> Optional[str]:
    """Return a trimmed, single-spaced label, or None if unusable."""
    if not isinstance(value, str):
        return None
    label = " ".join(value.split())
    return label or None


def category_key(label: str) -> str:
    """Return the canonical grouping key for a category label."""
    return " ".join(label.split()).casefold()


def is_all_categories(value: Optional[str]) -> bool:
    """Check whether a category filter value means "unfiltered"."""
    if value is None:
        return True
    label = clean_label(value)
    return label is None or category_key(label) == category_key(ALL_CATEGORIES)


class LabelRegistry:
    """Remember the first display label seen for each category key."""

    def __init__(self, labels: Iterable[str] = ()):
        self._labels: dict[str, str] = {}
        for label in labels:
            self.register(label)

    def register(self, label: str) -> str:
        """Record a label and return its canonical key."""
        key = category_key(label)
        self._labels.setdefault(key, clean_label(label) or UNCATEGORIZED)
        return key

    def label(self, key: str) -> str:
        """Return the display label for a key."""
        return self._labels.get(key, key)

    def __contains__(self, key: object) -> bool:
        return key in self._labels
