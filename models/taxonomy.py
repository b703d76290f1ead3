"""Canonical taxonomy definitions for wardrobe items and occasions.

Categories and occasions are closed vocabularies. Colors and materials stay
free-form lowercase strings; the helpers here only normalise their casing so
that rule tables compare like with like.
"""

from typing import List, Optional

CATEGORIES: List[str] = ["top", "bottom", "shoe", "accessory"]
OCCASIONS: List[str] = ["casual", "office", "party", "formal"]

DEFAULT_OCCASION = "casual"


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower()


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(str(value))
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {CATEGORIES}")
    return key


def normalize_occasion(value: Optional[str]) -> str:
    """Lowercase an occasion tag; blank and unknown tags are kept and earn no bonus."""

    if value is None:
        return ""
    return _normalize_key(str(value))


def resolve_occasion(value: Optional[str], default: str = DEFAULT_OCCASION) -> str:
    """Occasion for an incoming request, using ``default`` when the tag is blank."""

    return normalize_occasion(value) or normalize_occasion(default)


def normalize_attribute(value: Optional[str]) -> str:
    """Lowercase a color or material name, mapping missing values to ''."""

    if value is None:
        return ""
    return _normalize_key(str(value))


__all__ = [
    "CATEGORIES",
    "OCCASIONS",
    "DEFAULT_OCCASION",
    "validate_category",
    "normalize_occasion",
    "resolve_occasion",
    "normalize_attribute",
]
