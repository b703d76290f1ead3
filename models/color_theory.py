"""Color harmony tables and predicates used by outfit scoring."""
from __future__ import annotations

import logging
from typing import FrozenSet, List, Tuple

from models.taxonomy import normalize_attribute

logger = logging.getLogger(__name__)

_COMPLEMENTARY_PAIRS: List[Tuple[str, str]] = [
    ("red", "green"),
    ("blue", "orange"),
    ("yellow", "purple"),
    ("pink", "green"),
    ("black", "white"),
]

_ANALOGOUS_GROUPS: List[FrozenSet[str]] = [
    frozenset({"red", "pink", "orange"}),
    frozenset({"blue", "purple", "pink"}),
    frozenset({"green", "blue", "teal"}),
    frozenset({"yellow", "orange", "red"}),
    frozenset({"black", "gray", "white"}),
]


def monochrome(color1: str, color2: str) -> bool:
    """Return True when both colors are the same tone."""

    c1, c2 = normalize_attribute(color1), normalize_attribute(color2)
    return bool(c1) and c1 == c2


def complementary(color1: str, color2: str) -> bool:
    """Return True when the colors form a complementary pair.

    Identical colors are covered by :func:`monochrome` and never count here.
    """

    c1, c2 = normalize_attribute(color1), normalize_attribute(color2)
    if c1 == c2:
        return False
    result = any(c1 in pair and c2 in pair for pair in _COMPLEMENTARY_PAIRS)
    logger.debug("complementary check (%s, %s) -> %s", c1, c2, result)
    return result


def analogous(color1: str, color2: str) -> bool:
    """Return True when two distinct colors sit in one analogous group."""

    c1, c2 = normalize_attribute(color1), normalize_attribute(color2)
    if c1 == c2:
        return False
    result = any(c1 in group and c2 in group for group in _ANALOGOUS_GROUPS)
    logger.debug("analogous check (%s, %s) -> %s", c1, c2, result)
    return result


def harmony_rules(color1: str, color2: str) -> List[str]:
    """Return every harmony rule satisfied by the pair, in scoring order."""

    rules = []
    if monochrome(color1, color2):
        rules.append("monochrome")
    if complementary(color1, color2):
        rules.append("complementary")
    if analogous(color1, color2):
        rules.append("analogous")
    return rules


__all__ = ["monochrome", "complementary", "analogous", "harmony_rules"]
