"""Deterministic scoring for candidate outfits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from logic.similarity import cosine_similarity
from models.clothing_item import ClothingItem
from models.color_theory import harmony_rules
from models.taxonomy import normalize_occasion

HARMONY_BONUSES = {
    "monochrome": 0.3,
    "complementary": 0.5,
    "analogous": 0.4,
}
EMBEDDING_WEIGHT = 0.3
MAX_SCORE = 1.0


@dataclass
class ScoreBreakdown:
    """Every rule that fired for one outfit, with its bonus."""

    rules: List[Tuple[str, float]] = field(default_factory=list)
    raw_total: float = 0.0

    def add(self, rule: str, bonus: float) -> None:
        self.rules.append((rule, bonus))
        self.raw_total += bonus

    @property
    def total(self) -> float:
        # Anti-correlated embeddings are the only negative contribution.
        return max(0.0, min(self.raw_total, MAX_SCORE))

    @property
    def harmony_rules(self) -> List[str]:
        return [rule for rule, _ in self.rules if rule in HARMONY_BONUSES]


def _apply_color_harmony(breakdown: ScoreBreakdown, top: ClothingItem, bottom: ClothingItem) -> None:
    # Independent checks: one pair may earn several harmony bonuses.
    for rule in harmony_rules(top.color, bottom.color):
        breakdown.add(rule, HARMONY_BONUSES[rule])


def _apply_occasion(breakdown: ScoreBreakdown, top: ClothingItem, bottom: ClothingItem, occasion: str) -> None:
    if occasion == "casual":
        if top.material == "cotton" and bottom.material == "denim":
            breakdown.add("casual_cotton_denim", 0.3)
    elif occasion == "office":
        if top.color in {"white", "blue"}:
            breakdown.add("office_top_color", 0.2)
        if bottom.color in {"black", "gray"}:
            breakdown.add("office_bottom_color", 0.2)
    elif occasion == "party":
        if top.color in {"black", "red"}:
            breakdown.add("party_top_color", 0.3)
    elif occasion == "formal":
        if top.color in {"white", "black"}:
            breakdown.add("formal_top_color", 0.3)
        if bottom.color in {"black", "gray"}:
            breakdown.add("formal_bottom_color", 0.3)


def _apply_shoe(
    breakdown: ScoreBreakdown, top: ClothingItem, bottom: ClothingItem, shoe: ClothingItem, occasion: str
) -> None:
    if shoe.color and shoe.color in {top.color, bottom.color}:
        breakdown.add("shoe_color_match", 0.2)
    if occasion == "formal" and shoe.color == "black":
        breakdown.add("formal_black_shoe", 0.3)
    if occasion == "casual" and shoe.color in {"white", "brown"}:
        breakdown.add("casual_shoe_color", 0.2)


def explain_outfit_score(
    top: ClothingItem,
    bottom: ClothingItem,
    shoe: Optional[ClothingItem] = None,
    accessory: Optional[ClothingItem] = None,
    occasion: str = "casual",
) -> ScoreBreakdown:
    """Run every scoring rule and return the itemised result.

    ``accessory`` is accepted so callers can score a full outfit; no rule reads
    it.
    """

    occasion = normalize_occasion(occasion)
    breakdown = ScoreBreakdown()
    _apply_color_harmony(breakdown, top, bottom)
    _apply_occasion(breakdown, top, bottom, occasion)
    if shoe is not None:
        _apply_shoe(breakdown, top, bottom, shoe, occasion)
    if top.embedding and bottom.embedding:
        similarity = cosine_similarity(top.embedding, bottom.embedding)
        breakdown.add("embedding_similarity", similarity * EMBEDDING_WEIGHT)
    return breakdown


def score_outfit(
    top: ClothingItem,
    bottom: ClothingItem,
    shoe: Optional[ClothingItem] = None,
    accessory: Optional[ClothingItem] = None,
    occasion: str = "casual",
) -> float:
    """Return the outfit score in [0, 1], clamped only after all rules ran."""

    return explain_outfit_score(top, bottom, shoe, accessory, occasion).total


__all__ = ["score_outfit", "explain_outfit_score", "ScoreBreakdown", "HARMONY_BONUSES", "EMBEDDING_WEIGHT"]
