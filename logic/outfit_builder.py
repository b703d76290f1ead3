"""Deterministic outfit assembly over a wardrobe snapshot."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from logic.outfit_scoring import ScoreBreakdown, explain_outfit_score, score_outfit
from logic.validation import OutfitRecommendation
from models.clothing_item import ClothingItem
from models.outfit import OutfitCandidate
from models.taxonomy import CATEGORIES, normalize_occasion

logger = logging.getLogger(__name__)

MAX_OUTFITS = 20
SCORE_SCALE = 100

_SCHEME_LABELS = {
    "monochrome": "Monochrome",
    "complementary": "Complementary",
    "analogous": "Analogous",
}


def to_recommendation_scale(score: float) -> float:
    """Convert an engine score in [0, 1] to the 0-100 recommendation scale."""

    return round(score * SCORE_SCALE, 2)


def partition_wardrobe(wardrobe: Iterable[ClothingItem]) -> Dict[str, List[ClothingItem]]:
    """Group items by category, keeping wardrobe order inside each group."""

    grouped: Dict[str, List[ClothingItem]] = {category: [] for category in CATEGORIES}
    for item in wardrobe:
        grouped[item.category].append(item)
    return grouped


def _best_companion(
    top: ClothingItem, bottom: ClothingItem, candidates: Sequence[ClothingItem], occasion: str
) -> Optional[ClothingItem]:
    # Strict improvement over 0: a zero score never fills the slot, ties keep the first.
    best: Optional[ClothingItem] = None
    best_score = 0.0
    for candidate in candidates:
        value = score_outfit(top, bottom, candidate, None, occasion)
        if value > best_score:
            best_score = value
            best = candidate
    return best


def build_candidates(wardrobe: Sequence[ClothingItem], occasion: str) -> List[OutfitCandidate]:
    """Score every top/bottom pair with its best shoe and accessory, unsorted."""

    occasion = normalize_occasion(occasion)
    grouped = partition_wardrobe(wardrobe)
    tops, bottoms = grouped["top"], grouped["bottom"]
    if not tops or not bottoms:
        logger.info("Insufficient items for outfits: tops=%s bottoms=%s", len(tops), len(bottoms))
        return []

    candidates: List[OutfitCandidate] = []
    seen = set()
    for top in tops:
        for bottom in bottoms:
            shoe = _best_companion(top, bottom, grouped["shoe"], occasion)
            accessory = _best_companion(top, bottom, grouped["accessory"], occasion)
            candidate = OutfitCandidate(
                top=top,
                bottom=bottom,
                shoe=shoe,
                accessory=accessory,
                occasion=occasion,
                score=score_outfit(top, bottom, shoe, accessory, occasion),
            )
            if candidate.key in seen:
                continue
            seen.add(candidate.key)
            candidates.append(candidate)
    logger.info("Scored %s outfit combinations for occasion=%s", len(candidates), occasion)
    return candidates


def _color_scheme(breakdown: ScoreBreakdown) -> str:
    labels = [_SCHEME_LABELS[rule] for rule in breakdown.harmony_rules]
    if not labels:
        return "Classic combination"
    return " and ".join(labels) + " pairing"


def _style_notes(candidate: OutfitCandidate, breakdown: ScoreBreakdown) -> List[str]:
    score = to_recommendation_scale(candidate.score)
    notes = [
        "High fashion appeal" if score >= 85 else "Classic styling",
        "Excellent color coordination" if breakdown.harmony_rules else "Good color balance",
    ]
    if candidate.top.material and candidate.top.material == candidate.bottom.material:
        notes.append("Material harmony")
    notes.append("Professional appearance" if candidate.occasion in {"formal", "office"} else "Versatile styling")
    return notes


def _describe(item: ClothingItem) -> str:
    return " ".join(part for part in (item.color, item.material) if part) or "neutral"


def _reasoning(candidate: OutfitCandidate, breakdown: ScoreBreakdown) -> str:
    quality = "excellent" if candidate.score >= 0.8 else "good" if candidate.score >= 0.5 else "modest"
    return (
        f"This {_describe(candidate.top)} top paired with a {_describe(candidate.bottom)} bottom forms a "
        f"{_color_scheme(breakdown).lower()} with {quality} harmony for {candidate.occasion} occasions."
    )


def to_recommendation(candidate: OutfitCandidate) -> OutfitRecommendation:
    """Render a scored candidate as an outfit record on the 0-100 scale."""

    breakdown = explain_outfit_score(
        candidate.top, candidate.bottom, candidate.shoe, candidate.accessory, candidate.occasion
    )
    return OutfitRecommendation(
        outfit_id=candidate.outfit_id,
        top=candidate.top.item_id,
        bottom=candidate.bottom.item_id,
        shoe=candidate.shoe.item_id if candidate.shoe else "",
        accessory=candidate.accessory.item_id if candidate.accessory else "",
        score=to_recommendation_scale(candidate.score),
        reasoning=_reasoning(candidate, breakdown),
        occasion=candidate.occasion,
        color_scheme=_color_scheme(breakdown),
        style_notes=_style_notes(candidate, breakdown),
        confidence=candidate.score,
    )


def rank_candidates(candidates: Sequence[OutfitCandidate], limit: int = MAX_OUTFITS) -> List[OutfitCandidate]:
    """Stable sort by score descending; ties keep generation order."""

    return sorted(candidates, key=lambda candidate: -candidate.score)[: max(0, limit)]


def generate_outfits(
    wardrobe: Sequence[ClothingItem], occasion: str, limit: int = MAX_OUTFITS
) -> List[OutfitRecommendation]:
    """Return at most ``limit`` ranked outfit records for the wardrobe."""

    ranked = rank_candidates(build_candidates(wardrobe, occasion), limit)
    if ranked:
        logger.info("Selected %s outfits, best score=%s", len(ranked), ranked[0].score)
    return [to_recommendation(candidate) for candidate in ranked]


def wardrobe_partitions(wardrobe: Iterable[ClothingItem]) -> Dict[str, Set[str]]:
    """Return the item ids of each category, used to vet externally proposed outfits."""

    return {category: {item.item_id for item in items} for category, items in partition_wardrobe(wardrobe).items()}


__all__ = [
    "MAX_OUTFITS",
    "SCORE_SCALE",
    "to_recommendation_scale",
    "partition_wardrobe",
    "build_candidates",
    "rank_candidates",
    "to_recommendation",
    "generate_outfits",
    "wardrobe_partitions",
]
