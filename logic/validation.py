"""Pydantic schemas and normalisers for recommendation and analysis payloads.

Payloads coming back from the text generator are loosely typed. The helpers in
this module never fail: every field is coerced, clamped or defaulted so that the
returned model is always complete and within bounds.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from models.taxonomy import CATEGORIES

DEFAULT_SCORE = 70.0
DEFAULT_CONFIDENCE = 0.8
DEFAULT_REASONING = "Professional outfit combination"
DEFAULT_COLOR_SCHEME = "Classic combination"
DEFAULT_STYLE_NOTES = ["Well-coordinated"]

DEFAULT_ANALYSIS_CONFIDENCE = 0.7


class OutfitRecommendation(BaseModel):
    """A fully populated outfit record; scores use the 0-100 scale."""

    model_config = ConfigDict(populate_by_name=True)

    outfit_id: str = Field(alias="outfitId", min_length=1)
    top: str = ""
    bottom: str = ""
    shoe: str = ""
    accessory: str = ""
    score: float = Field(ge=0, le=100)
    reasoning: str = Field(min_length=1)
    occasion: str
    color_scheme: str = Field(default=DEFAULT_COLOR_SCHEME, alias="colorScheme")
    style_notes: List[str] = Field(default_factory=lambda: list(DEFAULT_STYLE_NOTES), alias="styleNotes")
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0, le=1)

    def to_payload(self) -> Dict[str, Any]:
        """Serialise with the camelCase keys used on the wire."""

        return self.model_dump(by_alias=True)


class ClothingAnalysis(BaseModel):
    """Normalised classification of a single clothing photo."""

    category: Literal["top", "bottom", "shoe", "accessory"] = "top"
    color: str = "black"
    material: str = "cotton"
    style: str = "casual"
    confidence: float = Field(default=DEFAULT_ANALYSIS_CONFIDENCE, ge=0, le=1)


def _as_number(value: Any) -> Optional[float]:
    """Return a finite float for numeric values or numeric strings, else None."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _first_present(candidate: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = candidate.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _slot(candidate: Dict[str, Any], name: str) -> str:
    value = _first_present(candidate, name, f"{name}_id", f"{name}Id")
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def validate_recommendation(candidate: Any, index: int, requested_occasion: str) -> OutfitRecommendation:
    """Normalise one loosely-typed outfit record into an :class:`OutfitRecommendation`."""

    if not isinstance(candidate, dict):
        candidate = {}

    outfit_id = _text(_first_present(candidate, "outfitId", "outfit_id", "id"))
    score = _as_number(candidate.get("score"))
    confidence = _as_number(candidate.get("confidence"))
    notes = _first_present(candidate, "styleNotes", "style_notes")
    if isinstance(notes, (list, tuple)):
        style_notes = [str(note) for note in notes]
    else:
        style_notes = list(DEFAULT_STYLE_NOTES)

    return OutfitRecommendation(
        outfit_id=outfit_id or f"outfit_{index + 1}",
        top=_slot(candidate, "top"),
        bottom=_slot(candidate, "bottom"),
        shoe=_slot(candidate, "shoe"),
        accessory=_slot(candidate, "accessory"),
        score=_clamp(score, 0.0, 100.0) if score is not None else DEFAULT_SCORE,
        reasoning=_text(candidate.get("reasoning")) or DEFAULT_REASONING,
        occasion=_text(candidate.get("occasion")) or requested_occasion,
        color_scheme=_text(_first_present(candidate, "colorScheme", "color_scheme", "color_harmony"))
        or DEFAULT_COLOR_SCHEME,
        style_notes=style_notes,
        confidence=_clamp(confidence, 0.0, 1.0) if confidence is not None else DEFAULT_CONFIDENCE,
    )


def validate_recommendations(payload: Any, requested_occasion: str) -> List[OutfitRecommendation]:
    """Validate an array of records, or an ``{"outfits": [...]}`` wrapper."""

    if isinstance(payload, dict):
        payload = payload.get("outfits", [payload])
    if not isinstance(payload, Sequence) or isinstance(payload, str):
        return []
    return [validate_recommendation(entry, index, requested_occasion) for index, entry in enumerate(payload)]


def validate_clothing_analysis(payload: Any) -> ClothingAnalysis:
    """Normalise a classification payload into a :class:`ClothingAnalysis`."""

    if not isinstance(payload, dict):
        payload = {}
    category = (_text(payload.get("category")) or "").lower()
    confidence = _as_number(payload.get("confidence"))
    return ClothingAnalysis(
        category=category if category in CATEGORIES else "top",
        color=(_text(payload.get("color")) or "black").lower(),
        material=(_text(payload.get("material")) or "cotton").lower(),
        style=(_text(payload.get("style")) or "casual").lower(),
        confidence=_clamp(confidence, 0.0, 1.0) if confidence is not None else DEFAULT_ANALYSIS_CONFIDENCE,
    )


__all__ = [
    "OutfitRecommendation",
    "ClothingAnalysis",
    "validate_recommendation",
    "validate_recommendations",
    "validate_clothing_analysis",
    "DEFAULT_SCORE",
    "DEFAULT_CONFIDENCE",
    "DEFAULT_REASONING",
    "DEFAULT_COLOR_SCHEME",
    "DEFAULT_STYLE_NOTES",
]
