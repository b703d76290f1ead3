"""Centralised prompts and guardrails shared by the stylist agents."""

from __future__ import annotations

from typing import Iterable, List

from models.clothing_item import ClothingItem
from models.taxonomy import CATEGORIES

GUARDRAIL_BULLETS: List[str] = [
    "Stay within the wardrobe styling scope (garment analysis and outfit pairing).",
    "Only reference wardrobe items by the IDs you were given; never invent items.",
    "Never echo image data, user identifiers or credentials.",
    "Prefer color theory and occasion rules over free-form speculation.",
    "Return JSON only, with no markdown fences or commentary.",
]


def system_instruction(role_hint: str) -> str:
    """Compose a consistent system prompt with boundary reminders."""

    boundary_text = "\n".join(f"- {bullet}" for bullet in GUARDRAIL_BULLETS)
    return (
        f"You are the wardrobe {role_hint}.\n"
        "Follow these guardrails before responding:\n"
        f"{boundary_text}"
    )


def clothing_analysis_prompt() -> str:
    categories = ", ".join(CATEGORIES)
    return (
        "Analyze the clothing item in this image and classify it.\n"
        f"category must be one of: {categories}.\n"
        "color is the dominant color as a simple lowercase name (e.g. navy, beige, black).\n"
        "material is the most likely fabric (e.g. cotton, denim, wool, leather, silk).\n"
        "style is one of: casual, formal, sporty, elegant.\n"
        "confidence is a number between 0 and 1.\n"
        'Respond with a single JSON object: {"category": "...", "color": "...", '
        '"material": "...", "style": "...", "confidence": 0.0}'
    )


def wardrobe_line(item: ClothingItem) -> str:
    """Render one item as ``"TOP: navy cotton (ID: t1)"``."""

    description = " ".join(part for part in (item.color, item.material) if part) or "unspecified"
    style = f" ({item.style} style)" if item.style else ""
    return f"{item.category.upper()}: {description}{style} (ID: {item.item_id})"


def outfit_prompt(items: Iterable[ClothingItem], occasion: str, max_outfits: int) -> str:
    lines = "\n".join(wardrobe_line(item) for item in items)
    return (
        f"Create up to {max_outfits} outfit combinations for a {occasion} occasion "
        "from this wardrobe:\n"
        f"{lines}\n\n"
        "Each outfit needs one top and one bottom; shoe and accessory are optional.\n"
        "Use only the IDs listed above. Score each outfit from 0 to 100 and give a "
        "confidence between 0 and 1.\n"
        "Respond with a JSON array of objects shaped like:\n"
        '[{"outfitId": "outfit_1", "top": "<id>", "bottom": "<id>", "shoe": "<id or empty>", '
        '"accessory": "<id or empty>", "score": 85, "reasoning": "...", '
        f'"occasion": "{occasion}", "colorScheme": "...", "styleNotes": ["..."], "confidence": 0.9}}]'
    )


__all__ = [
    "GUARDRAIL_BULLETS",
    "system_instruction",
    "clothing_analysis_prompt",
    "wardrobe_line",
    "outfit_prompt",
]
