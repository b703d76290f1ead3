"""Clothing item data model and helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from models.taxonomy import normalize_attribute, validate_category

logger = logging.getLogger(__name__)


@dataclass
class ClothingItem:
    """A read-only snapshot of one classified wardrobe item."""

    item_id: str
    category: str
    color: str = ""
    material: str = ""
    embedding: Optional[List[float]] = None
    style: Optional[str] = None
    image_url: Optional[str] = None
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        self.item_id = str(self.item_id)
        self.category = validate_category(self.category)
        self.color = normalize_attribute(self.color)
        self.material = normalize_attribute(self.material)
        if self.embedding is not None:
            try:
                self.embedding = [float(value) for value in self.embedding]
            except TypeError as exc:
                raise ValueError(f"embedding must be a sequence of numbers: {exc}") from exc


def from_raw_metadata(metadata: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from a loose storage row."""

    item_id = metadata.get("item_id") or metadata.get("id")
    if not item_id:
        raise ValueError("Missing required field for ClothingItem: id")
    if not metadata.get("category"):
        raise ValueError("Missing required field for ClothingItem: category")

    return ClothingItem(
        item_id=str(item_id),
        category=str(metadata["category"]),
        color=metadata.get("color") or "",
        material=metadata.get("material") or "",
        embedding=metadata.get("embedding") or None,
        style=metadata.get("style"),
        image_url=metadata.get("image_url"),
        user_id=metadata.get("user_id"),
    )


def coerce_items(raw_items: Iterable[Union[ClothingItem, Dict[str, Any]]]) -> List[ClothingItem]:
    """Build items from a mixed batch, logging and skipping invalid rows."""

    items: List[ClothingItem] = []
    for index, raw in enumerate(raw_items):
        if isinstance(raw, ClothingItem):
            items.append(raw)
            continue
        if not isinstance(raw, dict):
            logger.warning("Skipping wardrobe row %s: expected a mapping, got %s", index, type(raw).__name__)
            continue
        try:
            items.append(from_raw_metadata(raw))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping wardrobe row %s: %s", index, exc)
    return items


__all__ = ["ClothingItem", "from_raw_metadata", "coerce_items"]
