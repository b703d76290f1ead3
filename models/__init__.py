"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import ClothingItem, coerce_items, from_raw_metadata
from models.outfit import OutfitCandidate

__all__ = ["ClothingItem", "OutfitCandidate", "coerce_items", "from_raw_metadata"]
