"""Outfit candidate schema produced by the combinatorial engine."""

from dataclasses import dataclass
from typing import Optional, Tuple

from models.clothing_item import ClothingItem

NO_SHOE = "no-shoe"
NO_ACCESSORY = "no-accessory"


@dataclass(frozen=True)
class OutfitCandidate:
    top: ClothingItem
    bottom: ClothingItem
    occasion: str
    score: float
    shoe: Optional[ClothingItem] = None
    accessory: Optional[ClothingItem] = None

    @property
    def outfit_id(self) -> str:
        shoe_id = self.shoe.item_id if self.shoe else NO_SHOE
        accessory_id = self.accessory.item_id if self.accessory else NO_ACCESSORY
        return f"{self.top.item_id}-{self.bottom.item_id}-{shoe_id}-{accessory_id}"

    @property
    def key(self) -> Tuple[str, str]:
        return (self.outfit_id, self.occasion)
