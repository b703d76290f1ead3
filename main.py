"""Simple entrypoint to rank outfits for a sample wardrobe locally."""

import json

from stylist_app.app import WardrobeStylistApp

SAMPLE_WARDROBE = [
    {"id": "t1", "category": "top", "color": "white", "material": "cotton"},
    {"id": "t2", "category": "top", "color": "navy", "material": "wool"},
    {"id": "b1", "category": "bottom", "color": "black", "material": "denim"},
    {"id": "b2", "category": "bottom", "color": "beige", "material": "linen"},
    {"id": "s1", "category": "shoe", "color": "black", "material": "leather"},
    {"id": "a1", "category": "accessory", "color": "brown", "material": "leather"},
]


def main() -> None:
    app = WardrobeStylistApp()
    for occasion in ("casual", "office"):
        outfits = app.recommend(SAMPLE_WARDROBE, occasion)
        print(json.dumps([outfit.to_payload() for outfit in outfits[:3]], indent=2))


if __name__ == "__main__":
    main()
