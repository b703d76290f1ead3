"""Named fashion colors and color-to-material heuristics for the local classifier."""

from typing import Dict, List, Tuple

RGB = Tuple[int, int, int]

FASHION_COLORS: Dict[str, RGB] = {
    # neutrals
    "black": (0, 0, 0),
    "charcoal": (54, 69, 79),
    "dark_gray": (64, 64, 64),
    "gray": (128, 128, 128),
    "light_gray": (192, 192, 192),
    "white": (255, 255, 255),
    "cream": (255, 253, 208),
    "beige": (245, 245, 220),
    "tan": (210, 180, 140),
    "ivory": (255, 255, 240),
    "off_white": (250, 250, 250),
    "silver": (192, 192, 192),
    # blues
    "navy": (0, 0, 128),
    "royal_blue": (65, 105, 225),
    "sky_blue": (135, 206, 235),
    "teal": (0, 128, 128),
    "turquoise": (64, 224, 208),
    "cobalt": (0, 71, 171),
    "midnight_blue": (25, 25, 112),
    "steel_blue": (70, 130, 180),
    "powder_blue": (176, 224, 230),
    "denim_blue": (21, 96, 189),
    "electric_blue": (125, 249, 255),
    # reds
    "burgundy": (128, 0, 32),
    "maroon": (128, 0, 0),
    "crimson": (220, 20, 60),
    "scarlet": (255, 36, 0),
    "rose": (255, 228, 225),
    "coral": (255, 127, 80),
    "cherry_red": (222, 49, 99),
    "wine": (114, 47, 55),
    "ruby": (224, 17, 95),
    "brick_red": (203, 65, 84),
    "cardinal": (196, 30, 58),
    # greens
    "forest_green": (34, 139, 34),
    "olive": (128, 128, 0),
    "sage": (158, 183, 158),
    "mint": (152, 251, 152),
    "emerald": (80, 200, 120),
    "hunter_green": (53, 94, 59),
    "lime_green": (50, 205, 50),
    "jade": (0, 168, 107),
    "pine_green": (1, 121, 111),
    "army_green": (75, 83, 32),
    "kelly_green": (76, 187, 23),
    # purples
    "plum": (142, 69, 133),
    "lavender": (230, 230, 250),
    "violet": (238, 130, 238),
    "purple": (128, 0, 128),
    "amethyst": (153, 102, 204),
    "eggplant": (97, 64, 81),
    "mauve": (224, 176, 255),
    "periwinkle": (204, 204, 255),
    "orchid": (218, 112, 214),
    # browns
    "chocolate": (123, 63, 0),
    "coffee": (111, 78, 55),
    "camel": (193, 154, 107),
    "mahogany": (192, 64, 0),
    "chestnut": (149, 69, 53),
    "mocha": (150, 75, 0),
    "caramel": (255, 213, 154),
    "bronze": (205, 127, 50),
    "copper": (184, 115, 51),
    # yellows and oranges
    "gold": (255, 215, 0),
    "mustard": (255, 219, 88),
    "amber": (255, 191, 0),
    "orange": (255, 165, 0),
    "peach": (255, 218, 185),
    "apricot": (251, 206, 177),
    "lemon": (255, 247, 0),
    "canary": (255, 239, 0),
    "honey": (255, 195, 11),
    # pinks
    "blush": (222, 93, 131),
    "dusty_rose": (188, 143, 143),
    "magenta": (255, 0, 255),
    "fuchsia": (255, 119, 255),
    "salmon": (250, 128, 114),
    "bubblegum": (255, 193, 204),
    "rose_gold": (231, 172, 207),
    "hot_pink": (255, 105, 180),
    "baby_pink": (244, 194, 194),
}

# Checked in order; the first material listing the color wins.
MATERIAL_PATTERNS: List[Tuple[str, List[str]]] = [
    ("denim", ["navy", "denim_blue", "royal_blue", "midnight_blue", "steel_blue"]),
    ("leather", ["black", "brown", "chocolate", "tan", "mahogany", "chestnut"]),
    ("cotton", ["white", "cream", "beige", "navy", "black", "gray", "ivory"]),
    ("silk", ["white", "cream", "black", "navy", "burgundy", "ivory", "off_white"]),
    ("wool", ["gray", "charcoal", "black", "navy", "burgundy", "dark_gray"]),
    ("polyester", ["white", "black", "navy", "gray"]),
    ("linen", ["cream", "beige", "white", "tan", "ivory"]),
    ("cashmere", ["gray", "charcoal", "cream", "beige", "burgundy"]),
    ("suede", ["brown", "tan", "chocolate", "camel", "mahogany"]),
]

COLOR_MATERIALS: Dict[str, str] = {
    "light_gray": "cotton",
    "camel": "leather",
    "mocha": "leather",
    "bronze": "leather",
    "copper": "leather",
    "maroon": "silk",
    "wine": "silk",
    "cherry_red": "cotton",
    "crimson": "cotton",
    "scarlet": "cotton",
    "forest_green": "cotton",
    "olive": "cotton",
    "sage": "cotton",
    "emerald": "silk",
    "hunter_green": "cotton",
    "army_green": "cotton",
    "plum": "silk",
    "lavender": "silk",
    "violet": "silk",
    "purple": "silk",
    "amethyst": "silk",
    "eggplant": "silk",
    "gold": "silk",
    "mustard": "cotton",
    "amber": "silk",
    "orange": "cotton",
    "peach": "cotton",
    "apricot": "cotton",
    "blush": "cotton",
    "dusty_rose": "cotton",
    "rose": "silk",
    "coral": "cotton",
    "salmon": "cotton",
    "hot_pink": "cotton",
}

DEFAULT_COLOR = "black"
DEFAULT_MATERIAL = "cotton"

__all__ = [
    "RGB",
    "FASHION_COLORS",
    "MATERIAL_PATTERNS",
    "COLOR_MATERIALS",
    "DEFAULT_COLOR",
    "DEFAULT_MATERIAL",
]
