"""Nearest-named-color classification and material heuristics for clothing photos.

These helpers back the analysis path when the text generator is unavailable.
They never raise: any problem with the input degrades to a fixed low-confidence
default, so callers can only tell "no image" from "weak signal" by confidence.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Sequence

from models.palette import (
    COLOR_MATERIALS,
    DEFAULT_COLOR,
    DEFAULT_MATERIAL,
    FASHION_COLORS,
    MATERIAL_PATTERNS,
)
from tools.image_sampling import ImageDecodeError, all_pixels, sample_pixels

logger = logging.getLogger(__name__)

BACKGROUND_THRESHOLD = 240
PALETTE_SIZE = 5
DEGRADED_CONFIDENCE = 0.3


@dataclass(frozen=True)
class ColorAnalysis:
    dominant_color: str
    secondary_colors: List[str] = field(default_factory=list)
    palette: List[str] = field(default_factory=list)
    material_guess: str = DEFAULT_MATERIAL
    confidence: float = DEGRADED_CONFIDENCE


@dataclass(frozen=True)
class MaterialAnalysis:
    material: str
    texture: str
    weight: str
    confidence: float


DEFAULT_COLOR_ANALYSIS = ColorAnalysis(
    dominant_color=DEFAULT_COLOR,
    secondary_colors=[DEFAULT_COLOR],
    palette=[DEFAULT_COLOR],
    material_guess=DEFAULT_MATERIAL,
    confidence=DEGRADED_CONFIDENCE,
)
DEFAULT_MATERIAL_ANALYSIS = MaterialAnalysis(
    material=DEFAULT_MATERIAL, texture="smooth", weight="medium", confidence=DEGRADED_CONFIDENCE
)


def _default_color_analysis() -> ColorAnalysis:
    return replace(
        DEFAULT_COLOR_ANALYSIS,
        secondary_colors=list(DEFAULT_COLOR_ANALYSIS.secondary_colors),
        palette=list(DEFAULT_COLOR_ANALYSIS.palette),
    )


def closest_fashion_color(r: int, g: int, b: int) -> str:
    """Return the named color nearest to the pixel in RGB space."""

    closest = DEFAULT_COLOR
    min_distance = float("inf")
    for name, (cr, cg, cb) in FASHION_COLORS.items():
        distance = (r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2
        if distance < min_distance:
            min_distance = distance
            closest = name
    return closest


def guess_material(color: str) -> str:
    """Guess a fabric from a color name."""

    for material, colors in MATERIAL_PATTERNS:
        if color in colors:
            return material
    return COLOR_MATERIALS.get(color, DEFAULT_MATERIAL)


def _is_background(r: int, g: int, b: int) -> bool:
    return r > BACKGROUND_THRESHOLD and g > BACKGROUND_THRESHOLD and b > BACKGROUND_THRESHOLD


def classify_color(pixel_samples: Iterable[Sequence[int]]) -> ColorAnalysis:
    """Tally nearest named colors over the samples and summarise the palette."""

    try:
        counts: Counter = Counter()
        for pixel in pixel_samples:
            r, g, b = (int(channel) for channel in pixel[:3])
            if _is_background(r, g, b):
                continue
            counts[closest_fashion_color(r, g, b)] += 1
    except (TypeError, ValueError) as exc:
        logger.warning("Color classification failed, using default: %s", exc)
        return _default_color_analysis()

    if not counts:
        logger.info("No foreground pixels sampled, using default color analysis")
        return _default_color_analysis()

    # most_common keeps first-seen order for equal counts.
    ranked = [name for name, _ in counts.most_common()]
    dominant = ranked[0]
    analysis = ColorAnalysis(
        dominant_color=dominant,
        secondary_colors=ranked[1:3],
        palette=ranked[:PALETTE_SIZE],
        material_guess=guess_material(dominant),
        confidence=min(len(ranked) / PALETTE_SIZE, 1.0),
    )
    logger.info("Color analysis result: %s (%s colors)", dominant, len(ranked))
    return analysis


def analyze_material(pixels: Sequence[Sequence[int]]) -> MaterialAnalysis:
    """Estimate texture from the mean channel variation between neighbouring pixels."""

    try:
        variation = 0
        samples = 0
        for current, following in zip(pixels, pixels[1:]):
            variation += sum(abs(int(a) - int(b)) for a, b in zip(current[:3], following[:3]))
            samples += 1
    except (TypeError, ValueError) as exc:
        logger.warning("Material analysis failed, using default: %s", exc)
        return DEFAULT_MATERIAL_ANALYSIS

    if samples == 0:
        return DEFAULT_MATERIAL_ANALYSIS

    average = variation / samples
    if average > 50:
        material, texture, weight = "denim", "textured", "heavy"
    elif average > 30:
        material, texture, weight = "wool", "slightly_textured", "medium"
    else:
        material, texture, weight = "cotton", "smooth", "light"
    return MaterialAnalysis(material=material, texture=texture, weight=weight, confidence=min(average / 100, 1.0))


def classify_image(image_b64: str) -> ColorAnalysis:
    """Decode, sample and classify an uploaded photo; degrade on any decode error."""

    try:
        samples = sample_pixels(image_b64)
    except ImageDecodeError as exc:
        logger.warning("Image decode failed, using default color analysis: %s", exc)
        return _default_color_analysis()
    return classify_color(samples)


def analyze_image_material(image_b64: str) -> MaterialAnalysis:
    try:
        pixels = all_pixels(image_b64)
    except ImageDecodeError as exc:
        logger.warning("Image decode failed, using default material analysis: %s", exc)
        return DEFAULT_MATERIAL_ANALYSIS
    return analyze_material(pixels)


__all__ = [
    "ColorAnalysis",
    "MaterialAnalysis",
    "DEFAULT_COLOR_ANALYSIS",
    "DEFAULT_MATERIAL_ANALYSIS",
    "closest_fashion_color",
    "guess_material",
    "classify_color",
    "analyze_material",
    "classify_image",
    "analyze_image_material",
]
