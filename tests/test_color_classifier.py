"""Tests for nearest-color classification, material heuristics and image sampling."""
from __future__ import annotations

import base64
import io
import sys
from pathlib import Path

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.color_classifier import (
    DEFAULT_COLOR_ANALYSIS,
    DEFAULT_MATERIAL_ANALYSIS,
    analyze_image_material,
    analyze_material,
    classify_color,
    classify_image,
    closest_fashion_color,
    guess_material,
)
from tools.image_sampling import ImageDecodeError, decode_image, sample_pixels, strip_data_url

NAVY = (0, 0, 128)
TEAL = (0, 128, 128)
WHITE = (255, 255, 255)


def _image_b64(color, size=(40, 40), fmt: str = "PNG") -> str:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def test_closest_fashion_color_matches_exact_palette_entries() -> None:
    assert closest_fashion_color(*NAVY) == "navy"
    assert closest_fashion_color(*TEAL) == "teal"
    assert closest_fashion_color(5, 5, 5) == "black"


def test_guess_material_uses_first_matching_pattern() -> None:
    assert guess_material("navy") == "denim"
    assert guess_material("beige") == "cotton"
    assert guess_material("not-a-color") == "cotton"


def test_classify_color_ranks_by_frequency_and_skips_background() -> None:
    pixels = [NAVY] * 3 + [TEAL] + [WHITE] * 10

    analysis = classify_color(pixels)

    assert analysis.dominant_color == "navy"
    assert analysis.secondary_colors == ["teal"]
    assert analysis.palette == ["navy", "teal"]
    assert analysis.material_guess == "denim"
    assert analysis.confidence == pytest.approx(0.4)


def test_classify_color_ties_keep_first_seen_color() -> None:
    assert classify_color([TEAL, NAVY]).dominant_color == "teal"
    assert classify_color([NAVY, TEAL]).dominant_color == "navy"


def test_confidence_saturates_at_five_colors() -> None:
    pixels = [(0, 0, 0), NAVY, TEAL, (128, 128, 128), (0, 128, 0), (128, 0, 0)]

    analysis = classify_color(pixels)

    assert analysis.confidence == 1.0
    assert len(analysis.palette) == 5


def test_background_only_and_empty_samples_degrade_to_default() -> None:
    assert classify_color([WHITE] * 50) == DEFAULT_COLOR_ANALYSIS
    assert classify_color([]) == DEFAULT_COLOR_ANALYSIS
    assert classify_color([]).confidence == 0.3


def test_malformed_samples_degrade_instead_of_raising() -> None:
    assert classify_color([("a", "b", "c")]) == DEFAULT_COLOR_ANALYSIS
    assert classify_color([None]) == DEFAULT_COLOR_ANALYSIS


def test_default_analysis_is_not_shared_between_calls() -> None:
    first = classify_color([])
    first.palette.append("mutated")

    assert classify_color([]).palette == ["black"]


@pytest.mark.parametrize(
    ("pixels", "material", "texture"),
    [
        ([(0, 0, 0), (60, 60, 60)] * 4, "denim", "textured"),
        ([(0, 0, 0), (12, 12, 12)] * 4, "wool", "slightly_textured"),
        ([(10, 10, 10)] * 8, "cotton", "smooth"),
    ],
)
def test_material_follows_neighbour_variation(pixels, material, texture) -> None:
    result = analyze_material(pixels)

    assert result.material == material
    assert result.texture == texture


def test_material_confidence_tracks_variation() -> None:
    assert analyze_material([(0, 0, 0), (12, 12, 12)]).confidence == pytest.approx(0.36)
    assert analyze_material([(0, 0, 0), (255, 255, 255)]).confidence == 1.0


def test_material_defaults_for_too_few_pixels() -> None:
    assert analyze_material([]) == DEFAULT_MATERIAL_ANALYSIS
    assert analyze_material([(1, 2, 3)]) == DEFAULT_MATERIAL_ANALYSIS
    assert analyze_material([None, None]) == DEFAULT_MATERIAL_ANALYSIS


def test_classify_image_reads_solid_navy_photo() -> None:
    analysis = classify_image(_image_b64(NAVY))

    assert analysis.dominant_color == "navy"
    assert analysis.confidence == pytest.approx(0.2)


def test_classify_image_accepts_data_urls() -> None:
    analysis = classify_image("data:image/png;base64," + _image_b64(TEAL))

    assert analysis.dominant_color == "teal"


def test_classify_image_degrades_on_undecodable_input() -> None:
    assert classify_image("definitely-not-an-image") == DEFAULT_COLOR_ANALYSIS
    assert classify_image("") == DEFAULT_COLOR_ANALYSIS
    assert analyze_image_material("%%%") == DEFAULT_MATERIAL_ANALYSIS


def test_oversized_image_degrades_instead_of_raising(monkeypatch: pytest.MonkeyPatch) -> None:
    # Pillow refuses images above twice the pixel limit.
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 50)
    payload = _image_b64(NAVY, size=(40, 40))

    with pytest.raises(ImageDecodeError):
        decode_image(payload)
    assert classify_image(payload) == DEFAULT_COLOR_ANALYSIS
    assert analyze_image_material(payload) == DEFAULT_MATERIAL_ANALYSIS


def test_white_photo_degrades_to_default() -> None:
    assert classify_image(_image_b64(WHITE)) == DEFAULT_COLOR_ANALYSIS


def test_solid_photo_reads_as_smooth_material() -> None:
    result = analyze_image_material(_image_b64(NAVY))

    assert result.material == "cotton"
    assert result.texture == "smooth"


def test_sampling_downscales_and_strides() -> None:
    assert len(sample_pixels(_image_b64(NAVY, size=(40, 40)))) == 400
    assert len(sample_pixels(_image_b64(NAVY, size=(400, 100)))) == 2500


def test_decode_image_converts_to_rgb() -> None:
    buffer = io.BytesIO()
    Image.new("L", (8, 8), 128).save(buffer, format="PNG")
    image = decode_image(base64.b64encode(buffer.getvalue()).decode("ascii"))

    assert image.mode == "RGB"


def test_decode_image_raises_for_garbage() -> None:
    with pytest.raises(ImageDecodeError):
        decode_image(base64.b64encode(b"plain text").decode("ascii"))


def test_strip_data_url() -> None:
    assert strip_data_url("data:image/jpeg;base64,QUJD") == "QUJD"
    assert strip_data_url("QUJD") == "QUJD"
