"""Agent tests with in-memory text generators instead of Gemini."""
from __future__ import annotations

import base64
import io
import json
import sys
from pathlib import Path
from typing import List, Optional

from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.clothing_analyst import ClothingAnalystAgent
from agents.outfit_stylist_agent import OutfitStylistAgent
from logic.prompts import outfit_prompt, wardrobe_line
from models.clothing_item import ClothingItem
from tools.generator_client import GenerationError

WARDROBE = [
    {"id": "t1", "category": "top", "color": "white", "material": "cotton"},
    {"id": "t2", "category": "top", "color": "navy", "material": "wool"},
    {"id": "b1", "category": "bottom", "color": "black", "material": "denim"},
    {"id": "s1", "category": "shoe", "color": "black"},
]


class FakeGenerator:
    """Returns scripted responses; exceptions in the script are raised."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.prompts: List[str] = []
        self.images: List[Optional[str]] = []

    def complete(self, prompt: str, image_b64: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        self.images.append(image_b64)
        response = self.responses[min(len(self.prompts), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


def _image_b64(color) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (20, 20), color).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def _stylist(generator=None, **kwargs) -> OutfitStylistAgent:
    return OutfitStylistAgent(generator=generator, retry_base_delay=0, **kwargs)


def test_analyst_without_generator_classifies_locally() -> None:
    result = ClothingAnalystAgent().analyze(_image_b64((0, 0, 128)))

    assert result.fallback
    assert result.analysis.category == "top"
    assert result.analysis.color == "navy"
    assert result.analysis.material == "cotton"
    assert result.analysis.confidence == 0.2


def test_analyst_uses_generator_classification() -> None:
    generator = FakeGenerator(
        '```json\n{"category": "Bottom", "color": "Black", "material": "denim", "style": "casual", "confidence": 0.92}\n```'
    )
    image = _image_b64((0, 0, 0))

    result = ClothingAnalystAgent(generator=generator).analyze(image)

    assert result.source == "generator"
    assert result.analysis.category == "bottom"
    assert result.analysis.color == "black"
    assert result.analysis.confidence == 0.92
    assert generator.images == [image]


def test_analyst_retries_then_falls_back_on_generation_errors() -> None:
    generator = FakeGenerator(GenerationError("quota exceeded"))

    result = ClothingAnalystAgent(generator=generator, retry_base_delay=0).analyze(_image_b64((0, 128, 128)))

    assert len(generator.prompts) == 3
    assert result.fallback
    assert result.analysis.color == "teal"


def test_analyst_recovers_after_one_transient_failure() -> None:
    generator = FakeGenerator(GenerationError("timeout"), '{"category": "shoe", "color": "brown"}')

    result = ClothingAnalystAgent(generator=generator, retry_base_delay=0).analyze(_image_b64((0, 0, 0)))

    assert result.source == "generator"
    assert result.analysis.category == "shoe"


def test_analyst_treats_unparseable_answer_as_fallback() -> None:
    generator = FakeGenerator("I cannot see any clothing in this picture.")

    result = ClothingAnalystAgent(generator=generator).analyze("not-an-image")

    assert result.fallback
    assert result.analysis.color == "black"
    assert result.analysis.confidence == 0.3


def test_stylist_accepts_generator_outfits_and_discards_unknown_ids() -> None:
    proposals = [
        {"outfitId": "o1", "top": "t1", "bottom": "b1", "shoe": "s1", "score": 92, "reasoning": "Crisp contrast"},
        {"outfitId": "o2", "top": "ghost", "bottom": "b1", "score": 99},
        {"outfitId": "o3", "top": "b1", "bottom": "t1", "score": 80},
        {"outfitId": "o4", "top": "t2", "bottom": "b1"},
    ]
    generator = FakeGenerator("Here you go:\n" + json.dumps(proposals))

    result = _stylist(generator).generate(WARDROBE, "office")

    assert result.source == "generator"
    assert [outfit.outfit_id for outfit in result.outfits] == ["o1", "o4"]
    assert result.discarded == 2
    assert result.outfits[1].score == 70.0
    assert result.outfits[1].occasion == "office"
    assert "TOP: white cotton (ID: t1)" in generator.prompts[0]


def test_stylist_renames_repeated_outfit_ids() -> None:
    proposals = [
        {"outfitId": "o1", "top": "t1", "bottom": "b1"},
        {"outfitId": "o1", "top": "t2", "bottom": "b1"},
        {"outfitId": "outfit_2", "top": "t2", "bottom": "b1"},
    ]

    result = _stylist(FakeGenerator(json.dumps(proposals))).generate(WARDROBE, "casual")

    ids = [outfit.outfit_id for outfit in result.outfits]
    assert result.source == "generator"
    assert ids == ["o1", "outfit_2", "outfit_3"]
    assert [outfit.top for outfit in result.outfits] == ["t1", "t2", "t2"]


def test_stylist_blanks_shoes_and_accessories_missing_from_their_category() -> None:
    proposals = [
        {"outfitId": "o1", "top": "t1", "bottom": "b1", "shoe": "t2", "accessory": "ghost"},
        {"outfitId": "o2", "top": "t2", "bottom": "b1", "shoe": "s1"},
    ]

    result = _stylist(FakeGenerator(json.dumps(proposals))).generate(WARDROBE, "casual")

    first, second = result.outfits
    assert result.source == "generator"
    assert result.discarded == 0
    assert (first.shoe, first.accessory) == ("", "")
    assert second.shoe == "s1"


def test_stylist_falls_back_when_no_proposal_survives() -> None:
    generator = FakeGenerator('[{"outfitId": "o1", "top": "x", "bottom": "y"}]')

    result = _stylist(generator).generate(WARDROBE, "casual")

    assert result.fallback
    assert result.discarded == 1
    assert [o.to_payload() for o in result.outfits] == [o.to_payload() for o in _stylist().recommend(WARDROBE, "casual")]


def test_stylist_falls_back_when_generator_output_is_garbage() -> None:
    result = _stylist(FakeGenerator("Sorry, something went wrong.")).generate(WARDROBE, "casual")

    assert result.fallback
    assert result.outfits


def test_stylist_falls_back_on_generation_failure() -> None:
    generator = FakeGenerator(GenerationError("service unavailable"))

    result = _stylist(generator, retry_attempts=2).generate(WARDROBE, "party")

    assert len(generator.prompts) == 2
    assert result.fallback
    assert all(outfit.occasion == "party" for outfit in result.outfits)


def test_stylist_without_generator_reports_local_source() -> None:
    result = _stylist().generate(WARDROBE, None)

    assert result.source == "local"
    assert not result.fallback
    assert result.outfits[0].occasion == "casual"


def test_stylist_skips_generator_when_no_outfit_is_possible() -> None:
    generator = FakeGenerator("[]")

    result = _stylist(generator).generate([{"id": "t1", "category": "top"}], "casual")

    assert result.outfits == []
    assert generator.prompts == []


def test_recommend_never_calls_generator_and_honours_limit() -> None:
    generator = FakeGenerator("[]")
    wardrobe = [{"id": f"t{i}", "category": "top", "color": "white"} for i in range(3)]
    wardrobe += [{"id": f"b{i}", "category": "bottom", "color": "black"} for i in range(3)]

    outfits = _stylist(generator, max_outfits=4).recommend(wardrobe, "formal")

    assert len(outfits) == 4
    assert generator.prompts == []


def test_stylist_caps_generator_outfits() -> None:
    proposals = [{"outfitId": f"o{i}", "top": "t1", "bottom": "b1"} for i in range(5)]

    result = _stylist(FakeGenerator(json.dumps(proposals)), max_outfits=3).generate(WARDROBE, "casual")

    assert len(result.outfits) == 3
    assert result.discarded == 0


def test_prompt_lines_describe_items() -> None:
    item = ClothingItem(item_id="t1", category="top", color="navy", material="cotton")
    styled = ClothingItem(item_id="a9", category="accessory", style="boho")

    assert wardrobe_line(item) == "TOP: navy cotton (ID: t1)"
    assert wardrobe_line(styled) == "ACCESSORY: unspecified (boho style) (ID: a9)"
    assert '"occasion": "formal"' in outfit_prompt([item], "formal", 5)
