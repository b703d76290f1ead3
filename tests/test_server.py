"""HTTP surface tests using FastAPI's TestClient."""
from __future__ import annotations

import base64
import io
import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from server import api
from stylist_app.app import WardrobeStylistApp
from stylist_app.config import StylistConfig

ITEMS = [
    {"id": "t1", "category": "top", "color": "red"},
    {"id": "t2", "category": "top", "color": "navy"},
    {"id": "b1", "category": "bottom", "color": "green"},
    {"id": "b2", "category": "bottom", "color": "red"},
]


class _ScriptedGenerator:
    def __init__(self, response: str) -> None:
        self.response = response

    def complete(self, prompt, image_b64=None) -> str:
        return self.response


def _client(monkeypatch: pytest.MonkeyPatch, **generators) -> TestClient:
    stylist = WardrobeStylistApp(config=StylistConfig(retry_base_delay=0), **generators)
    monkeypatch.setattr(api, "stylist_app", stylist)
    return TestClient(api.app)


def _image_b64(color) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color).save(buffer, format="JPEG")
    return "data:image/jpeg;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def test_healthcheck(monkeypatch: pytest.MonkeyPatch) -> None:
    response = _client(monkeypatch).get("/healthz")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["generator_enabled"] is False
    assert body["model"] == "gemini-2.5-pro"


def test_analyze_clothing_without_generator_is_flagged_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    response = _client(monkeypatch).post("/analyze-clothing", json={"image": _image_b64((0, 0, 0))})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["fallback"] is True
    assert body["analysis"]["category"] == "top"
    assert body["analysis"]["color"] == "black"


def test_analyze_clothing_with_undecodable_image_still_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    response = _client(monkeypatch).post("/analyze-clothing", json={"image": "garbage"})

    assert response.status_code == 200
    assert response.json()["analysis"]["confidence"] == 0.3


def test_analyze_clothing_uses_generator(monkeypatch: pytest.MonkeyPatch) -> None:
    generator = _ScriptedGenerator('{"category": "accessory", "color": "gold", "confidence": 0.8}')

    body = _client(monkeypatch, analysis_generator=generator).post(
        "/analyze-clothing", json={"image": _image_b64((200, 160, 40))}
    ).json()

    assert body["fallback"] is False
    assert body["analysis"]["category"] == "accessory"


def test_analyze_clothing_requires_image(monkeypatch: pytest.MonkeyPatch) -> None:
    assert _client(monkeypatch).post("/analyze-clothing", json={}).status_code == 422


def test_recommend_ranks_outfits(monkeypatch: pytest.MonkeyPatch) -> None:
    response = _client(monkeypatch).post("/recommend", json={"items": ITEMS, "occasion": "party"})

    assert response.status_code == 200
    recommendations = response.json()["recommendations"]
    assert len(recommendations) == 4
    assert recommendations[0]["outfitId"] == "t1-b1-no-shoe-no-accessory"
    assert recommendations[0]["score"] == 80.0
    assert [r["score"] for r in recommendations] == sorted((r["score"] for r in recommendations), reverse=True)


def test_recommend_with_empty_wardrobe(monkeypatch: pytest.MonkeyPatch) -> None:
    response = _client(monkeypatch).post("/recommend", json={"items": []})

    assert response.status_code == 200
    assert response.json()["recommendations"] == []


def test_generate_outfits_prefers_generator(monkeypatch: pytest.MonkeyPatch) -> None:
    generator = _ScriptedGenerator(json.dumps([{"outfitId": "g1", "top": "t2", "bottom": "b2", "score": 77}]))

    body = _client(monkeypatch, outfit_generator=generator).post(
        "/generate-outfits", json={"items": ITEMS, "occasion": "office"}
    ).json()

    assert body["source"] == "generator"
    assert body["fallback"] is False
    assert [r["outfitId"] for r in body["recommendations"]] == ["g1"]


def test_generate_outfits_without_generator_uses_engine(monkeypatch: pytest.MonkeyPatch) -> None:
    body = _client(monkeypatch).post("/generate-outfits", json={"items": ITEMS}).json()

    assert body["source"] == "local"
    assert len(body["recommendations"]) == 4
