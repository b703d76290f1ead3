"""FastAPI server exposing clothing analysis and outfit recommendation endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI
from pydantic import BaseModel, Field

from stylist_app.app import WardrobeStylistApp
from stylist_app.logging_config import configure_logging

configure_logging()

stylist_app = WardrobeStylistApp()
app = FastAPI(title="Wardrobe Stylist", version="0.1.0")


class AnalyzeClothingRequest(BaseModel):
    """Request payload for classifying a single clothing photo."""

    image: str = Field(..., description="Base64 image data, optionally as a data: URL")


class WardrobeRequest(BaseModel):
    """Request payload carrying a wardrobe snapshot and target occasion."""

    items: List[Dict[str, Any]] = Field(default_factory=list, description="Wardrobe item snapshots")
    occasion: str | None = Field(None, description="casual, office, party or formal")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "wardrobe-stylist",
        "environment": stylist_app.config.environment or "local",
        "model": stylist_app.config.model,
        "generator_enabled": stylist_app.config.generator_enabled,
    }


@app.post("/analyze-clothing")
def analyze_clothing(request: AnalyzeClothingRequest) -> dict:
    """Classify a garment photo; degraded answers are flagged rather than failed."""

    result = stylist_app.analyze_clothing(request.image)
    return {
        "success": True,
        "analysis": result.analysis.model_dump(),
        "fallback": result.fallback,
        "timestamp": _timestamp(),
    }


@app.post("/recommend")
def recommend(request: WardrobeRequest) -> dict:
    """Rank outfits with the deterministic engine."""

    outfits = stylist_app.recommend(request.items, request.occasion)
    return {
        "success": True,
        "recommendations": [outfit.to_payload() for outfit in outfits],
        "metadata": {
            "totalItems": len(request.items),
            "occasion": outfits[0].occasion if outfits else request.occasion or stylist_app.config.default_occasion,
            "generatedAt": _timestamp(),
        },
    }


@app.post("/generate-outfits")
def generate_outfits(request: WardrobeRequest) -> dict:
    """Ask the generator for outfits, falling back to the deterministic engine."""

    result = stylist_app.generate_outfits(request.items, request.occasion)
    return {
        "success": True,
        "recommendations": result.to_payload(),
        "source": result.source,
        "fallback": result.fallback,
        "metadata": {
            "totalItems": len(request.items),
            "discarded": result.discarded,
            "generatedAt": _timestamp(),
        },
    }


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
