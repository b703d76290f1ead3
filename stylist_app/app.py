"""Wardrobe stylist application bootstrap."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from agents.clothing_analyst import ClothingAnalysisResult, ClothingAnalystAgent
from agents.outfit_stylist_agent import OutfitGenerationResult, OutfitStylistAgent
from logic.prompts import system_instruction
from logic.validation import OutfitRecommendation
from models.clothing_item import ClothingItem
from stylist_app.config import StylistConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event
from tools.generator_client import (
    ANALYSIS_TEMPERATURE,
    RECOMMENDATION_TEMPERATURE,
    GeminiTextGenerator,
    TextGenerator,
)

LOGGER = get_logger(__name__)


class WardrobeStylistApp:
    """Wires together configuration, the optional Gemini generators and both agents."""

    def __init__(
        self,
        config: StylistConfig | None = None,
        analysis_generator: Optional[TextGenerator] = None,
        outfit_generator: Optional[TextGenerator] = None,
    ) -> None:
        self.config = config or StylistConfig.from_env()
        configure_logging()

        if analysis_generator is None and self.config.generator_enabled:
            analysis_generator = self._build_generator(
                ANALYSIS_TEMPERATURE, "garment analyst. Classify clothing photos precisely"
            )
        if outfit_generator is None and self.config.generator_enabled:
            outfit_generator = self._build_generator(
                RECOMMENDATION_TEMPERATURE, "outfit stylist. Pair wardrobe items by color theory and occasion"
            )

        self.clothing_analyst = ClothingAnalystAgent(
            generator=analysis_generator,
            retry_attempts=self.config.retry_attempts,
            retry_base_delay=self.config.retry_base_delay,
        )
        self.outfit_stylist = OutfitStylistAgent(
            generator=outfit_generator,
            max_outfits=self.config.max_outfits,
            default_occasion=self.config.default_occasion,
            retry_attempts=self.config.retry_attempts,
            retry_base_delay=self.config.retry_base_delay,
        )
        log_event(
            LOGGER,
            logging.INFO,
            "app_initialized",
            environment=self.config.environment or "local",
            model=self.config.model,
            generator_enabled=self.config.generator_enabled,
        )

    def _build_generator(self, temperature: float, role_hint: str) -> GeminiTextGenerator:
        # Construction is lazy; the SDK is configured on first ``complete``.
        return GeminiTextGenerator(
            api_key=self.config.gemini_api_key or "",
            model=self.config.model,
            timeout=self.config.generator_timeout,
            temperature=temperature,
            system_instruction=system_instruction(role_hint),
        )

    def analyze_clothing(self, image_b64: str) -> ClothingAnalysisResult:
        return self.clothing_analyst.analyze(image_b64)

    def recommend(
        self, items: Iterable[Union[ClothingItem, Dict[str, Any]]], occasion: Optional[str] = None
    ) -> List[OutfitRecommendation]:
        """Deterministic ranking only; never contacts the generator."""

        return self.outfit_stylist.recommend(items, occasion)

    def generate_outfits(
        self, items: Iterable[Union[ClothingItem, Dict[str, Any]]], occasion: Optional[str] = None
    ) -> OutfitGenerationResult:
        return self.outfit_stylist.generate(items, occasion)


__all__ = ["WardrobeStylistApp"]
