"""Clothing analyst agent: classify a garment photo, with a local color fallback."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from logic.color_classifier import (
    DEFAULT_MATERIAL_ANALYSIS,
    analyze_image_material,
    classify_image,
)
from logic.json_extraction import extract_json_with_strategy
from logic.prompts import clothing_analysis_prompt
from logic.validation import ClothingAnalysis, validate_clothing_analysis
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.generator_client import GenerationError, TextGenerator
from tools.observability import instrument_operation
from tools.retry import RetryError, retry_with_backoff

logger = get_logger(__name__)

SOURCE_GENERATOR = "generator"
SOURCE_FALLBACK = "fallback"


@dataclass
class ClothingAnalysisResult:
    analysis: ClothingAnalysis
    source: str

    @property
    def fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


class ClothingAnalystAgent:
    """Asks the text generator to classify a photo; classifies locally when it cannot."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        retry_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ) -> None:
        self.generator = generator
        self.retry_attempts = retry_attempts
        self.retry_base_delay = retry_base_delay

    @instrument_operation("analyst.analyze")
    def analyze(self, image_b64: str) -> ClothingAnalysisResult:
        with operation_context("agent:analyst.analyze") as correlation_id:
            if self.generator is None:
                log_event(
                    logger,
                    logging.INFO,
                    "analysis_generator_unavailable",
                    agent="analyst",
                    correlation_id=correlation_id,
                )
                return self._classify_locally(image_b64)

            try:
                raw = retry_with_backoff(
                    lambda: self.generator.complete(clothing_analysis_prompt(), image_b64),
                    attempts=self.retry_attempts,
                    base_delay=self.retry_base_delay,
                    retry_on=(GenerationError,),
                )
            except RetryError as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "analysis_generation_failed",
                    agent="analyst",
                    correlation_id=correlation_id,
                    error=str(exc.last_error),
                )
                return self._classify_locally(image_b64)

            extraction = extract_json_with_strategy(raw, "object")
            if extraction.used_fallback:
                log_event(
                    logger,
                    logging.WARNING,
                    "analysis_unparseable",
                    agent="analyst",
                    correlation_id=correlation_id,
                )
                return self._classify_locally(image_b64)

            analysis = validate_clothing_analysis(extraction.value)
            log_event(
                logger,
                logging.INFO,
                "analysis_completed",
                agent="analyst",
                correlation_id=correlation_id,
                strategy=extraction.strategy,
                category=analysis.category,
                color=analysis.color,
            )
            return ClothingAnalysisResult(analysis=analysis, source=SOURCE_GENERATOR)

    def _classify_locally(self, image_b64: str) -> ClothingAnalysisResult:
        colors = classify_image(image_b64)
        material = analyze_image_material(image_b64)
        material_name = (
            colors.material_guess if material is DEFAULT_MATERIAL_ANALYSIS else material.material
        )
        analysis = ClothingAnalysis(
            category="top",
            color=colors.dominant_color,
            material=material_name,
            style="casual",
            confidence=max(colors.confidence, material.confidence),
        )
        return ClothingAnalysisResult(analysis=analysis, source=SOURCE_FALLBACK)


__all__ = ["ClothingAnalystAgent", "ClothingAnalysisResult", "SOURCE_GENERATOR", "SOURCE_FALLBACK"]
