"""Outfit stylist agent: generator-proposed outfits vetted against the wardrobe.

The deterministic engine in ``logic.outfit_builder`` is always available.
When a text generator is configured its proposals are extracted, validated and
checked against the wardrobe; anything it cannot deliver falls back to the
engine's ranking.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from logic.json_extraction import extract_json_with_strategy
from logic.outfit_builder import MAX_OUTFITS, generate_outfits, wardrobe_partitions
from logic.prompts import outfit_prompt
from logic.validation import OutfitRecommendation, validate_recommendations
from models.clothing_item import ClothingItem, coerce_items
from models.taxonomy import resolve_occasion
from stylist_app.logging_config import get_logger, log_event, operation_context
from tools.generator_client import GenerationError, TextGenerator
from tools.observability import instrument_operation
from tools.retry import RetryError, retry_with_backoff

logger = get_logger(__name__)

SOURCE_GENERATOR = "generator"
SOURCE_LOCAL = "local"
SOURCE_FALLBACK = "fallback"

RawItems = Iterable[Union[ClothingItem, Dict[str, Any]]]


@dataclass
class OutfitGenerationResult:
    outfits: List[OutfitRecommendation] = field(default_factory=list)
    source: str = SOURCE_LOCAL
    discarded: int = 0

    @property
    def fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK

    def to_payload(self) -> List[Dict[str, Any]]:
        return [outfit.to_payload() for outfit in self.outfits]


class OutfitStylistAgent:
    """Builds ranked outfits for a wardrobe and occasion."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        max_outfits: int = MAX_OUTFITS,
        default_occasion: str = "casual",
        retry_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ) -> None:
        self.generator = generator
        self.max_outfits = max_outfits
        self.default_occasion = default_occasion
        self.retry_attempts = retry_attempts
        self.retry_base_delay = retry_base_delay

    def _occasion(self, occasion: Optional[str]) -> str:
        return resolve_occasion(occasion, self.default_occasion)

    @instrument_operation("stylist.recommend")
    def recommend(self, items: RawItems, occasion: Optional[str] = None) -> List[OutfitRecommendation]:
        """Rank outfits with the local engine only."""

        wardrobe = coerce_items(items)
        return generate_outfits(wardrobe, self._occasion(occasion), limit=self.max_outfits)

    @instrument_operation("stylist.generate")
    def generate(self, items: RawItems, occasion: Optional[str] = None) -> OutfitGenerationResult:
        """Ask the generator for outfits, falling back to the local engine."""

        wardrobe = coerce_items(items)
        occasion = self._occasion(occasion)
        with operation_context("agent:stylist.generate", occasion=occasion) as correlation_id:
            log_event(
                logger,
                logging.INFO,
                "agent_call_started",
                agent="stylist",
                method="generate",
                correlation_id=correlation_id,
                occasion=occasion,
                item_count=len(wardrobe),
            )
            partitions = wardrobe_partitions(wardrobe)
            if not partitions["top"] or not partitions["bottom"]:
                # Nothing the generator proposes could pass vetting.
                return OutfitGenerationResult(outfits=[], source=SOURCE_LOCAL)

            if self.generator is None:
                return OutfitGenerationResult(outfits=self._local(wardrobe, occasion), source=SOURCE_LOCAL)

            try:
                raw = retry_with_backoff(
                    lambda: self.generator.complete(outfit_prompt(wardrobe, occasion, self.max_outfits)),
                    attempts=self.retry_attempts,
                    base_delay=self.retry_base_delay,
                    retry_on=(GenerationError,),
                )
            except RetryError as exc:
                log_event(
                    logger,
                    logging.WARNING,
                    "outfit_generation_failed",
                    agent="stylist",
                    correlation_id=correlation_id,
                    error=str(exc.last_error),
                )
                return OutfitGenerationResult(outfits=self._local(wardrobe, occasion), source=SOURCE_FALLBACK)

            extraction = extract_json_with_strategy(raw, "array")
            proposals = validate_recommendations(extraction.value, occasion)
            valid = _vet(proposals, partitions)
            discarded = len(proposals) - len(valid)
            accepted = valid[: self.max_outfits]
            log_event(
                logger,
                logging.INFO,
                "outfit_proposals_vetted",
                agent="stylist",
                correlation_id=correlation_id,
                strategy=extraction.strategy,
                proposed=len(proposals),
                accepted=len(accepted),
            )
            if not accepted:
                return OutfitGenerationResult(
                    outfits=self._local(wardrobe, occasion), source=SOURCE_FALLBACK, discarded=len(proposals)
                )
            return OutfitGenerationResult(outfits=accepted, source=SOURCE_GENERATOR, discarded=discarded)

    def _local(self, wardrobe: List[ClothingItem], occasion: str) -> List[OutfitRecommendation]:
        return generate_outfits(wardrobe, occasion, limit=self.max_outfits)


def _fresh_outfit_id(position: int, taken: Set[str]) -> str:
    while f"outfit_{position}" in taken:
        position += 1
    return f"outfit_{position}"


def _vet(proposals: List[OutfitRecommendation], partitions: Dict[str, Set[str]]) -> List[OutfitRecommendation]:
    """Keep proposals whose top and bottom exist, blanking unknown shoes or accessories.

    A repeated ``outfitId`` is replaced with the next free ``outfit_<n>``.
    """

    vetted: List[OutfitRecommendation] = []
    taken: Set[str] = set()
    for outfit in proposals:
        if outfit.top not in partitions["top"] or outfit.bottom not in partitions["bottom"]:
            continue
        update: Dict[str, str] = {}
        for slot in ("shoe", "accessory"):
            item_id = getattr(outfit, slot)
            if item_id and item_id not in partitions[slot]:
                update[slot] = ""
        if outfit.outfit_id in taken:
            update["outfit_id"] = _fresh_outfit_id(len(vetted) + 1, taken)
        if update:
            logger.info("Adjusted proposed outfit %s: %s", outfit.outfit_id, sorted(update))
            outfit = outfit.model_copy(update=update)
        taken.add(outfit.outfit_id)
        vetted.append(outfit)
    return vetted


__all__ = [
    "OutfitStylistAgent",
    "OutfitGenerationResult",
    "SOURCE_GENERATOR",
    "SOURCE_LOCAL",
    "SOURCE_FALLBACK",
]
