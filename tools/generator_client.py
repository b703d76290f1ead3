"""Text generator client backed by Gemini through ``google-generativeai``."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional, Protocol

from google import generativeai as genai

from stylist_app.logging_config import get_logger, log_event
from tools.image_sampling import strip_data_url

logger = get_logger(__name__)

ANALYSIS_TEMPERATURE = 0.1
RECOMMENDATION_TEMPERATURE = 0.3
MAX_OUTPUT_TOKENS = 4096


class GenerationError(RuntimeError):
    """Raised when the generator returns no usable text or the call fails."""


class TextGenerator(Protocol):
    """Anything that turns a prompt (and optionally an image) into text."""

    def complete(self, prompt: str, image_b64: Optional[str] = None) -> str:
        ...


class GeminiTextGenerator:
    """Explicitly initialised Gemini client; no module-level model instance."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: float = 60.0,
        temperature: float = RECOMMENDATION_TEMPERATURE,
        system_instruction: Optional[str] = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model
        self.timeout = timeout
        self.temperature = temperature
        self.system_instruction = system_instruction
        self._model: Any = None

    @property
    def initialized(self) -> bool:
        return self._model is not None

    def initialize(self) -> "GeminiTextGenerator":
        if not self.api_key:
            raise GenerationError("Gemini API key is not configured")
        genai.configure(api_key=self.api_key)
        self._model = genai.GenerativeModel(
            self.model_name,
            generation_config={
                "temperature": self.temperature,
                "max_output_tokens": MAX_OUTPUT_TOKENS,
            },
            system_instruction=self.system_instruction,
        )
        log_event(
            logger,
            logging.INFO,
            "generator_initialized",
            model=self.model_name,
            temperature=self.temperature,
        )
        return self

    def _parts(self, prompt: str, image_b64: Optional[str]) -> List[Any]:
        parts: List[Any] = [prompt]
        if image_b64:
            try:
                data = base64.b64decode(strip_data_url(image_b64))
            except (binascii.Error, ValueError) as exc:
                raise GenerationError(f"image payload is not valid base64: {exc}") from exc
            parts.append({"mime_type": "image/jpeg", "data": data})
        return parts

    def complete(self, prompt: str, image_b64: Optional[str] = None) -> str:
        if not self.initialized:
            self.initialize()
        request_options: Dict[str, Any] = {"timeout": self.timeout}
        try:
            response = self._model.generate_content(
                self._parts(prompt, image_b64), request_options=request_options
            )
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(f"Gemini request failed: {exc}") from exc

        try:
            text = response.text
        except ValueError as exc:
            # Raised by the SDK when the candidate was blocked or has no parts.
            raise GenerationError(f"Gemini returned no text: {exc}") from exc
        if not text or not text.strip():
            raise GenerationError("Gemini returned an empty response")
        log_event(logger, logging.DEBUG, "generator_response_received", chars=len(text))
        return text


__all__ = [
    "GenerationError",
    "TextGenerator",
    "GeminiTextGenerator",
    "ANALYSIS_TEMPERATURE",
    "RECOMMENDATION_TEMPERATURE",
]
