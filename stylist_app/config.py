"""Configuration helpers for the wardrobe stylist service."""

from dataclasses import dataclass
from pathlib import Path
import logging
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_OCCASION = "casual"

logger = logging.getLogger(__name__)


@dataclass
class StylistConfig:
    """Configuration values for the stylist service.

    The Gemini key is optional: without it the service runs purely on the
    deterministic color classifier and outfit engine.
    """

    gemini_api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    generator_timeout: float = 60.0
    retry_attempts: int = 3
    retry_base_delay: float = 1.0
    max_outfits: int = 20
    default_occasion: str = DEFAULT_OCCASION
    environment: str | None = None

    @property
    def generator_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    @classmethod
    def from_env(cls) -> "StylistConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default. Environment variables win over file values so secrets can be
        injected by the runtime.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLIST_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_key = get_value("gemini_api_key") or get_value("google_api_key")
        model = get_value("model", DEFAULT_GEMINI_MODEL)
        default_occasion = get_value("default_occasion", DEFAULT_OCCASION)

        return cls(
            gemini_api_key=api_key or None,
            model=str(model or DEFAULT_GEMINI_MODEL),
            generator_timeout=_as_float(get_value("generator_timeout"), 60.0),
            retry_attempts=max(1, _as_int(get_value("retry_attempts"), 3)),
            retry_base_delay=_as_float(get_value("retry_base_delay"), 1.0),
            max_outfits=max(0, _as_int(get_value("max_outfits"), 20)),
            default_occasion=str(default_occasion or DEFAULT_OCCASION).lower(),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


def _as_int(value: Optional[str], default: int) -> int:
    if value in (None, ""):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer config value %r", value)
        return default


def _as_float(value: Optional[str], default: float) -> float:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric config value %r", value)
        return default


__all__ = ["StylistConfig", "DEFAULT_GEMINI_MODEL"]
