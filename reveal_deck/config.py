"""Explicit configuration for :class:`reveal_deck.service.DeckService`."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from LLM_API.providers.gemini import DEFAULT_IMAGE_MODEL

from .models import AvailableModel

LOGGER = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True)
class DeckServiceConfig:
    """Immutable settings, built once per process."""

    api_key: Optional[str] = None
    default_model: AvailableModel = AvailableModel.GEMINI_2_5_FLASH
    image_model: str = DEFAULT_IMAGE_MODEL
    image_mime_type: str = "image/jpeg"
    max_image_workers: int = 4

    def __post_init__(self) -> None:
        if self.max_image_workers < 1:
            raise ValueError("max_image_workers must be at least 1")

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "DeckServiceConfig":
        """Read settings from the environment, loading ``.env`` first."""

        load_dotenv(dotenv_path=env_file)
        api_key = next(
            (os.getenv(name) for name in API_KEY_ENV_VARS if os.getenv(name)),
            None,
        )
        default_model = _default_model_from_env()
        return cls(
            api_key=api_key,
            default_model=default_model,
            image_model=os.getenv("DECK_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        )


def _default_model_from_env() -> AvailableModel:
    model_name = os.getenv("DECK_DEFAULT_MODEL")
    if not model_name:
        return AvailableModel.GEMINI_2_5_FLASH
    try:
        return AvailableModel(model_name.strip())
    except ValueError:
        LOGGER.warning(
            "DECK_DEFAULT_MODEL=%r is not a known model; using %s",
            model_name,
            AvailableModel.GEMINI_2_5_FLASH.value,
        )
        return AvailableModel.GEMINI_2_5_FLASH
