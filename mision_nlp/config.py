# mision_nlp/config.py

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# --- Configuration ---
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-4.0-generate-001"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    api_base: str = DEFAULT_API_BASE
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


def load_settings() -> Settings:
    """Reads settings from the environment (and a .env file, if present)."""
    # API_KEY is the name the browser build used; GEMINI_API_KEY wins when both exist.
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    return Settings(
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        image_model=os.getenv("GEMINI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
        api_base=os.getenv("GEMINI_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    """Configures root logging once; later calls are no-ops."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
