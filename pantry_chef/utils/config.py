"""Configuration management for Pantry Chef.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: used by the primary provider AND the JSON repair agent.
        # Not required at startup - a missing key is reported per call.
        # API_KEY is accepted for compatibility with the browser build.
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
        # Primary text model (structured output with response schema)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Primary image model (Imagen)
        self.GEMINI_IMAGE_MODEL: str = os.getenv("GEMINI_IMAGE_MODEL", "imagen-4.0-generate-001")
        # Repair Model: trusted structured-output model used to coerce malformed
        # secondary-provider output into recipe JSON. Defaults to GEMINI_MODEL.
        self.REPAIR_MODEL: str = os.getenv("REPAIR_MODEL", self.GEMINI_MODEL)

        # OpenRouter (secondary provider). The API key itself is user-supplied per request.
        self.OPENROUTER_BASE_URL: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1").rstrip("/")
        # Fallback models when the request leaves the model fields empty
        self.OPENROUTER_DEFAULT_MODEL: str = os.getenv("OPENROUTER_DEFAULT_MODEL", "google/gemini-flash-1.5")
        self.OPENROUTER_DEFAULT_IMAGE_MODEL: str = os.getenv("OPENROUTER_DEFAULT_IMAGE_MODEL", "stabilityai/sdxl")
        # Attribution headers recommended by OpenRouter
        self.APP_REFERER: str = os.getenv("APP_REFERER", "https://pantrychef.ai")
        self.APP_TITLE: str = os.getenv("APP_TITLE", "Pantry Chef AI")

        # LLM Model Parameters
        # Temperature for recipe generation: 0.7 keeps recipes creative but coherent
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Temperature for JSON repair: near-deterministic
        self.REPAIR_TEMPERATURE: float = float(os.getenv("REPAIR_TEMPERATURE", "0.1"))

        # HTTP timeouts (seconds) for the secondary provider
        self.REQUEST_TIMEOUT_SECONDS: int = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))
        self.IMAGE_TIMEOUT_SECONDS: int = int(os.getenv("IMAGE_TIMEOUT_SECONDS", "90"))

        # Image Compression: recompress generated images before returning them
        # (saved recipes carry the image inline, so smaller is better)
        self.COMPRESS_IMG: bool = _env_bool("COMPRESS_IMG", "true")
        # Only compress images larger than this (in KB)
        self.COMPRESS_IMG_THRESHOLD_KB: int = int(os.getenv("COMPRESS_IMG_THRESHOLD_KB", "300"))
        # Maximum width in pixels after compression
        self.IMAGE_MAX_WIDTH: int = int(os.getenv("IMAGE_MAX_WIDTH", "1024"))

        # Locale used when a request does not name one
        self.DEFAULT_LOCALE: str = os.getenv("DEFAULT_LOCALE", "en")

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range or malformed.
        """
        if not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}")
        if not (0.0 <= self.REPAIR_TEMPERATURE <= 1.0):
            raise ValueError(
                f"REPAIR_TEMPERATURE must be between 0.0 and 1.0, got: {self.REPAIR_TEMPERATURE}"
            )
        if not self.OPENROUTER_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(f"OPENROUTER_BASE_URL must be an http(s) URL, got: {self.OPENROUTER_BASE_URL}")
        if self.REQUEST_TIMEOUT_SECONDS < 1:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be at least 1 second, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if self.IMAGE_TIMEOUT_SECONDS < 1:
            raise ValueError(
                f"IMAGE_TIMEOUT_SECONDS must be at least 1 second, got: {self.IMAGE_TIMEOUT_SECONDS}"
            )
        if self.IMAGE_MAX_WIDTH < 64:
            raise ValueError(f"IMAGE_MAX_WIDTH must be at least 64 pixels, got: {self.IMAGE_MAX_WIDTH}")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
