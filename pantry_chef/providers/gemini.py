"""Primary provider: Gemini structured output + Imagen.

Gemini enforces RECIPE_SCHEMA server-side, so its payload is trusted to be
recipe JSON. Malformed output is a backend error here, not a data-quality
problem, and is never sent to the repair agent.

The google-genai client is synchronous; calls run in a worker thread via
asyncio.to_thread so the event loop is never blocked.
"""

import asyncio
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from pantry_chef.models.models import Recipe
from pantry_chef.models.schema import RECIPE_SCHEMA
from pantry_chef.models.validation import RecipeInvalid, parse_recipe_json, validate_recipe
from pantry_chef.prompts.prompts import build_image_prompt
from pantry_chef.providers.base import ProviderAdapter
from pantry_chef.providers.images import prepare_image_payload
from pantry_chef.utils.config import config
from pantry_chef.utils.errors import ConfigurationError, ProviderError
from pantry_chef.utils.logger import logger


def provider_error_from_api(error: genai_errors.APIError, provider: str = "gemini") -> ProviderError:
    """Convert a google-genai APIError into a ProviderError with the backend message."""
    message = getattr(error, "message", None) or str(error)
    return ProviderError(message, provider=provider, status=getattr(error, "code", None))


class GeminiAdapter(ProviderAdapter):
    """Primary adapter: schema-enforced text generation and Imagen images."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        image_model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or config.GEMINI_MODEL
        self.image_model = image_model or config.GEMINI_IMAGE_MODEL
        self.temperature = config.TEMPERATURE if temperature is None else temperature

    @property
    def log_extra(self) -> dict:
        return {"provider": self.name, "model": self.model}

    def _client(self) -> genai.Client:
        if not self.api_key:
            raise ConfigurationError("Gemini API key is not configured.")
        return genai.Client(api_key=self.api_key)

    async def generate_text(self, prompt: str) -> Recipe:
        """Structured generation with RECIPE_SCHEMA attached.

        Raises:
            ConfigurationError: GEMINI_API_KEY missing.
            ProviderError: API failure or output that does not match the schema.
        """
        client = self._client()
        logger.debug(f"Requesting recipe from {self.model} (temperature={self.temperature})", extra=self.log_extra)

        try:
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RECIPE_SCHEMA,
                    temperature=self.temperature,
                ),
            )
        except genai_errors.APIError as e:
            raise provider_error_from_api(e, self.name) from e
        except Exception as e:
            raise ProviderError(str(e), provider=self.name) from e

        payload = parse_recipe_json(response.text)
        result = validate_recipe(payload)
        if isinstance(result, RecipeInvalid):
            logger.error(
                f"Gemini returned a recipe that does not match the schema: {result.missing_fields} {result.defects}",
                extra=self.log_extra,
            )
            raise ProviderError("Gemini returned malformed recipe data.", provider=self.name)

        return result.recipe

    async def generate_image(self, title: str, description: str) -> Optional[str]:
        """One 16:9 JPEG from Imagen. Returns None when no image bytes come back."""
        client = self._client()
        response = await asyncio.to_thread(
            client.models.generate_images,
            model=self.image_model,
            prompt=build_image_prompt(title, description),
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/jpeg",
                aspect_ratio="16:9",
            ),
        )

        generated = getattr(response, "generated_images", None) or []
        image = generated[0].image if generated else None
        image_bytes = getattr(image, "image_bytes", None) if image else None
        if not image_bytes:
            logger.warning("Imagen response contained no image bytes", extra={"provider": self.name, "model": self.image_model})
            return None

        return prepare_image_payload(image_bytes)
