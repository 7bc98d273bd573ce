"""JSON repair agent.

Fallback stage for free-form providers: send the raw model output to a
trusted structured-output backend (Gemini with RECIPE_SCHEMA attached, near
zero temperature) and ask it to re-emit the text as recipe JSON.

Repair is best-effort. repair() returns None on every failure, including a
missing credential, and the caller decides whether that becomes an error.
"""

import asyncio
from typing import Optional

from google import genai
from google.genai import types

from pantry_chef.models.models import Recipe
from pantry_chef.models.schema import RECIPE_SCHEMA
from pantry_chef.models.validation import RecipeInvalid, parse_recipe_json, validate_recipe
from pantry_chef.prompts.prompts import build_repair_prompt
from pantry_chef.utils.config import config
from pantry_chef.utils.errors import safe_execute_async
from pantry_chef.utils.logger import logger


class JsonRepairAgent:
    """Coerce unstructured recipe text into a Recipe via the trusted backend.

    Args:
        api_key: Trusted repair backend credential (Gemini). Independent of the
            provider the user selected for generation. Default: GEMINI_API_KEY.
        model: Repair model id (default: REPAIR_MODEL).
        temperature: Sampling temperature (default: REPAIR_TEMPERATURE, 0.1).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        self.api_key = config.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or config.REPAIR_MODEL
        self.temperature = config.REPAIR_TEMPERATURE if temperature is None else temperature

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    async def repair(self, raw_text: Optional[str], language_name: str) -> Optional[Recipe]:
        """Re-emit raw_text as a validated Recipe.

        Args:
            raw_text: Unparsable or incomplete model output.
            language_name: Display name of the recipe language.

        Returns:
            Recipe on success, None if repair is unavailable or fails.
        """
        if not self.available:
            logger.warning("Gemini API key not available for JSON repair attempt.")
            return None

        if not isinstance(raw_text, str) or not raw_text.strip():
            logger.warning("Nothing to repair: model returned empty content")
            return None

        extra = {"provider": "gemini", "model": self.model}
        logger.info("Attempting JSON repair of free-form recipe output", extra=extra)

        async def _call_repair():
            client = genai.Client(api_key=self.api_key)
            response = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=build_repair_prompt(raw_text, language_name),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RECIPE_SCHEMA,
                    temperature=self.temperature,
                ),
            )
            return response.text

        repaired_text = await safe_execute_async(
            _call_repair(),
            "JSON repair attempt with Gemini failed",
            log_level="error",
            default_return=None,
        )
        if not repaired_text:
            return None

        result = validate_recipe(parse_recipe_json(repaired_text))
        if isinstance(result, RecipeInvalid):
            logger.warning(f"Repaired output is still not a valid recipe: missing {result.missing_fields}", extra=extra)
            return None

        logger.info("Successfully repaired recipe JSON", extra=extra)
        return result.recipe
