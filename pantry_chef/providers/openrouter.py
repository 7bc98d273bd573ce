"""Secondary provider: OpenRouter chat completions and image generation.

OpenRouter fronts many third-party models that do not reliably honor the
requested JSON format. Text output therefore goes through two tiers:

1. Lenient parse + schema validation of choices[0].message.content
2. If that fails (unparsable, or title/ingredientsList/instructions missing),
   one call to the JSON repair agent

If repair also fails the request fails with a localized message naming the
model. Image generation is best-effort: generate_image() returns None instead of raising.
"""

import asyncio
import json
from typing import Any, Optional

import aiohttp

from pantry_chef.agents.repair import JsonRepairAgent
from pantry_chef.locales.translations import get_language_name, translate
from pantry_chef.models.models import Recipe, SecondaryProviderSettings
from pantry_chef.models.validation import RecipeInvalid, parse_recipe_json, validate_recipe
from pantry_chef.prompts.prompts import build_image_prompt, build_json_instructions
from pantry_chef.providers.base import ProviderAdapter
from pantry_chef.providers.images import prepare_image_payload
from pantry_chef.utils.config import config
from pantry_chef.utils.errors import ProviderError, UnparsableResponseError, safe_execute_async, safe_execute_sync
from pantry_chef.utils.logger import logger


# Roughly 16:9, accepted by most OpenRouter image models
IMAGE_SIZE = "1024x576"


class OpenRouterAdapter(ProviderAdapter):
    """Secondary adapter over the OpenRouter HTTP API.

    Args:
        settings: User credentials, models and sampling parameters.
        repair_agent: Fallback used when the model output is not a valid recipe.
        locale: Request locale, for the repair language and error messages.
        base_url: API root (default: OPENROUTER_BASE_URL).
        temperature: Sampling temperature (default: TEMPERATURE, 0.7).
    """

    name = "openrouter"

    def __init__(
        self,
        settings: SecondaryProviderSettings,
        repair_agent: JsonRepairAgent,
        locale: str = "en",
        base_url: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        self.settings = settings
        self.repair_agent = repair_agent
        self.locale = locale
        self.base_url = (base_url or config.OPENROUTER_BASE_URL).rstrip("/")
        self.temperature = config.TEMPERATURE if temperature is None else temperature
        self.model = settings.text_model or config.OPENROUTER_DEFAULT_MODEL
        self.image_model = settings.image_model or config.OPENROUTER_DEFAULT_IMAGE_MODEL

    @property
    def log_extra(self) -> dict:
        return {"provider": self.name, "model": self.model}

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": config.APP_REFERER,
            "X-Title": config.APP_TITLE,
        }

    def build_text_payload(self, prompt: str) -> dict[str, Any]:
        """Chat-completion body.

        top_p and presence_penalty are only sent when they differ from the
        defaults (1.0 and 0.0): some models reject these fields outright.
        """
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt + build_json_instructions()}],
            "response_format": {"type": "json_object"},
            "temperature": self.temperature,
        }
        if self.settings.top_p != 1.0:
            payload["top_p"] = self.settings.top_p
        if self.settings.presence_penalty != 0.0:
            payload["presence_penalty"] = self.settings.presence_penalty
        return payload

    def build_image_payload(self, title: str, description: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.image_model,
            "prompt": build_image_prompt(title, description),
            "n": 1,
            "size": IMAGE_SIZE,
            "response_format": "b64_json",
        }
        negative_prompt = self.settings.negative_prompt.strip()
        if negative_prompt:
            payload["negative_prompt"] = negative_prompt
        return payload

    async def _post_json(self, path: str, payload: dict, timeout_seconds: int) -> tuple[int, str, Any]:
        """POST a JSON body and return (status, reason, parsed body or None)."""
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, headers=self._headers(), json=payload) as response:
                body_text = await response.text()
                body = safe_execute_sync(
                    lambda: json.loads(body_text) if body_text else None,
                    f"Parse OpenRouter response body ({response.status})",
                    log_level="debug",
                    default_return=None,
                )
                return response.status, response.reason or "", body

    @staticmethod
    def _error_message(body: Any, fallback: str) -> str:
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            return body["error"].get("message") or fallback
        return fallback

    async def _request_completion(self, prompt: str) -> Optional[str]:
        """Call chat/completions and return choices[0].message.content.

        Raises:
            ProviderError: Transport failure, non-2xx status, or an error body.
        """
        try:
            status, reason, body = await self._post_json(
                "/chat/completions", self.build_text_payload(prompt), config.REQUEST_TIMEOUT_SECONDS
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ProviderError(f"OpenRouter request failed: {str(e) or type(e).__name__}", provider=self.name) from e

        if not 200 <= status < 300:
            message = self._error_message(body, reason or f"HTTP {status}")
            raise ProviderError(f"OpenRouter API error: {message}", provider=self.name, status=status)

        # OpenRouter reports some upstream failures as 200 with an error body
        if isinstance(body, dict) and "error" in body and not body.get("choices"):
            message = self._error_message(body, "upstream provider error")
            code = body["error"].get("code") if isinstance(body["error"], dict) else None
            raise ProviderError(
                f"OpenRouter API error: {message}",
                provider=self.name,
                status=code if isinstance(code, int) else None,
            )

        choices = body.get("choices") if isinstance(body, dict) else None
        if not choices:
            return None
        message = choices[0].get("message") or {}
        content = message.get("content")
        if isinstance(content, list):
            # Some models answer with content parts instead of a plain string
            parts = [part.get("text") for part in content if isinstance(part, dict)]
            return "".join(text for text in parts if isinstance(text, str)) or None
        return content if isinstance(content, str) else None

    async def generate_text(self, prompt: str) -> Recipe:
        """Generate, validate and (if needed) repair a recipe.

        Raises:
            ProviderError: The API call failed.
            UnparsableResponseError: Output unusable even after repair.
        """
        logger.debug(f"Requesting recipe from {self.model}", extra=self.log_extra)
        content = await self._request_completion(prompt)

        result = validate_recipe(parse_recipe_json(content))
        if not isinstance(result, RecipeInvalid):
            return result.recipe

        logger.warning(
            f"Initial JSON parse for model '{self.model}' failed (missing: {result.missing_fields}). "
            "Attempting to repair the response.",
            extra=self.log_extra,
        )
        repaired = await self.repair_agent.repair(content, get_language_name(self.locale))
        if repaired is None:
            logger.error(
                f"Failed to parse JSON from OpenRouter even after repair attempt: {(content or '')[:500]!r}",
                extra=self.log_extra,
            )
            raise UnparsableResponseError(
                translate(self.locale, "errorOpenRouterModelResponse", model=self.model),
                model=self.model,
            )

        return repaired

    async def generate_image(self, title: str, description: str) -> Optional[str]:
        """One image from the configured image model, or None on any unsuccessful response."""
        extra = {"provider": self.name, "model": self.image_model}
        response = await safe_execute_async(
            self._post_json(
                "/images/generations", self.build_image_payload(title, description), config.IMAGE_TIMEOUT_SECONDS
            ),
            f"OpenRouter image request to {self.image_model} failed",
            default_return=None,
        )
        if response is None:
            return None

        status, reason, body = response
        if not 200 <= status < 300:
            logger.warning(
                f"Image generation via OpenRouter failed: {self._error_message(body, reason or f'HTTP {status}')}",
                extra=extra,
            )
            return None

        data = body.get("data") if isinstance(body, dict) else None
        image_base64 = data[0].get("b64_json") if data and isinstance(data[0], dict) else None
        if not image_base64:
            logger.warning("Image data from OpenRouter is missing", extra=extra)
            return None

        return prepare_image_payload(image_base64)
