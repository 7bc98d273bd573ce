"""Recipe orchestrator: single entry point for recipe generation.

Flow for one generate() call:
1. Pre-flight checks (ingredients, dietary text, secondary credential)
2. Prompt construction in the requested language
3. Adapter selection from the Provider -> factory mapping
4. Adapter run (text, then optional image)
5. Error mapping into a localized RecipeGenerationError

Exactly one attempt is made per call. Retrying is the caller's decision.
"""

from typing import Callable, Optional

from pantry_chef.agents.repair import JsonRepairAgent
from pantry_chef.locales.translations import get_language_name, translate
from pantry_chef.models.models import CookingMode, GenerationRequest, Provider, Recipe
from pantry_chef.prompts.prompts import build_prompt
from pantry_chef.providers.base import ProviderAdapter
from pantry_chef.providers.gemini import GeminiAdapter
from pantry_chef.providers.openrouter import OpenRouterAdapter
from pantry_chef.utils.config import config
from pantry_chef.utils.errors import (
    ConfigurationError,
    ProviderError,
    RecipeGenerationError,
    RequestValidationError,
)
from pantry_chef.utils.logger import logger


AdapterFactory = Callable[["RecipeOrchestrator", GenerationRequest], ProviderAdapter]


def _build_primary(orchestrator: "RecipeOrchestrator", request: GenerationRequest) -> ProviderAdapter:
    return GeminiAdapter(api_key=orchestrator.primary_api_key)


def _build_secondary(orchestrator: "RecipeOrchestrator", request: GenerationRequest) -> ProviderAdapter:
    return OpenRouterAdapter(
        settings=request.secondary,
        repair_agent=JsonRepairAgent(api_key=orchestrator.repair_api_key),
        locale=request.language,
    )


DEFAULT_ADAPTER_FACTORIES: dict[Provider, AdapterFactory] = {
    Provider.PRIMARY: _build_primary,
    Provider.SECONDARY: _build_secondary,
}


def check_request(request: GenerationRequest) -> None:
    """Reject requests that can never succeed, before any network call.

    Raises:
        RequestValidationError: With the translation key of the user-facing message.
    """
    if not request.ingredients:
        raise RequestValidationError("errorAddOneIngredient", "No ingredients provided")

    if request.cooking_mode == CookingMode.DIETARY and not request.dietary_restrictions.strip():
        raise RequestValidationError("errorSpecifyDiet", "Dietary mode without restrictions")

    if request.provider == Provider.SECONDARY and not request.secondary.api_key:
        raise RequestValidationError("errorOpenRouterKey", "Secondary provider without API key")


def _is_credential_error(error: Exception) -> bool:
    if isinstance(error, ConfigurationError):
        return True
    if isinstance(error, ProviderError) and error.is_auth_error:
        return True
    return "API key" in str(error)


class RecipeOrchestrator:
    """Validate the request, pick the backend, run it and localize failures.

    Args:
        primary_api_key: Gemini credential for the primary provider.
        repair_api_key: Gemini credential for the JSON repair agent. Used even
            when the user picked the secondary provider.
        adapter_factories: Optional Provider -> factory overrides.
    """

    def __init__(
        self,
        primary_api_key: str = "",
        repair_api_key: str = "",
        adapter_factories: Optional[dict[Provider, AdapterFactory]] = None,
    ) -> None:
        self.primary_api_key = primary_api_key
        self.repair_api_key = repair_api_key
        self.adapter_factories = {**DEFAULT_ADAPTER_FACTORIES, **(adapter_factories or {})}

    def build_adapter(self, request: GenerationRequest) -> ProviderAdapter:
        factory = self.adapter_factories.get(request.provider)
        if factory is None:
            raise ConfigurationError(f"No adapter registered for provider '{request.provider.value}'")
        return factory(self, request)

    async def generate(self, request: GenerationRequest) -> Recipe:
        """Generate one recipe.

        Args:
            request: Validated generation request.

        Returns:
            Recipe, with image_base64 set only when an image was requested and produced.

        Raises:
            RecipeGenerationError: Localized, display-ready failure message.
        """
        locale = request.language or config.DEFAULT_LOCALE

        try:
            check_request(request)
        except RequestValidationError as e:
            logger.info(f"Request rejected before generation: {e.message}", extra={"locale": locale})
            raise RecipeGenerationError(translate(locale, e.translation_key), locale=locale) from e

        prompt = build_prompt(
            get_language_name(locale),
            request.ingredients,
            request.cooking_mode,
            request.dietary_restrictions,
        )

        try:
            adapter = self.build_adapter(request)
            logger.info(
                f"Generating recipe from {len(request.ingredients)} ingredients",
                extra={**adapter.log_extra, "locale": locale},
            )
            return await adapter.generate(prompt, with_image=request.generate_image)
        except Exception as e:
            raise self._localize_error(e, locale) from e

    @staticmethod
    def _localize_error(error: Exception, locale: str) -> RecipeGenerationError:
        logger.error(f"Error generating recipe: {error}", extra={"locale": locale})

        if _is_credential_error(error):
            return RecipeGenerationError(translate(locale, "errorApiKey"), locale=locale)

        message = str(error).strip()
        return RecipeGenerationError(message or translate(locale, "errorApi"), locale=locale)


def initialize_orchestrator(adapter_factories: Optional[dict[Provider, AdapterFactory]] = None) -> RecipeOrchestrator:
    """Build an orchestrator from environment configuration.

    GEMINI_API_KEY serves both the primary provider and the repair agent.
    """
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set: primary generation and JSON repair will be unavailable")

    return RecipeOrchestrator(
        primary_api_key=config.GEMINI_API_KEY,
        repair_api_key=config.GEMINI_API_KEY,
        adapter_factories=adapter_factories,
    )


async def generate_recipe(request: GenerationRequest) -> Recipe:
    """Convenience wrapper: one call on an environment-configured orchestrator."""
    return await initialize_orchestrator().generate(request)
