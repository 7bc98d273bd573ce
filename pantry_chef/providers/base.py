"""Provider adapter interface.

Each backend (Gemini, OpenRouter) wraps its own request/response protocol
behind the same two operations. generate() drives them in order: text first,
then the image as a best-effort tail step that can never fail the request.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pantry_chef.models.models import Recipe
from pantry_chef.utils.logger import logger


class ProviderAdapter(ABC):
    """Uniform interface over one generation backend."""

    name: str = "provider"

    @property
    def log_extra(self) -> dict:
        return {"provider": self.name}

    @abstractmethod
    async def generate_text(self, prompt: str) -> Recipe:
        """Generate a validated Recipe from the prompt.

        Raises:
            ConfigurationError: Credential missing.
            ProviderError: Backend call failed.
            UnparsableResponseError: Output could not be turned into a Recipe.
        """

    @abstractmethod
    async def generate_image(self, title: str, description: str) -> Optional[str]:
        """Generate an illustrative image. Returns base64 data or None."""

    async def generate(self, prompt: str, with_image: bool = False) -> Recipe:
        """Text generation, then (optionally) image generation.

        Image failures are logged and absorbed; the text-only recipe is returned.
        """
        recipe = await self.generate_text(prompt)
        logger.info(f"Recipe generated: {recipe.title}", extra=self.log_extra)

        if not with_image:
            return recipe

        try:
            image_base64 = await self.generate_image(recipe.title, recipe.description)
        except Exception as e:
            logger.warning(
                f"Image backend failed, returning recipe without image: {e}",
                extra=self.log_extra,
            )
            return recipe

        if not image_base64:
            logger.warning("Image model produced no usable image, returning recipe without image", extra=self.log_extra)
            return recipe

        return recipe.with_image(image_base64)
