"""Data models for recipe generation.

Defines Pydantic models for generation requests and the normalized Recipe.
All models use Pydantic v2. Recipe fields serialize with camelCase aliases,
the same shape the browser app stores and the models are asked to emit.
"""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CookingMode(str, Enum):
    REGULAR = "regular"
    DIETARY = "dietary"


class Provider(str, Enum):
    """Generation backend selected by the user.

    PRIMARY is Gemini (schema-enforced output), SECONDARY is OpenRouter (free-form).
    """

    PRIMARY = "primary"
    SECONDARY = "secondary"

    @classmethod
    def _missing_(cls, value):
        # Settings saved by the browser build use backend names
        aliases = {"gemini": cls.PRIMARY, "openrouter": cls.SECONDARY}
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None


class SecondaryProviderSettings(BaseModel):
    """User-supplied OpenRouter credentials, models and sampling parameters.

    Empty model names mean "use the configured default".
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    api_key: Annotated[str, Field("", description="OpenRouter API key (required for the secondary provider)")]
    text_model: Annotated[str, Field("", description="OpenRouter text model id, e.g. 'google/gemini-flash-1.5'")]
    image_model: Annotated[str, Field("", description="OpenRouter image model id, e.g. 'stabilityai/sdxl'")]
    top_p: Annotated[float, Field(1.0, ge=0.0, le=1.0, description="Nucleus-sampling threshold (0.0-1.0)")]
    presence_penalty: Annotated[
        float, Field(0.0, ge=-2.0, le=2.0, description="Presence penalty (-2.0 to 2.0)")
    ]
    negative_prompt: Annotated[str, Field("", description="Things the generated image should avoid")]


class GenerationRequest(BaseModel):
    """Input to one orchestrator call.

    Ingredient order is preserved (it is echoed into the prompt). Emptiness,
    the dietary text and the secondary credential are checked by the
    orchestrator so the caller gets a localized message instead of a
    ValidationError.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    ingredients: Annotated[List[str], Field(default_factory=list, description="Pantry ingredients, in insertion order")]
    language: Annotated[str, Field("en", description="Locale code of the recipe language")]
    cooking_mode: Annotated[CookingMode, Field(CookingMode.REGULAR)]
    dietary_restrictions: Annotated[str, Field("", description="Free-text restrictions for dietary mode")]
    provider: Annotated[Provider, Field(Provider.PRIMARY)]
    secondary: Annotated[SecondaryProviderSettings, Field(default_factory=SecondaryProviderSettings)]
    generate_image: Annotated[bool, Field(False, description="Also generate an illustrative image")]

    @field_validator("ingredients", mode="before")
    @classmethod
    def normalize_ingredients(cls, ingredients) -> list[str]:
        """Strip names, drop blanks and duplicates while preserving order."""
        if ingredients is None:
            return []
        if isinstance(ingredients, str):
            ingredients = ingredients.split(",")
        cleaned = [str(item).strip() for item in ingredients if item is not None]
        return list(dict.fromkeys(item for item in cleaned if item))


class RecipeIngredient(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    quantity: str = ""
    name: str = ""


class RecipeVariation(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    description: str = ""


class Recipe(BaseModel):
    """Normalized recipe returned by the orchestrator.

    title, ingredients_list and instructions are the viability minimum and can
    never be empty. Every other field is a free-form label and defaults to "".
    saved_at is only set when a recipe is saved to a cookbook.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, coerce_numbers_to_str=True)

    title: Annotated[str, Field(min_length=1, description="Creative and appealing name of the recipe")]
    description: str = ""
    prep_time: Annotated[str, Field("", alias="prepTime")]
    cook_time: Annotated[str, Field("", alias="cookTime")]
    difficulty: str = ""
    yield_: Annotated[str, Field("", alias="yield")]
    ingredients_list: Annotated[List[RecipeIngredient], Field(min_length=1, alias="ingredientsList")]
    instructions: Annotated[List[str], Field(min_length=1)]
    calories: str = ""
    protein: str = ""
    carbs: str = ""
    fat: str = ""
    variations: Annotated[List[RecipeVariation], Field(default_factory=list)]
    image_base64: Annotated[Optional[str], Field(None, alias="imageBase64")]
    saved_at: Annotated[Optional[str], Field(None, alias="savedAt")]

    @field_validator("instructions", mode="before")
    @classmethod
    def drop_blank_steps(cls, steps) -> list:
        """Steps are stripped; blank steps are removed before the non-empty check."""
        if not isinstance(steps, list):
            return steps
        return [step.strip() for step in steps if isinstance(step, str) and step.strip()]

    @field_validator("ingredients_list", mode="before")
    @classmethod
    def drop_empty_ingredients(cls, items) -> list:
        """Accept bare strings from sloppy models; drop lines with neither quantity nor name."""
        if not isinstance(items, list):
            return items
        normalized = []
        for item in items:
            if isinstance(item, str):
                item = {"quantity": "", "name": item}
            if isinstance(item, dict):
                item = {
                    "quantity": str(item.get("quantity") or "").strip(),
                    "name": str(item.get("name") or "").strip(),
                }
                if not (item["quantity"] or item["name"]):
                    continue
            normalized.append(item)
        return normalized

    def with_image(self, image_base64: Optional[str]) -> "Recipe":
        return self.model_copy(update={"image_base64": image_base64})

    def to_dict(self) -> dict:
        """Serialize with camelCase aliases, omitting unset image/timestamp."""
        return self.model_dump(by_alias=True, exclude_none=True)
