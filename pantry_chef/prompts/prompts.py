"""Prompt builders for recipe generation, repair and image generation.

All functions are pure and deterministic: same inputs, same prompt.
"""

import json

from google.genai import types

from pantry_chef.models.models import CookingMode
from pantry_chef.models.schema import RECIPE_SCHEMA, schema_shape


def build_prompt(
    language_name: str,
    ingredients: list[str],
    cooking_mode: CookingMode | str,
    dietary_restrictions: str = "",
) -> str:
    """Build the recipe generation instruction.

    The model is told to write in ``language_name``, to use ONLY the given
    ingredients, and to fill every recipe field. In dietary mode the
    restriction text is quoted verbatim as a hard constraint, and the model
    must explain infeasibility instead of breaking it. 2-3 variations are
    always requested.

    Args:
        language_name: Display name of the output language, e.g. "Español".
        ingredients: Ingredient names, in the order the user entered them.
        cooking_mode: CookingMode (or its string value).
        dietary_restrictions: Free-text restrictions, used in dietary mode.

    Returns:
        str: The complete prompt.
    """
    prompt = (
        f"You are an expert chef and nutritionist. Create a delicious and easy-to-follow recipe in "
        f"{language_name} using ONLY the following ingredients: {', '.join(ingredients)}. "
        "Also provide the number of servings this recipe yields, the estimated prep time, cook time, "
        "a difficulty level (Easy, Medium, or Hard), and an estimated nutritional breakdown per serving "
        "(calories, protein, carbs, and fat). Be creative. If essential ingredients are missing for a "
        "common dish, adapt the recipe or create something new. The recipe should be suitable for a home cook."
    )

    if CookingMode(cooking_mode) == CookingMode.DIETARY and dietary_restrictions.strip():
        prompt += (
            f'\n\n**IMPORTANT:** The recipe MUST strictly adhere to the following dietary needs and restrictions: '
            f'"{dietary_restrictions}". Ensure all ingredients, quantities, and preparation methods are fully '
            "compliant. If the provided ingredients cannot form a compliant recipe, explain why instead of "
            "ignoring the restrictions."
        )

    return prompt + (
        " Finally, provide 2-3 creative variations of this recipe. These can be different flavor profiles "
        "(e.g., spicy, herby), dietary adaptations (e.g., vegetarian, gluten-free), or suggest a different "
        "cooking method."
    )


def build_json_instructions(schema: types.Schema = RECIPE_SCHEMA) -> str:
    """JSON-only output clause for providers that do not enforce a schema."""
    shape = json.dumps(schema_shape(schema), indent=2)
    return (
        "\n\nRespond with a single JSON object and nothing else (no markdown, no commentary). "
        f"Use exactly these keys:\n{shape}"
    )


def build_image_prompt(title: str, description: str) -> str:
    """Food photograph prompt for the image models."""
    return (
        f'A vibrant, high-quality, professional food photograph of "{title}". It should look delicious and '
        f'appealing, styled to match this description: "{description}". Centered on a clean, bright background.'
    )


def build_repair_prompt(raw_text: str, language_name: str) -> str:
    """Instruction for the repair agent to re-emit free text as recipe JSON."""
    return f"""You are a data extraction API. Your sole purpose is to convert unstructured recipe text into a structured JSON object that strictly follows the provided schema. Do not add any commentary, explanations, or markdown formatting. Your entire response must be a single, raw JSON object.

The recipe text is written in {language_name}. Keep all text values in {language_name}.

Parse the following text and convert it into the specified JSON format.

RECIPE TEXT TO PARSE:
---
{raw_text}
---

Your response must be a JSON object and nothing else."""
