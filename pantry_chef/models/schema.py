"""Declarative recipe schema shared by generation, validation and repair.

RECIPE_SCHEMA is attached to every Gemini structured-output call, rendered
into the OpenRouter prompt as a JSON shape hint, and walked by the response
validator. Field names are the camelCase wire names.
"""

from google.genai import types


def _string(description: str) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


RECIPE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": _string("The creative and appealing name of the recipe."),
        "description": _string("A short, enticing description of the dish."),
        "prepTime": _string("Estimated preparation time, e.g., '15 minutes'."),
        "cookTime": _string("Estimated cooking time, e.g., '30 minutes'."),
        "difficulty": _string("Difficulty level: 'Easy', 'Medium', or 'Hard'."),
        "yield": _string("Number of servings, e.g., '4 servings'."),
        "ingredientsList": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "quantity": _string("Quantity of the ingredient, e.g., '1 cup'."),
                    "name": _string("Name of the ingredient, e.g., 'all-purpose flour'."),
                },
                required=["quantity", "name"],
            ),
        ),
        "instructions": types.Schema(
            type=types.Type.ARRAY,
            description="Step-by-step cooking guide.",
            items=types.Schema(type=types.Type.STRING),
        ),
        "calories": _string("Estimated calories per serving, e.g., '450 kcal'."),
        "protein": _string("Estimated protein per serving, e.g., '30g'."),
        "carbs": _string("Estimated carbohydrates per serving, e.g., '45g'."),
        "fat": _string("Estimated fat per serving, e.g., '15g'."),
        "variations": types.Schema(
            type=types.Type.ARRAY,
            description="2-3 creative variations for the recipe.",
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "title": _string("Title of the variation."),
                    "description": _string("Description of the variation."),
                },
                required=["title", "description"],
            ),
        ),
    },
    required=[
        "title",
        "description",
        "prepTime",
        "cookTime",
        "difficulty",
        "yield",
        "ingredientsList",
        "instructions",
        "calories",
        "protein",
        "carbs",
        "fat",
        "variations",
    ],
)

# Fields a recipe cannot be used without. Missing any of these triggers repair.
VIABILITY_FIELDS = ("title", "ingredientsList", "instructions")


def schema_shape(schema: types.Schema = RECIPE_SCHEMA):
    """Render a schema as an example JSON shape (type names as placeholder values)."""
    if schema.type == types.Type.OBJECT:
        return {name: schema_shape(prop) for name, prop in (schema.properties or {}).items()}
    if schema.type == types.Type.ARRAY:
        return [schema_shape(schema.items)] if schema.items else []
    return schema.type.value.lower() if schema.type else "string"
