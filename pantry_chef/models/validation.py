"""Response validation: model output text -> Recipe, or a report of what is wrong.

Free-form providers wrap JSON in prose or code fences, drop keys, or return
nothing usable. parse_recipe_json() recovers the JSON object when there is one,
and validate_recipe() checks it against RECIPE_SCHEMA, returning a tagged
result instead of raising:

- RecipeValid(recipe): usable recipe (non-viability gaps filled with defaults)
- RecipeInvalid(missing_fields, defects): the caller decides whether to repair
"""

import json
import re
from typing import Any, List, Optional, Union

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pantry_chef.models.models import Recipe
from pantry_chef.models.schema import RECIPE_SCHEMA, VIABILITY_FIELDS
from pantry_chef.utils.errors import safe_execute_sync
from pantry_chef.utils.logger import logger


class RecipeValid(BaseModel):
    recipe: Recipe


class RecipeInvalid(BaseModel):
    """Validation failure. missing_fields lists the viability fields at fault."""

    model_config = ConfigDict(frozen=True)

    missing_fields: List[str] = Field(default_factory=list)
    defects: List[str] = Field(default_factory=list)


ValidationResult = Union[RecipeValid, RecipeInvalid]


_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

_JSON_TYPES = {
    types.Type.STRING: str,
    types.Type.ARRAY: list,
    types.Type.OBJECT: dict,
    types.Type.NUMBER: (int, float),
    types.Type.INTEGER: int,
    types.Type.BOOLEAN: bool,
}

_EMPTY_DEFAULTS = {
    types.Type.STRING: "",
    types.Type.ARRAY: [],
    types.Type.OBJECT: {},
}


def parse_recipe_json(response_text: Optional[str]) -> Optional[dict]:
    """Parse a JSON object from model output text.

    Tries, in order:
    1. Direct json.loads() on the full text
    2. json.loads() after stripping Markdown code fences
    3. Regex extraction of the outermost {...} block

    Args:
        response_text: Raw model output (may include prose or fences).

    Returns:
        Parsed dict, or None if no JSON object could be recovered.
    """
    if not isinstance(response_text, str) or not response_text.strip():
        return None

    text = response_text.strip()

    def _parse_direct():
        return json.loads(text)

    def _parse_unfenced():
        return json.loads(_FENCE_PATTERN.sub("", text))

    def _parse_regex():
        match = re.search(r"\{.*\}", text, re.DOTALL)
        return json.loads(match.group()) if match else None

    for parse, name in (
        (_parse_direct, "Direct JSON parse"),
        (_parse_unfenced, "Fenced JSON parse"),
        (_parse_regex, "Regex JSON extraction"),
    ):
        parsed = safe_execute_sync(parse, name, log_level="debug", default_return=None)
        if isinstance(parsed, dict):
            return parsed

    return None


def find_schema_defects(payload: dict, schema: types.Schema = RECIPE_SCHEMA) -> list[str]:
    """List required fields that are missing or have the wrong JSON type.

    Only the top level is checked; nested items are normalized by the Recipe model.
    """
    defects = []
    for name in schema.required or []:
        prop = (schema.properties or {}).get(name)
        if name not in payload or payload[name] is None:
            defects.append(f"{name}: missing")
            continue
        expected = _JSON_TYPES.get(prop.type) if prop is not None else None
        if expected and not isinstance(payload[name], expected):
            defects.append(f"{name}: expected {prop.type.value.lower()}, got {type(payload[name]).__name__}")
    return defects


def _missing_viability_fields(payload: dict) -> list[str]:
    missing = []
    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        missing.append("title")
    ingredients = payload.get("ingredientsList")
    if not isinstance(ingredients, list) or not ingredients:
        missing.append("ingredientsList")
    instructions = payload.get("instructions")
    if not isinstance(instructions, list) or not any(isinstance(s, str) and s.strip() for s in instructions):
        missing.append("instructions")
    return missing


def _fill_defaults(payload: dict, schema: types.Schema = RECIPE_SCHEMA) -> dict:
    """Copy payload, replacing missing or null non-viability fields with empty values."""
    filled = dict(payload)
    for name, prop in (schema.properties or {}).items():
        if name in VIABILITY_FIELDS:
            continue
        if filled.get(name) is None:
            default = _EMPTY_DEFAULTS.get(prop.type, "")
            filled[name] = type(default)() if isinstance(default, (list, dict)) else default
    return filled


def validate_recipe(payload: Any) -> ValidationResult:
    """Check a candidate payload against the recipe schema.

    Pure function: no I/O, no exceptions for bad input.

    Args:
        payload: Parsed model output (anything; only dicts can be valid).

    Returns:
        RecipeValid with a normalized Recipe, or RecipeInvalid naming the
        viability fields that are missing plus any other schema defects.
    """
    if not isinstance(payload, dict):
        return RecipeInvalid(
            missing_fields=list(VIABILITY_FIELDS),
            defects=[f"expected a JSON object, got {type(payload).__name__}"],
        )

    defects = find_schema_defects(payload)
    missing = _missing_viability_fields(payload)
    if missing:
        return RecipeInvalid(missing_fields=missing, defects=defects)

    if defects:
        logger.debug(f"Recipe payload has non-critical defects, filling defaults: {defects}")

    try:
        recipe = Recipe.model_validate(_fill_defaults(payload))
    except ValidationError as e:
        locations = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        missing = [field for field in VIABILITY_FIELDS if any(loc.startswith(field) for loc in locations)]
        return RecipeInvalid(missing_fields=missing, defects=defects + [f"{loc}: invalid" for loc in locations])

    return RecipeValid(recipe=recipe)
