"""Unit tests for response parsing and recipe validation."""

import json

import pytest

from pantry_chef.models.validation import (
    RecipeInvalid,
    RecipeValid,
    find_schema_defects,
    parse_recipe_json,
    validate_recipe,
)


class TestParseRecipeJson:
    """Tests for lenient JSON recovery."""

    def test_plain_json(self, recipe_payload):
        assert parse_recipe_json(json.dumps(recipe_payload)) == recipe_payload

    def test_fenced_json(self, recipe_payload):
        text = f"```json\n{json.dumps(recipe_payload)}\n```"

        assert parse_recipe_json(text) == recipe_payload

    def test_json_wrapped_in_prose(self, recipe_payload):
        text = f"Sure! Here is your recipe:\n{json.dumps(recipe_payload)}\nEnjoy your meal."

        assert parse_recipe_json(text) == recipe_payload

    @pytest.mark.parametrize("text", [None, "", "   ", "Title: Pancakes. Mix and fry.", "[1, 2, 3]", "{broken"])
    def test_unrecoverable(self, text):
        assert parse_recipe_json(text) is None

    @pytest.mark.parametrize("value", [[{"type": "text", "text": "{}"}], {"title": "Soup"}, 42])
    def test_non_string_input(self, value):
        assert parse_recipe_json(value) is None


class TestValidateRecipe:
    """Tests for the viability gate and default filling."""

    def test_valid_payload(self, recipe_payload):
        result = validate_recipe(recipe_payload)

        assert isinstance(result, RecipeValid)
        assert result.recipe.title == "Garlic Tomato Onion Saute"

    def test_missing_instructions(self, recipe_payload):
        del recipe_payload["instructions"]

        result = validate_recipe(recipe_payload)

        assert isinstance(result, RecipeInvalid)
        assert result.missing_fields == ["instructions"]

    def test_blank_instructions_count_as_missing(self, recipe_payload):
        recipe_payload["instructions"] = ["", "   "]

        result = validate_recipe(recipe_payload)

        assert isinstance(result, RecipeInvalid)
        assert result.missing_fields == ["instructions"]

    def test_all_viability_fields_missing(self):
        result = validate_recipe({"description": "Something tasty"})

        assert isinstance(result, RecipeInvalid)
        assert result.missing_fields == ["title", "ingredientsList", "instructions"]

    @pytest.mark.parametrize("payload", [None, "a string", ["list"], 42])
    def test_non_object_payload(self, payload):
        result = validate_recipe(payload)

        assert isinstance(result, RecipeInvalid)
        assert result.missing_fields == ["title", "ingredientsList", "instructions"]

    def test_non_viability_fields_filled_with_defaults(self, recipe_payload):
        """Test that missing labels and variations do not invalidate a recipe."""
        for key in ("calories", "protein", "difficulty", "variations"):
            del recipe_payload[key]
        recipe_payload["fat"] = None

        result = validate_recipe(recipe_payload)

        assert isinstance(result, RecipeValid)
        assert result.recipe.calories == ""
        assert result.recipe.fat == ""
        assert result.recipe.variations == []

    def test_validation_does_not_mutate_input(self, recipe_payload):
        del recipe_payload["calories"]

        validate_recipe(recipe_payload)

        assert "calories" not in recipe_payload

    def test_wrong_nested_shape_is_invalid(self, recipe_payload):
        recipe_payload["variations"] = [["not", "an", "object"]]

        result = validate_recipe(recipe_payload)

        assert isinstance(result, RecipeInvalid)
        assert any(defect.startswith("variations") for defect in result.defects)


class TestFindSchemaDefects:
    """Tests for top-level schema checks."""

    def test_complete_payload_has_no_defects(self, recipe_payload):
        assert find_schema_defects(recipe_payload) == []

    def test_reports_missing_and_mistyped(self, recipe_payload):
        del recipe_payload["yield"]
        recipe_payload["instructions"] = "Chop. Saute."

        defects = find_schema_defects(recipe_payload)

        assert "yield: missing" in defects
        assert "instructions: expected array, got str" in defects
