"""Saved-recipe collection and rating ledger.

Both are in-memory. Persisting them (browser storage, a file, a database)
is the caller's job: Cookbook.to_list() / Cookbook.from_list() move recipes
in and out as camelCase dicts.

Recipes are keyed by title, the same as the browser app: saving a second
recipe with an existing title replaces it.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional

from pydantic import ValidationError

from pantry_chef.models.models import Recipe, RecipeIngredient
from pantry_chef.utils.logger import logger


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortOrder(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _saved_timestamp(recipe: Recipe) -> datetime:
    """savedAt as a datetime. Missing or malformed values sort as the epoch."""
    if not recipe.saved_at:
        return EPOCH
    try:
        parsed = datetime.fromisoformat(recipe.saved_at.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unreadable savedAt on '{recipe.title}': {recipe.saved_at!r}")
        return EPOCH
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def parse_ingredient_lines(text: str) -> list[RecipeIngredient]:
    """Parse the edit form's ingredient box: one `quantity | name` per line.

    Lines without a '|' are read as a bare quantity. Lines with neither a
    quantity nor a name are dropped.
    """
    ingredients = []
    for line in text.splitlines():
        parts = line.split("|")
        quantity = parts[0].strip()
        name = parts[1].strip() if len(parts) > 1 else ""
        if quantity or name:
            ingredients.append(RecipeIngredient(quantity=quantity, name=name))
    return ingredients


def recipe_id(title: str) -> str:
    """Stable slug for a recipe title, e.g. 'Tomato & Basil Pasta' -> 'tomato--basil-pasta'."""
    slug = re.sub(r"\s+", "-", title.lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


class Cookbook:
    """Ordered collection of saved recipes."""

    def __init__(self, recipes: Optional[Iterable[Recipe]] = None) -> None:
        self._recipes: list[Recipe] = list(recipes or [])

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self):
        return iter(list(self._recipes))

    @classmethod
    def from_list(cls, items: Iterable[dict]) -> "Cookbook":
        return cls(Recipe.model_validate(item) for item in items)

    def to_list(self) -> list[dict]:
        return [recipe.to_dict() for recipe in self._recipes]

    def get(self, title: str) -> Optional[Recipe]:
        return next((recipe for recipe in self._recipes if recipe.title == title), None)

    def is_saved(self, title: str) -> bool:
        return self.get(title) is not None

    def save(self, recipe: Recipe) -> Recipe:
        """Save a copy stamped with the current UTC time as savedAt."""
        saved = recipe.model_copy(update={"saved_at": _utc_now_iso()})
        self._recipes = [r for r in self._recipes if r.title != recipe.title]
        self._recipes.append(saved)
        logger.info(f"Recipe saved: {saved.title}")
        return saved

    def delete(self, title: str) -> bool:
        """Remove the recipe with this title. Returns False if it was not saved."""
        remaining = [r for r in self._recipes if r.title != title]
        deleted = len(remaining) != len(self._recipes)
        self._recipes = remaining
        return deleted

    def update(self, original_title: str, recipe: Recipe) -> Optional[Recipe]:
        """Replace an edited recipe in place.

        The title may change. Blank instruction lines are dropped and the
        original savedAt is kept when the edit does not carry one.

        Returns:
            The stored recipe, or None if original_title is not saved.

        Raises:
            ValueError: The edit leaves the recipe without a title, ingredients
                or instructions. The saved recipe is left unchanged.
        """
        for index, existing in enumerate(self._recipes):
            if existing.title != original_title:
                continue
            data = recipe.to_dict()
            data.setdefault("savedAt", existing.saved_at)
            try:
                updated = Recipe.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Rejected edit of saved recipe '{original_title}': {e.error_count()} invalid field(s)")
                raise ValueError(f"Edited recipe '{original_title}' is incomplete") from e
            self._recipes[index] = updated
            return updated
        return None

    def clear(self) -> None:
        self._recipes = []

    def search(self, query: str = "", sort_order: str = SortOrder.DATE_DESC.value) -> list[Recipe]:
        """Filter by title or ingredient name (case-insensitive), then sort.

        Unknown sort orders fall back to newest first.
        """
        recipes = list(self._recipes)

        needle = query.strip().lower()
        if needle:
            recipes = [
                recipe
                for recipe in recipes
                if needle in recipe.title.lower()
                or any(needle in item.name.lower() for item in recipe.ingredients_list)
            ]

        try:
            order = SortOrder(sort_order)
        except ValueError:
            order = SortOrder.DATE_DESC

        if order == SortOrder.TITLE_ASC:
            recipes.sort(key=lambda r: r.title.casefold())
        elif order == SortOrder.TITLE_DESC:
            recipes.sort(key=lambda r: r.title.casefold(), reverse=True)
        elif order == SortOrder.DATE_ASC:
            recipes.sort(key=_saved_timestamp)
        else:
            recipes.sort(key=_saved_timestamp, reverse=True)
        return recipes


class RecipeRatings:
    """Per-recipe star ratings (1-5), keyed by recipe_id()."""

    def __init__(self, ratings: Optional[dict[str, list[int]]] = None) -> None:
        self._ratings: dict[str, list[int]] = {key: list(values) for key, values in (ratings or {}).items()}

    def rate(self, recipe_key: str, value: int) -> tuple[float, int]:
        """Record one rating and return the new (average, count).

        Raises:
            ValueError: If value is not between 1 and 5.
        """
        if not 1 <= value <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got: {value}")
        self._ratings.setdefault(recipe_key, []).append(int(value))
        return self.summary(recipe_key)

    def summary(self, recipe_key: str) -> tuple[float, int]:
        values = self._ratings.get(recipe_key, [])
        if not values:
            return 0.0, 0
        return sum(values) / len(values), len(values)

    def to_dict(self) -> dict[str, list[int]]:
        return {key: list(values) for key, values in self._ratings.items()}
