"""Plain-text and Markdown renderings of a Recipe."""

from pantry_chef.models.models import Recipe


SHARE_FOOTER = "Shared from Pantry Chef AI."


def _ingredient_lines(recipe: Recipe) -> list[str]:
    return [f"{item.quantity} {item.name}".strip() for item in recipe.ingredients_list]


def format_share_text(recipe: Recipe) -> str:
    """Text copied to the clipboard / passed to the share sheet."""
    steps = [f"{index}. {step}" for index, step in enumerate(recipe.instructions, start=1)]
    return (
        f"Recipe: {recipe.title}\n\n"
        f"{recipe.description}\n\n"
        "--- INGREDIENTS ---\n"
        + "\n".join(_ingredient_lines(recipe))
        + "\n\n--- INSTRUCTIONS ---\n"
        + "\n".join(steps)
        + f"\n\n{SHARE_FOOTER}"
    )


def format_markdown(recipe: Recipe) -> str:
    """Markdown rendering for terminals (rich) and notes apps.

    Empty labels are skipped, so a sparse recipe still renders cleanly.
    """
    lines = [f"# {recipe.title}", ""]
    if recipe.description:
        lines += [f"_{recipe.description}_", ""]

    meta = [
        ("Prep", recipe.prep_time),
        ("Cook", recipe.cook_time),
        ("Difficulty", recipe.difficulty),
        ("Yield", recipe.yield_),
    ]
    meta_line = " · ".join(f"**{label}:** {value}" for label, value in meta if value)
    if meta_line:
        lines += [meta_line, ""]

    nutrition = [
        ("Calories", recipe.calories),
        ("Protein", recipe.protein),
        ("Carbs", recipe.carbs),
        ("Fat", recipe.fat),
    ]
    nutrition_line = " · ".join(f"{label}: {value}" for label, value in nutrition if value)
    if nutrition_line:
        lines += [f"> {nutrition_line}", ""]

    lines += ["## Ingredients", ""]
    lines += [f"- {line}" for line in _ingredient_lines(recipe)]
    lines += ["", "## Instructions", ""]
    lines += [f"{index}. {step}" for index, step in enumerate(recipe.instructions, start=1)]

    if recipe.variations:
        lines += ["", "## Variations", ""]
        lines += [f"- **{variation.title}**: {variation.description}" for variation in recipe.variations]

    return "\n".join(lines) + "\n"
