#!/usr/bin/env python3
"""Ad hoc recipe generator for Pantry Chef.

Generate one recipe from the command line without any front end.

Usage:
    python query.py chicken rice "bell pepper"
    python query.py --language es tomato pasta basil
    python query.py --diet "vegan, gluten-free" chickpeas spinach
    python query.py --provider openrouter --model mistralai/mistral-7b-instruct eggs cheese
    python query.py --image pasta.jpg tomato pasta basil   # Also generate an image
    python query.py --debug eggs cheese                    # Show full JSON response

Features:
- Direct orchestrator execution (same path as any other caller)
- Markdown rendering of the recipe
- Debug mode to display the full recipe JSON
- Optional image generation, written to a file
- OpenRouter key read from OPENROUTER_API_KEY

Ingredients are positional; quote multi-word ingredients.
"""

import asyncio
import base64
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown

from pantry_chef.agents.orchestrator import generate_recipe
from pantry_chef.cookbook.formatting import format_markdown
from pantry_chef.locales.translations import translate
from pantry_chef.models.models import CookingMode, GenerationRequest, Provider, SecondaryProviderSettings
from pantry_chef.utils.config import config
from pantry_chef.utils.errors import RecipeGenerationError
from pantry_chef.utils.logger import logger

console = Console()

USAGE = (
    "Usage: python query.py [--language CODE] [--diet TEXT] [--provider gemini|openrouter] "
    "[--model ID] [--image PATH] [--debug] <ingredient> [<ingredient> ...]"
)

# Flags that consume the next argument
VALUE_FLAGS = ("--language", "--diet", "--provider", "--model", "--image")


def build_request(
    ingredients: list[str],
    language: str,
    diet: str | None = None,
    provider: str = "gemini",
    model: str = "",
    generate_image: bool = False,
) -> GenerationRequest:
    """Turn CLI arguments into a GenerationRequest.

    A --diet value switches the request to dietary mode.
    """
    return GenerationRequest(
        ingredients=ingredients,
        language=language,
        cooking_mode=CookingMode.DIETARY if diet is not None else CookingMode.REGULAR,
        dietary_restrictions=diet or "",
        provider=Provider(provider),
        secondary=SecondaryProviderSettings(
            api_key=os.getenv("OPENROUTER_API_KEY", ""),
            text_model=model,
        ),
        generate_image=generate_image,
    )


def write_image(image_base64: str, image_path: str) -> None:
    path = Path(image_path)
    path.write_bytes(base64.b64decode(image_base64))
    logger.info(f"✓ Image written to {path} ({path.stat().st_size / 1024:.1f} KB)")


def run_query(request: GenerationRequest, debug: bool = False, image_path: str | None = None) -> None:
    """Generate a single recipe and print it.

    Args:
        request: The generation request.
        debug: If True, display the full recipe JSON.
        image_path: Where to write the generated image, if one comes back.
    """
    try:
        logger.info(f"Generating recipe for: {', '.join(request.ingredients)}")
        logger.info("---")

        recipe = asyncio.run(generate_recipe(request))

        logger.info("---")
        console.print()

        if debug:
            console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            recipe_dict = recipe.to_dict()
            if "imageBase64" in recipe_dict:
                recipe_dict["imageBase64"] = f"<{len(recipe_dict['imageBase64'])} base64 chars>"
            console.print_json(data=recipe_dict)
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        console.print(Markdown(format_markdown(recipe)))

        if image_path:
            if recipe.image_base64:
                write_image(recipe.image_base64, image_path)
            else:
                console.print("[yellow]No image was generated for this recipe[/yellow]")

    except RecipeGenerationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        console.print(f"[red]✗ {translate(request.language, 'errorUnknown')}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print("  python query.py chicken rice \"bell pepper\"")
        print("  python query.py --language fr --diet vegetarian lentils carrots")
        print("  python query.py --provider openrouter eggs cheese")
        print("  python query.py --image dinner.jpg --debug salmon lemon")
        sys.exit(1)

    options = {
        "--language": config.DEFAULT_LOCALE,
        "--diet": None,
        "--provider": "gemini",
        "--model": "",
        "--image": None,
    }
    debug_mode = False
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag in VALUE_FLAGS:
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            options[flag] = sys.argv[argv_start]
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    try:
        request = build_request(
            ingredients=sys.argv[argv_start:],
            language=options["--language"],
            diet=options["--diet"],
            provider=options["--provider"],
            model=options["--model"],
            generate_image=options["--image"] is not None,
        )
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        sys.exit(1)

    run_query(request, debug=debug_mode, image_path=options["--image"])
