"""Pytest configuration and fixtures for integration tests.

Ensures environment variables are loaded and skips the live-API tests
when the required keys are missing.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env before test collection so pantry_chef.utils.config sees it."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    # Keep live image payloads small
    os.environ.setdefault("COMPRESS_IMG", "true")

    print("\n" + "=" * 70)
    print("Note: These tests require a valid GEMINI_API_KEY")
    print("      OpenRouter tests additionally require OPENROUTER_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip every integration test if the Gemini key is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip(
            "Integration tests skipped. Missing API keys: GEMINI_API_KEY. Please set it in your .env file.",
            allow_module_level=True,
        )


@pytest.fixture
def openrouter_key() -> str:
    key = os.getenv("OPENROUTER_API_KEY", "")
    if not key:
        pytest.skip("OPENROUTER_API_KEY not set")
    return key
