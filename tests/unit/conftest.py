"""Shared fixtures for unit tests: recipe payloads, image bytes, fake OpenRouter HTTP."""

import json
from io import BytesIO

import pytest
from PIL import Image

from pantry_chef.providers import openrouter


@pytest.fixture
def recipe_payload() -> dict:
    """A complete recipe as a model would emit it (camelCase wire names)."""
    return {
        "title": "Garlic Tomato Onion Saute",
        "description": "A quick, fragrant saute.",
        "prepTime": "10 minutes",
        "cookTime": "15 minutes",
        "difficulty": "Easy",
        "yield": "2 servings",
        "ingredientsList": [
            {"quantity": "2", "name": "Tomatoes"},
            {"quantity": "1", "name": "Onion"},
            {"quantity": "3 cloves", "name": "Garlic"},
        ],
        "instructions": ["Chop vegetables.", "Saute until soft."],
        "calories": "180 kcal",
        "protein": "4g",
        "carbs": "20g",
        "fat": "9g",
        "variations": [],
    }


@pytest.fixture
def jpeg_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (16, 9), (200, 80, 40)).save(buffer, format="JPEG")
    return buffer.getvalue()


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as an async context manager."""

    def __init__(self, status: int = 200, body=None, reason: str = "OK") -> None:
        self.status = status
        self.reason = reason
        self._text = body if isinstance(body, str) else json.dumps(body)

    async def text(self) -> str:
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeHTTP:
    """Queue of canned responses plus a log of every POST made."""

    def __init__(self) -> None:
        self.responses: list = []
        self.calls: list[dict] = []

    def queue(self, status: int = 200, body=None, reason: str = "OK") -> None:
        self.responses.append(FakeResponse(status, body, reason))

    def queue_error(self, error: Exception) -> None:
        self.responses.append(error)

    def session(self, *args, **kwargs) -> "FakeSession":
        return FakeSession(self)


class FakeSession:
    def __init__(self, http: FakeHTTP) -> None:
        self.http = http

    def post(self, url, headers=None, json=None):
        self.http.calls.append({"url": url, "headers": headers, "json": json})
        response = self.http.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def openrouter_http(monkeypatch) -> FakeHTTP:
    """Replace aiohttp.ClientSession in the OpenRouter adapter with a fake."""
    http = FakeHTTP()
    monkeypatch.setattr(openrouter.aiohttp, "ClientSession", http.session)
    return http


def chat_completion(content) -> dict:
    """OpenRouter chat-completion body wrapping the given message content."""
    if not isinstance(content, str):
        content = json.dumps(content)
    return {"id": "gen-1", "choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def make_completion():
    return chat_completion
