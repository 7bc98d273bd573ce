"""Unit tests for the error taxonomy and safe execution helpers."""

import pytest

from pantry_chef.utils.errors import (
    ProviderError,
    RequestValidationError,
    safe_execute_async,
    safe_execute_sync,
)


class TestErrorTypes:
    """Tests for error attributes."""

    @pytest.mark.parametrize("status,expected", [(401, True), (403, True), (429, False), (500, False), (None, False)])
    def test_auth_error_detection(self, status, expected):
        assert ProviderError("boom", provider="openrouter", status=status).is_auth_error is expected

    def test_request_validation_error_defaults_message_to_key(self):
        error = RequestValidationError("errorAddOneIngredient")

        assert error.translation_key == "errorAddOneIngredient"
        assert str(error) == "errorAddOneIngredient"


class TestSafeExecuteSync:
    """Tests for safe_execute_sync."""

    def test_returns_result(self):
        assert safe_execute_sync(lambda: 42, "answer") == 42

    def test_returns_default_on_error(self):
        def _fail():
            raise RuntimeError("nope")

        assert safe_execute_sync(_fail, "failing op", default_return="fallback") == "fallback"

    def test_reraise(self):
        def _fail():
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            safe_execute_sync(_fail, "failing op", reraise=True)


class TestSafeExecuteAsync:
    """Tests for safe_execute_async."""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def _ok():
            return "done"

        assert await safe_execute_async(_ok(), "ok op") == "done"

    @pytest.mark.asyncio
    async def test_returns_default_on_error(self):
        async def _fail():
            raise ConnectionError("down")

        assert await safe_execute_async(_fail(), "failing op", log_level="error") is None

    @pytest.mark.asyncio
    async def test_reraise(self):
        async def _fail():
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            await safe_execute_async(_fail(), "failing op", reraise=True)
