"""Error taxonomy and error-handling helpers for recipe generation.

Internal errors (raised by providers and the repair agent):
- RequestValidationError: pre-flight request defects, never reaches the network
- ConfigurationError: a required credential is absent at call time
- ProviderError: a backend returned a non-success response or failed in transport
- UnparsableResponseError: secondary output could not be coerced into a Recipe

The orchestrator converts all of these into RecipeGenerationError, the only
exception callers need to handle. Its message is localized and meant to be
displayed verbatim.
"""

from typing import Optional

from pantry_chef.utils.logger import logger


class RecipeServiceError(Exception):
    """Base class for internal recipe generation errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class RequestValidationError(RecipeServiceError):
    """Request rejected before any network call.

    Carries the translation key of the user-facing message.
    """

    def __init__(self, translation_key: str, message: str = "") -> None:
        super().__init__(message or translation_key)
        self.translation_key = translation_key


class ConfigurationError(RecipeServiceError):
    """Required credential or setting is missing."""


class ProviderError(RecipeServiceError):
    """Backend call failed. Carries the backend's own message when available."""

    def __init__(self, message: str = "", provider: str = "", status: Optional[int] = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)


class UnparsableResponseError(RecipeServiceError):
    """Model output could not be turned into a Recipe, even after repair."""

    def __init__(self, message: str, model: str = "") -> None:
        super().__init__(message)
        self.model = model


class RecipeGenerationError(Exception):
    """User-facing failure of a generate() call. The message is localized."""

    def __init__(self, message: str, locale: str = "en") -> None:
        super().__init__(message)
        self.message = message
        self.locale = locale


# ============================================================================
# Error Handling Helpers
# ============================================================================


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log error with appropriate level.

    Args:
        operation_name: Description for logging
        exception: Exception that occurred
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
    """
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


async def safe_execute_async(
    coro,
    operation_name: str,
    log_level: str = "warning",
    default_return=None,
    reraise: bool = False,
):
    """Safely execute async operation with consistent error logging.

    Used for best-effort steps that must degrade gracefully:
    - Image generation: return the recipe without an image
    - JSON repair: report "no repair" instead of failing

    Args:
        coro: Awaitable coroutine to execute.
        operation_name: Description for logging (e.g., "OpenRouter image generation").
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value to return on exception. Default: None.
        reraise: If True, re-raise exception after logging. Default: False.

    Returns:
        Result of coroutine if successful, default_return on exception if reraise=False.

    Raises:
        Exception: Original exception if reraise=True.
    """
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return


def safe_execute_sync(
    func,
    operation_name: str,
    log_level: str = "warning",
    default_return=None,
    reraise: bool = False,
):
    """Synchronous version of safe_execute_async.

    Args:
        func: Callable to execute (no args).
        operation_name: Description for logging.
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value to return on exception. Default: None.
        reraise: If True, re-raise exception after logging. Default: False.

    Returns:
        Result of func if successful, default_return on exception if reraise=False.
    """
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return
