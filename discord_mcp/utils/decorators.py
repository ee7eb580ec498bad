"""Error translation decorator for MCP tools.

discord.py reports failures with its own exception types. Tools are wrapped
with ``translate_discord_errors`` at registration so callers only ever see the
``DiscordMCPError`` hierarchy.
"""

import functools

import discord

from ..exceptions import DiscordMCPError
from ..exceptions import EntityNotFoundError
from ..exceptions import UpstreamError
from ..logger_config import ErrorCategory
from ..logger_config import log_structured_error


def _to_tool_error(operation: str, exc: discord.DiscordException) -> DiscordMCPError:
    if isinstance(exc, discord.NotFound):
        return EntityNotFoundError("resource", exc.text or operation, f"Discord resource not found: {exc.text}")
    if isinstance(exc, discord.HTTPException):
        # Forbidden is an HTTPException too; keep its status for the caller
        return UpstreamError(operation, exc.text or str(exc), status=exc.status)
    return UpstreamError(operation, str(exc))


def translate_discord_errors(func):
    """Convert discord.py exceptions raised by a coroutine tool into ``DiscordMCPError``."""
    operation = getattr(func, "__name__", "discord_operation")

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except DiscordMCPError as e:
            log_structured_error(
                category=ErrorCategory.WARNING,
                message=f"Operation {operation} rejected",
                exception=e,
                operation=operation,
            )
            raise
        except discord.DiscordException as e:
            error = _to_tool_error(operation, e)
            log_structured_error(
                category=ErrorCategory.ERROR,
                message=f"Operation {operation} failed",
                exception=error,
                operation=operation,
            )
            raise error from e

    return wrapper
