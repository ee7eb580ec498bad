"""Utility modules for Discord MCP tools."""

from .decorators import translate_discord_errors

__all__ = ["translate_discord_errors"]
