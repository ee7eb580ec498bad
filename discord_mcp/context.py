"""Shared state handed to every tool family."""

from __future__ import annotations

from dataclasses import dataclass

from .client import LazyClientHandle
from .config import Settings
from .scope import ScopeResolver


@dataclass(frozen=True)
class DiscordContext:
    """The scope resolver and the client handle all tool families borrow."""

    scope: ScopeResolver
    client: LazyClientHandle


def create_client_handle(settings: Settings) -> LazyClientHandle:
    return LazyClientHandle(settings.discord_token, ready_timeout=settings.connect_timeout)


def create_context(settings: Settings, client: LazyClientHandle | None = None) -> DiscordContext:
    """Build the context for a server from its settings."""
    if client is None:
        client = create_client_handle(settings)
    return DiscordContext(scope=ScopeResolver(settings.default_scope), client=client)
