"""Helpers shared by the tool modules.

Resolution helpers turn the flat string parameters of a tool into discord.py
objects, raising ``InvalidArgumentError`` before any network call when a
parameter is malformed and ``EntityNotFoundError`` when Discord does not know
the ID. Formatting helpers keep the layout of message, channel, thread and
webhook listings identical across tools.
"""

from typing import Any
from typing import Iterable

import discord

from .context import DiscordContext
from .exceptions import EntityNotFoundError
from .exceptions import InvalidArgumentError
from .utils.validation import parse_snowflake

# --- Resolution ---


def resolve_guild_id(context: DiscordContext, guild_id: str | None) -> str:
    """Apply the default guild, failing when neither value is present."""
    resolved = context.scope.resolve(guild_id)
    if not resolved:
        raise InvalidArgumentError(
            "guild_id cannot be null or empty and no default guild is configured", field="guild_id"
        )
    return resolved


async def get_guild(context: DiscordContext, guild_id: str | None) -> discord.Guild:
    """Resolve the scope and return the guild from the client cache."""
    resolved = resolve_guild_id(context, guild_id)
    guild_snowflake = parse_snowflake(resolved, "guild_id")
    client = await context.client.get()
    guild = client.get_guild(guild_snowflake)
    if guild is None:
        raise EntityNotFoundError("server", resolved, f"Discord server not found by guild_id: {resolved}")
    return guild


async def get_channel(
    context: DiscordContext,
    channel_id: str | None,
    field: str = "channel_id",
    expected: type | tuple[type, ...] | None = None,
    kind: str = "channel",
) -> Any:
    """Return a channel or thread by ID, fetching it when it is not cached.

    Args:
        expected: Accepted channel classes. A channel of another type is
            reported as not found, since the ID does not name a ``kind``.
    """
    snowflake = parse_snowflake(channel_id, field)
    client = await context.client.get()
    channel = client.get_channel(snowflake)
    if channel is None:
        try:
            channel = await client.fetch_channel(snowflake)
        except discord.NotFound as e:
            raise EntityNotFoundError(kind, channel_id, f"{kind.capitalize()} not found by {field}: {channel_id}") from e
    if expected is not None and not isinstance(channel, expected):
        raise EntityNotFoundError(kind, channel_id, f"Channel {channel_id} is not a {kind}")
    return channel


async def get_user(context: DiscordContext, user_id: str | None, field: str = "user_id") -> discord.User:
    snowflake = parse_snowflake(user_id, field)
    client = await context.client.get()
    user = client.get_user(snowflake)
    if user is None:
        try:
            user = await client.fetch_user(snowflake)
        except discord.NotFound as e:
            raise EntityNotFoundError("user", user_id, f"User not found by {field}: {user_id}") from e
    return user


async def fetch_message(channel: Any, message_id: str | None, field: str = "message_id") -> discord.Message:
    snowflake = parse_snowflake(message_id, field)
    try:
        return await channel.fetch_message(snowflake)
    except discord.NotFound as e:
        raise EntityNotFoundError("message", message_id, f"Message not found by {field}: {message_id}") from e


async def read_history(channel: Any, limit: int) -> list[discord.Message]:
    """Return the newest ``limit`` messages of a channel, newest first."""
    return [message async for message in channel.history(limit=limit)]


# --- Formatting ---


def format_message(message: Any) -> str:
    """Format one message as ``- (ID: ...) **[author]** `timestamp`: ```content```."""
    return (
        f"- (ID: {message.id}) **[{message.author.name}]** "
        f"`{message.created_at.isoformat()}`: ```{message.clean_content}```"
    )


def format_message_history(messages: list[Any]) -> str:
    lines = "\n".join(format_message(m) for m in messages)
    return f"**Retrieved {len(messages)} messages:** \n{lines}"


def format_channel(channel: Any) -> str:
    return f"- {channel.type} channel: {channel.name} (ID: {channel.id})"


def format_channel_list(channels: list[Any]) -> str:
    lines = "\n".join(format_channel(c) for c in channels)
    return f"Retrieved {len(channels)} channels:\n{lines}"


def thread_flags(thread: Any) -> str:
    """Return the ``[ARCHIVED] [LOCKED] [PINNED]`` markers that apply to a thread."""
    flags = []
    if thread.archived:
        flags.append(" [ARCHIVED]")
    if thread.locked:
        flags.append(" [LOCKED]")
    if thread.flags.pinned:
        flags.append(" [PINNED]")
    return "".join(flags)


def format_thread(thread: Any, with_parent: bool = False) -> str:
    line = f"- {thread.name} (ID: {thread.id})"
    if with_parent:
        parent = thread.parent
        line += f" in {parent.name if parent is not None else 'unknown channel'}"
    return line + thread_flags(thread)


def format_webhook(webhook: Any) -> str:
    return f"- (ID: {webhook.id}) **[{webhook.name}]** ```{webhook.url}```"


def join_names(items: Iterable[Any]) -> str:
    return ", ".join(item.name for item in items)
