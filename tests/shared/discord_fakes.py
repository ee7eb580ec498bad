"""
Fake Discord objects for Discord MCP testing.

Entities are ``Mock`` objects spec'd on the real discord.py classes, so
``isinstance`` checks in the tools hold and coroutine methods become
``AsyncMock`` children automatically. ``FakeDiscordClient`` stands in for
``discord.Client`` behind ``LazyClientHandle``.
"""

import asyncio
import datetime
from typing import Any
from unittest.mock import AsyncMock
from unittest.mock import Mock

import discord

from discord_mcp.client import LazyClientHandle
from discord_mcp.context import DiscordContext
from discord_mcp.scope import ScopeResolver

CREATED_AT = datetime.datetime(2021, 3, 4, 5, 6, 7, tzinfo=datetime.timezone.utc)


def make_mock(cls: type, **attrs: Any) -> Mock:
    """Create a mock of ``cls``; ``name`` is set after construction since Mock reserves it."""
    mock = Mock(spec=cls)
    for key, value in attrs.items():
        setattr(mock, key, value)
    return mock


def not_found(text: str = "Unknown") -> discord.NotFound:
    return discord.NotFound(Mock(status=404, reason="Not Found"), text)


def forbidden(text: str = "Missing Permissions") -> discord.Forbidden:
    return discord.Forbidden(Mock(status=403, reason="Forbidden"), text)


def history_of(messages: list) -> Any:
    """Build a replacement for ``Messageable.history`` returning ``messages``."""

    def history(limit=100, **kwargs):
        async def iterate():
            for message in messages[:limit]:
                yield message

        return iterate()

    return Mock(side_effect=history)


def make_user(user_id: int, name: str, discriminator: str = "0", dm_channel: Mock | None = None) -> Mock:
    user = make_mock(discord.User, id=user_id, name=name, discriminator=discriminator)
    user.create_dm.return_value = dm_channel or make_dm_channel(user_id + 10_000)
    return user


def make_member(user_id: int, name: str, discriminator: str = "0") -> Mock:
    return make_mock(discord.Member, id=user_id, name=name, discriminator=discriminator)


def make_message(message_id: int, content: str, author: str = "alice", channel_id: int = 300) -> Mock:
    message = make_mock(
        discord.Message,
        id=message_id,
        author=make_mock(discord.User, name=author),
        created_at=CREATED_AT,
        clean_content=content,
        content=content,
        jump_url=f"https://discord.com/channels/1000/{channel_id}/{message_id}",
    )
    message.edit.return_value = message
    return message


def make_dm_channel(channel_id: int, messages: list | None = None) -> Mock:
    channel = make_mock(discord.DMChannel, id=channel_id, type=discord.ChannelType.private)
    _attach_messages(channel, messages or [])
    return channel


def _attach_messages(channel: Mock, messages: list) -> None:
    by_id = {m.id: m for m in messages}

    async def fetch_message(message_id):
        if message_id not in by_id:
            raise not_found("Unknown Message")
        return by_id[message_id]

    channel.fetch_message = AsyncMock(side_effect=fetch_message)
    channel.history = history_of(messages)
    channel.send.side_effect = lambda content, **kwargs: make_message(9999, content, channel_id=channel.id)


def make_text_channel(channel_id: int, name: str, category: Mock | None = None, messages: list | None = None) -> Mock:
    channel = make_mock(
        discord.TextChannel, id=channel_id, name=name, type=discord.ChannelType.text, category=category
    )
    _attach_messages(channel, messages or [])
    channel.webhooks.return_value = []
    return channel


def make_voice_channel(channel_id: int, name: str) -> Mock:
    return make_mock(discord.VoiceChannel, id=channel_id, name=name, type=discord.ChannelType.voice)


def make_category(category_id: int, name: str, channels: list | None = None) -> Mock:
    return make_mock(
        discord.CategoryChannel,
        id=category_id,
        name=name,
        type=discord.ChannelType.category,
        channels=channels or [],
    )


def make_tag(name: str, moderated: bool = False) -> Mock:
    return make_mock(discord.ForumTag, name=name, moderated=moderated, emoji=None)


def make_forum(forum_id: int, name: str, topic: str | None = None, tags: list | None = None) -> Mock:
    return make_mock(
        discord.ForumChannel,
        id=forum_id,
        name=name,
        type=discord.ChannelType.forum,
        topic=topic,
        available_tags=tags or [],
        threads=[],
    )


def make_thread(
    thread_id: int,
    name: str,
    parent: Mock | None = None,
    archived: bool = False,
    locked: bool = False,
    pinned: bool = False,
    messages: list | None = None,
) -> Mock:
    thread = make_mock(
        discord.Thread,
        id=thread_id,
        name=name,
        type=discord.ChannelType.public_thread,
        parent=parent,
        archived=archived,
        locked=locked,
        flags=Mock(pinned=pinned),
        owner_id=600,
        created_at=CREATED_AT,
        member_count=2,
        message_count=len(messages or []),
        auto_archive_duration=1440,
        applied_tags=[],
    )
    _attach_messages(thread, messages or [])
    return thread


def make_webhook(webhook_id: int, name: str) -> Mock:
    return make_mock(
        discord.Webhook,
        id=webhook_id,
        name=name,
        url=f"https://discord.com/api/webhooks/{webhook_id}/token-{webhook_id}",
    )


def make_guild(
    guild_id: int = 1000,
    name: str = "Test Guild",
    channels: list | None = None,
    threads: list | None = None,
    members: list | None = None,
) -> Mock:
    """Build a guild whose typed channel lists are derived from ``channels``."""
    channels = channels or []
    threads = threads or []
    members = members or []
    guild = make_mock(
        discord.Guild,
        id=guild_id,
        name=name,
        channels=channels,
        categories=[c for c in channels if isinstance(c, discord.CategoryChannel)],
        text_channels=[c for c in channels if isinstance(c, discord.TextChannel)],
        voice_channels=[c for c in channels if isinstance(c, discord.VoiceChannel)],
        forums=[c for c in channels if isinstance(c, discord.ForumChannel)],
        threads=threads,
        members=members,
        owner=members[0] if members else None,
        owner_id=members[0].id if members else 1,
        created_at=CREATED_AT,
        member_count=len(members),
        premium_subscription_count=2,
        premium_tier=1,
    )
    channels_by_id = {c.id: c for c in channels}
    threads_by_id = {t.id: t for t in threads}
    members_by_id = {m.id: m for m in members}
    guild.get_channel.side_effect = channels_by_id.get
    guild.get_thread.side_effect = threads_by_id.get
    guild.get_member.side_effect = members_by_id.get
    guild.active_threads.return_value = list(threads)
    return guild


class FakeDiscordClient:
    """Minimal stand-in for ``discord.Client``.

    ``start`` fires the registered ``on_ready`` handler and then blocks until
    ``close`` is called, like a real gateway connection.
    """

    def __init__(
        self,
        guilds: list | None = None,
        users: list | None = None,
        webhooks: list | None = None,
        start_error: Exception | None = None,
        never_ready: bool = False,
        close_before_ready: bool = False,
        start_delay: float = 0,
    ):
        self.user = make_user(999, "discord-mcp-bot")
        self._guilds = {g.id: g for g in guilds or []}
        self._channels = {}
        for guild in guilds or []:
            for channel in list(guild.channels) + list(guild.threads):
                self._channels[channel.id] = channel
        self._users = {u.id: u for u in users or []}
        self._webhooks = {w.id: w for w in webhooks or []}
        self._start_error = start_error
        self._never_ready = never_ready
        self._close_before_ready = close_before_ready
        self._start_delay = start_delay
        self._closed = asyncio.Event()
        self.handlers = {}
        self.started_with = None
        self.close_calls = 0
        self._drop_error = None

        self.fetch_channel = AsyncMock(side_effect=self._fetch_channel)
        self.fetch_user = AsyncMock(side_effect=self._fetch_user)
        self.fetch_webhook = AsyncMock(side_effect=self._fetch_webhook)

    def add_channel(self, channel: Mock) -> None:
        self._channels[channel.id] = channel

    def event(self, coro):
        self.handlers[coro.__name__] = coro
        return coro

    async def start(self, token: str) -> None:
        self.started_with = token
        if self._start_delay:
            await asyncio.sleep(self._start_delay)
        if self._start_error is not None:
            raise self._start_error
        if self._close_before_ready:
            return
        if not self._never_ready:
            await self.handlers["on_ready"]()
        await self._closed.wait()
        if self._drop_error is not None:
            raise self._drop_error

    def drop_connection(self, error: Exception) -> None:
        """End a running ``start`` with ``error``, as a fatal gateway failure would."""
        self._drop_error = error
        self._closed.set()

    def is_closed(self) -> bool:
        return self._closed.is_set()

    async def close(self) -> None:
        self.close_calls += 1
        self._closed.set()

    def get_guild(self, guild_id: int):
        return self._guilds.get(guild_id)

    def get_channel(self, channel_id: int):
        return self._channels.get(channel_id)

    def get_user(self, user_id: int):
        return self._users.get(user_id)

    async def _fetch_channel(self, channel_id: int):
        raise not_found("Unknown Channel")

    async def _fetch_user(self, user_id: int):
        raise not_found("Unknown User")

    async def _fetch_webhook(self, webhook_id: int):
        if webhook_id not in self._webhooks:
            raise not_found("Unknown Webhook")
        return self._webhooks[webhook_id]


class ToolCollector:
    """Captures the functions a ``register_*_tools`` call would hand to FastMCP."""

    def __init__(self):
        self.tools = {}

    def tool(self, *args, **kwargs):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator

    def __getitem__(self, name: str):
        return self.tools[name]


def build_context(fake_client: FakeDiscordClient, default_scope: str | None = "1000") -> DiscordContext:
    """A context whose client handle starts ``fake_client``."""
    handle = LazyClientHandle("test-token", client_factory=Mock(return_value=fake_client), ready_timeout=2.0)
    return DiscordContext(scope=ScopeResolver(default_scope), client=handle)
