"""The pytest configuration for Discord MCP testing.

Tests never reach Discord: the client handle is built with a factory returning
``FakeDiscordClient`` over a populated fake guild.
"""

import pytest

from discord_mcp.client import LazyClientHandle
from discord_mcp.config import reset_settings
from discord_mcp.context import DiscordContext
from discord_mcp.scope import ScopeResolver

from .shared.discord_fakes import FakeDiscordClient
from .shared.discord_fakes import make_category
from .shared.discord_fakes import make_forum
from .shared.discord_fakes import make_guild
from .shared.discord_fakes import make_member
from .shared.discord_fakes import make_message
from .shared.discord_fakes import make_tag
from .shared.discord_fakes import make_text_channel
from .shared.discord_fakes import make_thread
from .shared.discord_fakes import make_user
from .shared.discord_fakes import make_voice_channel
from .shared.discord_fakes import make_webhook

GUILD_ID = "1000"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep real credentials and metrics out of every test."""
    monkeypatch.delenv("DISCORD_TOKEN", raising=False)
    monkeypatch.delenv("DISCORD_GUILD_ID", raising=False)
    monkeypatch.setenv("MCP_METRICS_ENABLED", "false")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def channel_messages():
    return [
        make_message(701, "newest message", author="alice"),
        make_message(702, "older message", author="bob"),
        make_message(703, "oldest message", author="alice"),
    ]


@pytest.fixture
def guild(channel_messages):
    """A guild with duplicate channel and category names and a forum with tags."""
    text_category = make_category(200, "Text Channels")
    archive_upper = make_category(201, "Archive")
    archive_lower = make_category(202, "archive")

    general = make_text_channel(300, "general", category=text_category, messages=channel_messages)
    general_upper = make_text_channel(301, "General")
    announcements = make_text_channel(302, "announcements")
    text_category.channels = [general]

    forum = make_forum(
        400, "help-forum", topic="Ask for help here", tags=[make_tag("bug"), make_tag("question", moderated=True)]
    )
    forum_post = make_thread(500, "bug report", parent=forum, pinned=True)
    forum.threads = [forum_post]
    discussion = make_thread(
        501, "design-discussion", parent=general, archived=True, messages=[make_message(801, "thread hello")]
    )

    members = [
        make_member(600, "alice"),
        make_member(601, "bob", "1234"),
        make_member(602, "bob", "5678"),
    ]

    return make_guild(
        channels=[
            text_category,
            archive_upper,
            archive_lower,
            general,
            general_upper,
            announcements,
            make_voice_channel(310, "Lounge"),
            forum,
        ],
        threads=[forum_post, discussion],
        members=members,
    )


@pytest.fixture
def users():
    return [make_user(600, "alice"), make_user(601, "bob", "1234")]


@pytest.fixture
def webhooks():
    return [make_webhook(900, "deploy-bot"), make_webhook(901, "Deploy-Bot"), make_webhook(902, "alerts")]


@pytest.fixture
def fake_client(guild, users, webhooks):
    return FakeDiscordClient(guilds=[guild], users=users, webhooks=webhooks)


@pytest.fixture
def client_factory(fake_client, mocker):
    """A factory returning ``fake_client``; its call count is the number of constructions."""
    return mocker.Mock(return_value=fake_client)


@pytest.fixture
def client_handle(client_factory):
    return LazyClientHandle("test-token", client_factory=client_factory, ready_timeout=2.0)


@pytest.fixture
def context(client_handle):
    return DiscordContext(scope=ScopeResolver(GUILD_ID), client=client_handle)


@pytest.fixture
def unscoped_context(client_handle):
    """A context with no default guild configured."""
    return DiscordContext(scope=ScopeResolver(None), client=client_handle)
