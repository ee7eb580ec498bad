"""Unit tests for channel management tools."""

import pytest

from discord_mcp.exceptions import AmbiguousEntityError
from discord_mcp.exceptions import EntityNotFoundError
from discord_mcp.exceptions import InvalidArgumentError
from discord_mcp.tools.channel_tools import register_channel_tools

from ..shared.discord_fakes import FakeDiscordClient
from ..shared.discord_fakes import ToolCollector
from ..shared.discord_fakes import build_context
from ..shared.discord_fakes import make_guild
from ..shared.discord_fakes import make_text_channel


@pytest.fixture
def tools(context):
    collector = ToolCollector()
    register_channel_tools(collector, context)
    return collector


@pytest.fixture
def unscoped_tools(unscoped_context):
    collector = ToolCollector()
    register_channel_tools(collector, unscoped_context)
    return collector


class TestCreateTextChannel:
    @pytest.mark.asyncio
    async def test_creates_in_default_guild(self, tools, guild):
        guild.create_text_channel.return_value = make_text_channel(320, "release-notes")

        result = await tools["create_text_channel"](name="release-notes")

        assert result == "Created new text channel: release-notes (ID: 320)"
        guild.create_text_channel.assert_awaited_once_with("release-notes")

    @pytest.mark.asyncio
    async def test_category_by_name(self, tools, guild):
        guild.create_text_channel.return_value = make_text_channel(320, "release-notes")

        result = await tools["create_text_channel"](name="release-notes", category_id="text channels")

        assert result.endswith("in category: Text Channels")
        assert guild.create_text_channel.call_args.kwargs["category"].id == 200

    @pytest.mark.asyncio
    async def test_ambiguous_category_is_rejected(self, tools, guild):
        with pytest.raises(AmbiguousEntityError):
            await tools["create_text_channel"](name="old", category_id="archive")

        guild.create_text_channel.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_name_checked_first(self, unscoped_tools, client_factory):
        with pytest.raises(InvalidArgumentError, match="name cannot be null or empty"):
            await unscoped_tools["create_text_channel"](name="")

        assert client_factory.call_count == 0

    @pytest.mark.asyncio
    async def test_no_scope_anywhere(self, unscoped_tools, client_factory):
        with pytest.raises(InvalidArgumentError, match="guild_id"):
            await unscoped_tools["create_text_channel"](name="x")

        assert client_factory.call_count == 0


class TestDeleteChannel:
    @pytest.mark.asyncio
    async def test_delete_by_id(self, tools, guild):
        result = await tools["delete_channel"](channel_id="302")

        assert result == "Deleted text channel: announcements"
        guild.get_channel(302).delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_by_ambiguous_name(self, tools, guild):
        with pytest.raises(AmbiguousEntityError) as exc_info:
            await tools["delete_channel"](channel_id="general")

        assert {c[1] for c in exc_info.value.candidates} == {"300", "301"}
        guild.get_channel(300).delete.assert_not_called()


class TestFindChannel:
    @pytest.mark.asyncio
    async def test_single_match(self, tools):
        result = await tools["find_channel"](channel_name="ANNOUNCEMENTS")

        assert result == "Retrieved text channel: announcements (ID: 302)"

    @pytest.mark.asyncio
    async def test_same_name_different_case_lists_both(self, tools):
        with pytest.raises(AmbiguousEntityError) as exc_info:
            await tools["find_channel"](channel_name="general")

        assert exc_info.value.candidates == [("general", "300"), ("General", "301")]

    @pytest.mark.asyncio
    async def test_explicit_guild_overrides_default(self, tools):
        with pytest.raises(EntityNotFoundError, match="guild_id: 2000"):
            await tools["find_channel"](channel_name="general", guild_id="2000")


class TestListChannels:
    @pytest.mark.asyncio
    async def test_lists_every_channel(self, tools):
        result = await tools["list_channels"]()

        assert result.startswith("Retrieved 8 channels:\n")
        assert "- voice channel: Lounge (ID: 310)" in result
        assert "- forum channel: help-forum (ID: 400)" in result

    @pytest.mark.asyncio
    async def test_empty_guild(self):
        fake = FakeDiscordClient(guilds=[make_guild(guild_id=5, name="Empty")])
        collector = ToolCollector()
        register_channel_tools(collector, build_context(fake, default_scope="5"))

        with pytest.raises(EntityNotFoundError, match="No channels found in server: Empty"):
            await collector["list_channels"]()
