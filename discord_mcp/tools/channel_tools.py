"""Channel Management Tools.

This module contains MCP tools for managing the channels of a server:
- create_text_channel: Create a text channel, optionally inside a category
- delete_channel: Delete a channel by ID or name
- find_channel: Find a channel by name
- list_channels: List every channel in a server

Channels and categories given by name are resolved case-insensitively. A name
shared by several channels is rejected with the list of matching IDs.
"""

from mcp.server import FastMCP

from .. import lookup
from ..context import DiscordContext
from ..exceptions import EntityNotFoundError
from ..helpers import format_channel_list
from ..helpers import get_guild
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors
from ..utils.validation import require


def register_channel_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register channel management tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def create_text_channel(name: str, guild_id: str | None = None, category_id: str | None = None) -> str:
        """Create a new text channel.

        Parameters:
            name (str): Name of the new channel
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
            category_id (str | None): ID or name of the category to create the channel in

        Returns:
            str: The created channel's name and ID, and its category when one was given.
        """
        require(name, "name")
        guild = await get_guild(context, guild_id)

        if category_id:
            category = lookup.categories.find_by_id_or_name(guild, category_id)
            channel = await guild.create_text_channel(name, category=category)
            return f"Created new text channel: {channel.name} (ID: {channel.id}) in category: {category.name}"

        channel = await guild.create_text_channel(name)
        return f"Created new text channel: {channel.name} (ID: {channel.id})"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def delete_channel(channel_id: str, guild_id: str | None = None) -> str:
        """Delete a channel.

        Parameters:
            channel_id (str): ID or name of the channel to delete
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: Confirmation naming the deleted channel and its type.
        """
        require(channel_id, "channel_id")
        guild = await get_guild(context, guild_id)
        channel = lookup.channels.find_by_id_or_name(guild, channel_id)
        await channel.delete()
        return f"Deleted {channel.type} channel: {channel.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def find_channel(channel_name: str, guild_id: str | None = None) -> str:
        """Find a channel by name in a server.

        Parameters:
            channel_name (str): Channel name, matched case-insensitively
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: The channel's type, name and ID. Fails listing every match when
            several channels share the name.
        """
        require(channel_name, "channel_name")
        guild = await get_guild(context, guild_id)
        channel = lookup.channels.find_by_name(guild, channel_name)
        return f"Retrieved {channel.type} channel: {channel.name} (ID: {channel.id})"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def list_channels(guild_id: str | None = None) -> str:
        """List all channels in a server.

        Parameters:
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: One line per channel with its type, name and ID.
        """
        guild = await get_guild(context, guild_id)
        channels = list(guild.channels)
        if not channels:
            raise EntityNotFoundError("channel", str(guild.id), f"No channels found in server: {guild.name}")
        return format_channel_list(channels)
