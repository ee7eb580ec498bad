"""Category Management Tools.

This module contains MCP tools for managing channel categories:
- create_category: Create a new category
- delete_category: Delete a category by ID or name
- find_category: Find a category by name
- list_channels_in_category: List the channels inside a category
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


def register_category_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register category management tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def create_category(name: str, guild_id: str | None = None) -> str:
        """Create a new category for channels.

        Parameters:
            name (str): Name of the new category
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
        """
        require(name, "name")
        guild = await get_guild(context, guild_id)
        category = await guild.create_category(name)
        return f"Created new category: {category.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def delete_category(category_id: str, guild_id: str | None = None) -> str:
        """Delete a category.

        Only the category is removed; Discord moves its channels out of it.

        Parameters:
            category_id (str): ID or name of the category
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
        """
        require(category_id, "category_id")
        guild = await get_guild(context, guild_id)
        category = lookup.categories.find_by_id_or_name(guild, category_id)
        await category.delete()
        return f"Deleted category: {category.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def find_category(category_name: str, guild_id: str | None = None) -> str:
        """Find a category ID using its name.

        Parameters:
            category_name (str): Category name, matched case-insensitively
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: The category's name and ID. Fails listing every match when
            several categories share the name.
        """
        require(category_name, "category_name")
        guild = await get_guild(context, guild_id)
        category = lookup.categories.find_by_name(guild, category_name)
        return f"Retrieved category: {category.name}, with ID: {category.id}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def list_channels_in_category(category_id: str, guild_id: str | None = None) -> str:
        """List all channels in a category.

        Parameters:
            category_id (str): ID or name of the category
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
        """
        require(category_id, "category_id")
        guild = await get_guild(context, guild_id)
        category = lookup.categories.find_by_id_or_name(guild, category_id)
        channels = list(category.channels)
        if not channels:
            raise EntityNotFoundError(
                "channel", str(category.id), f"Category {category.name} contains no channels"
            )
        return format_channel_list(channels)
