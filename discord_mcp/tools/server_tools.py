"""Server Information Tools.

This module contains MCP tools for inspecting a Discord server (guild):
- get_server_info: Summary of a server's owner, size, channels and boosts
"""

from mcp.server import FastMCP

from ..context import DiscordContext
from ..helpers import get_guild
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors


def register_server_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register server information tools with the MCP server."""

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def get_server_info(guild_id: str | None = None) -> str:
        """Get detailed information about a Discord server.

        Parameters:
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: Server name, ID, owner, creation date, member count, channel
            counts by type, and boost count and tier.
        """
        guild = await get_guild(context, guild_id)
        owner = guild.owner
        if owner is None:
            owner = await guild.fetch_member(guild.owner_id)

        return (
            f"Server Name: {guild.name}\n"
            f"Server ID: {guild.id}\n"
            f"Owner: {owner.name}\n"
            f"Created On: {guild.created_at.date().isoformat()}\n"
            f"Members: {guild.member_count}\n"
            "Channels:\n"
            f" - Text: {len(guild.text_channels)}\n"
            f" - Voice: {len(guild.voice_channels)}\n"
            f" - Categories: {len(guild.categories)}\n"
            "Boosts:\n"
            f" - Count: {guild.premium_subscription_count}\n"
            f" - Tier: {guild.premium_tier}"
        )
