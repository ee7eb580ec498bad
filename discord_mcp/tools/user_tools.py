"""User and Private Message Tools.

This module contains MCP tools for server members and direct messages:
- get_user_id_by_name: Resolve a username (optionally ``name#discriminator``) to a user ID
- send_private_message: Send a direct message to a user
- edit_private_message: Edit a direct message sent by the bot
- delete_private_message: Delete a direct message sent by the bot
- read_private_messages: Read recent direct messages with a user
"""

from mcp.server import FastMCP

from .. import lookup
from ..context import DiscordContext
from ..helpers import fetch_message
from ..helpers import format_message_history
from ..helpers import get_guild
from ..helpers import get_user
from ..helpers import read_history
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors
from ..utils.validation import MAX_MESSAGE_COUNT
from ..utils.validation import check_count
from ..utils.validation import require


def register_user_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register user and private message tools with the MCP server."""

    async def _open_dm(user_id: str):
        user = await get_user(context, user_id)
        return await user.create_dm()

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def get_user_id_by_name(username: str, guild_id: str | None = None) -> str:
        """Get a Discord user's ID by username in a server.

        Parameters:
            username (str): Username, or ``username#discriminator`` to pick one of several matches
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: The user's ID. Fails listing every ``name#discriminator`` and ID
            when several members share the username.
        """
        require(username, "username")
        guild = await get_guild(context, guild_id)
        member = lookup.users.find_by_name(guild, username)
        return str(member.id)

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def send_private_message(user_id: str, message: str) -> str:
        """Send a private message to a user.

        Parameters:
            user_id (str): ID of the recipient
            message (str): Message content
        """
        require(user_id, "user_id")
        require(message, "message")
        channel = await _open_dm(user_id)
        sent = await channel.send(message)
        return f"Message sent successfully. Message link: {sent.jump_url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def edit_private_message(user_id: str, message_id: str, new_message: str) -> str:
        """Edit a private message sent to a user.

        Parameters:
            user_id (str): ID of the recipient
            message_id (str): ID of the message to edit
            new_message (str): Replacement content
        """
        require(user_id, "user_id")
        require(message_id, "message_id")
        require(new_message, "new_message")
        channel = await _open_dm(user_id)
        target = await fetch_message(channel, message_id)
        edited = await target.edit(content=new_message)
        return f"Message edited successfully. Message link: {edited.jump_url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def delete_private_message(user_id: str, message_id: str) -> str:
        """Delete a private message sent to a user.

        Parameters:
            user_id (str): ID of the recipient
            message_id (str): ID of the message to delete
        """
        require(user_id, "user_id")
        require(message_id, "message_id")
        channel = await _open_dm(user_id)
        target = await fetch_message(channel, message_id)
        await target.delete()
        return "Message deleted successfully"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def read_private_messages(user_id: str, count: int | None = None) -> str:
        """Read recent private messages exchanged with a user.

        Parameters:
            user_id (str): ID of the user
            count (int | None): Number of messages to read, 1 to 100. Defaults to 100.
        """
        require(user_id, "user_id")
        limit = check_count(count, MAX_MESSAGE_COUNT)
        channel = await _open_dm(user_id)
        messages = await read_history(channel, limit)
        return format_message_history(messages)
