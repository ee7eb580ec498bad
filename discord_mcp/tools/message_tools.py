"""Channel Message Tools.

This module contains MCP tools for messages in text channels and threads:
- send_message: Send a message and return its link
- edit_message: Replace the content of a message
- delete_message: Delete a message
- read_messages: Read the most recent messages
- add_reaction: React to a message with an emoji
- remove_reaction: Remove the bot's own reaction from a message
"""

from discord.abc import Messageable
from mcp.server import FastMCP

from ..context import DiscordContext
from ..helpers import fetch_message
from ..helpers import format_message_history
from ..helpers import get_channel
from ..helpers import read_history
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors
from ..utils.validation import MAX_MESSAGE_COUNT
from ..utils.validation import check_count
from ..utils.validation import require


def register_message_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register channel message tools with the MCP server."""

    async def _get_text_channel(channel_id: str):
        return await get_channel(context, channel_id, expected=Messageable, kind="text channel")

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def send_message(channel_id: str, message: str) -> str:
        """Send a message to a text channel.

        Parameters:
            channel_id (str): ID of the channel or thread
            message (str): Message content

        Returns:
            str: Confirmation with a link to the sent message.
        """
        require(channel_id, "channel_id")
        require(message, "message")
        channel = await _get_text_channel(channel_id)
        sent = await channel.send(message)
        return f"Message sent successfully. Message link: {sent.jump_url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def edit_message(channel_id: str, message_id: str, new_message: str) -> str:
        """Edit a message sent by the bot.

        Parameters:
            channel_id (str): ID of the channel or thread holding the message
            message_id (str): ID of the message to edit
            new_message (str): Replacement content
        """
        require(channel_id, "channel_id")
        require(message_id, "message_id")
        require(new_message, "new_message")
        channel = await _get_text_channel(channel_id)
        target = await fetch_message(channel, message_id)
        edited = await target.edit(content=new_message)
        return f"Message edited successfully. Message link: {edited.jump_url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def delete_message(channel_id: str, message_id: str) -> str:
        """Delete a message.

        Parameters:
            channel_id (str): ID of the channel or thread holding the message
            message_id (str): ID of the message to delete
        """
        require(channel_id, "channel_id")
        require(message_id, "message_id")
        channel = await _get_text_channel(channel_id)
        target = await fetch_message(channel, message_id)
        await target.delete()
        return "Message deleted successfully"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def read_messages(channel_id: str, count: int | None = None) -> str:
        """Read the most recent messages of a channel.

        Parameters:
            channel_id (str): ID of the channel or thread
            count (int | None): Number of messages to read, 1 to 100. Defaults to 100.

        Returns:
            str: One line per message, newest first, with ID, author, timestamp and content.
        """
        require(channel_id, "channel_id")
        limit = check_count(count, MAX_MESSAGE_COUNT)
        channel = await _get_text_channel(channel_id)
        messages = await read_history(channel, limit)
        return format_message_history(messages)

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def add_reaction(channel_id: str, message_id: str, emoji: str) -> str:
        """Add a reaction to a message.

        Parameters:
            channel_id (str): ID of the channel or thread holding the message
            message_id (str): ID of the message
            emoji (str): Unicode emoji or custom emoji in ``<:name:id>`` form
        """
        require(channel_id, "channel_id")
        require(message_id, "message_id")
        require(emoji, "emoji")
        channel = await _get_text_channel(channel_id)
        target = await fetch_message(channel, message_id)
        await target.add_reaction(emoji)
        return f"Added reaction successfully. Message link: {target.jump_url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def remove_reaction(channel_id: str, message_id: str, emoji: str) -> str:
        """Remove the bot's own reaction from a message.

        Parameters:
            channel_id (str): ID of the channel or thread holding the message
            message_id (str): ID of the message
            emoji (str): The emoji to remove
        """
        require(channel_id, "channel_id")
        require(message_id, "message_id")
        require(emoji, "emoji")
        channel = await _get_text_channel(channel_id)
        target = await fetch_message(channel, message_id)
        client = await context.client.get()
        await target.remove_reaction(emoji, client.user)
        return f"Removed reaction successfully. Message link: {target.jump_url}"
