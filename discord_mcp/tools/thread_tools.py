"""Thread Management Tools.

This module contains MCP tools for threads in text channels and forums:
- create_thread: Start a thread, optionally from an existing message
- send_thread_message: Post a message in a thread
- archive_thread / lock_thread / pin_thread: Toggle a thread's state flags
- add_thread_member / remove_thread_member: Manage thread membership
- list_all_threads: List the active threads of a server
- find_thread: Find an active thread by name
- get_thread_info: Show a thread's details
- read_thread_messages: Read the most recent messages of a thread
"""

import discord
from mcp.server import FastMCP

from .. import lookup
from ..context import DiscordContext
from ..helpers import fetch_message
from ..helpers import format_message
from ..helpers import format_thread
from ..helpers import get_channel
from ..helpers import get_guild
from ..helpers import get_user
from ..helpers import join_names
from ..helpers import read_history
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors
from ..utils.validation import check_auto_archive
from ..utils.validation import check_count
from ..utils.validation import parse_bool
from ..utils.validation import require

DEFAULT_THREAD_MESSAGE_COUNT = 50


def register_thread_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register thread management tools with the MCP server."""

    async def _get_thread(thread_id: str) -> discord.Thread:
        return await get_channel(context, thread_id, field="thread_id", expected=discord.Thread, kind="thread")

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def create_thread(
        channel_id: str,
        thread_name: str,
        message_id: str | None = None,
        auto_archive_minutes: int | None = None,
    ) -> str:
        """Create a new thread in a text channel.

        Parameters:
            channel_id (str): ID of the text channel
            thread_name (str): Name of the thread
            message_id (str | None): ID of a message to start the thread from
            auto_archive_minutes (int | None): Inactivity before archiving: 60, 1440, 4320 or 10080

        Returns:
            str: The new thread's ID and name and its parent channel.
        """
        require(channel_id, "channel_id")
        require(thread_name, "thread_name")
        duration = check_auto_archive(auto_archive_minutes)
        channel = await get_channel(context, channel_id, expected=discord.TextChannel, kind="text channel")

        options = {}
        if duration is not None:
            options["auto_archive_duration"] = duration
        if message_id:
            starter = await fetch_message(channel, message_id)
            thread = await starter.create_thread(name=thread_name, **options)
        else:
            thread = await channel.create_thread(name=thread_name, type=discord.ChannelType.public_thread, **options)

        return (
            "Created thread successfully!\n"
            f"Thread ID: {thread.id}\n"
            f"Thread Name: {thread.name}\n"
            f"Parent Channel: {channel.name}"
        )

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def send_thread_message(thread_id: str, message: str) -> str:
        """Send a message to a thread.

        Parameters:
            thread_id (str): ID of the thread
            message (str): Message content
        """
        require(thread_id, "thread_id")
        require(message, "message")
        thread = await _get_thread(thread_id)
        sent = await thread.send(message)
        return f"Message sent to thread '{thread.name}'\nMessage link: {sent.jump_url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def archive_thread(thread_id: str, archive: bool) -> str:
        """Archive or unarchive a thread.

        Parameters:
            thread_id (str): ID of the thread
            archive (bool): True to archive, False to unarchive
        """
        require(thread_id, "thread_id")
        archive = parse_bool(archive, "archive")
        thread = await _get_thread(thread_id)
        await thread.edit(archived=archive)
        return f"{'Archived' if archive else 'Unarchived'} thread: {thread.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def lock_thread(thread_id: str, lock: bool) -> str:
        """Lock or unlock a thread. Only moderators can post in a locked thread.

        Parameters:
            thread_id (str): ID of the thread
            lock (bool): True to lock, False to unlock
        """
        require(thread_id, "thread_id")
        lock = parse_bool(lock, "lock")
        thread = await _get_thread(thread_id)
        await thread.edit(locked=lock)
        return f"{'Locked' if lock else 'Unlocked'} thread: {thread.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def pin_thread(thread_id: str, pin: bool) -> str:
        """Pin or unpin a forum post.

        Parameters:
            thread_id (str): ID of the forum thread
            pin (bool): True to pin, False to unpin
        """
        require(thread_id, "thread_id")
        pin = parse_bool(pin, "pin")
        thread = await _get_thread(thread_id)
        await thread.edit(pinned=pin)
        return f"{'Pinned' if pin else 'Unpinned'} thread: {thread.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def add_thread_member(thread_id: str, user_id: str) -> str:
        """Add a user to a thread.

        Parameters:
            thread_id (str): ID of the thread
            user_id (str): ID of the user to add
        """
        require(thread_id, "thread_id")
        require(user_id, "user_id")
        thread = await _get_thread(thread_id)
        user = await get_user(context, user_id)
        await thread.add_user(user)
        return f"Added user {user.name} to thread: {thread.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def remove_thread_member(thread_id: str, user_id: str) -> str:
        """Remove a user from a thread.

        Parameters:
            thread_id (str): ID of the thread
            user_id (str): ID of the user to remove
        """
        require(thread_id, "thread_id")
        require(user_id, "user_id")
        thread = await _get_thread(thread_id)
        user = await get_user(context, user_id)
        await thread.remove_user(user)
        return f"Removed user {user.name} from thread: {thread.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def list_all_threads(guild_id: str | None = None) -> str:
        """List all active threads in a server.

        Parameters:
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: One line per thread with its name, ID, parent channel and
            ARCHIVED, LOCKED or PINNED markers.
        """
        guild = await get_guild(context, guild_id)
        threads = await guild.active_threads()
        if not threads:
            return f"No active threads found in server: {guild.name}"

        lines = "\n".join(format_thread(t, with_parent=True) for t in threads)
        return f"Active threads in {guild.name} ({len(threads)} threads):\n{lines}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def find_thread(thread_name: str, guild_id: str | None = None) -> str:
        """Find an active thread by name.

        Parameters:
            thread_name (str): Thread name, matched case-insensitively
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
        """
        require(thread_name, "thread_name")
        guild = await get_guild(context, guild_id)
        thread = lookup.threads.find_by_name(guild, thread_name)
        return f"Retrieved thread:\n{format_thread(thread, with_parent=True)}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def get_thread_info(thread_id: str) -> str:
        """Get detailed information about a thread.

        Parameters:
            thread_id (str): ID of the thread
        """
        require(thread_id, "thread_id")
        thread = await _get_thread(thread_id)
        parent = thread.parent
        # Discord only records creation time for threads made after January 2022
        created_at = thread.created_at or discord.utils.snowflake_time(thread.id)

        info = [
            "Thread Information:",
            f"Name: {thread.name}",
            f"ID: {thread.id}",
            f"Parent Channel: {parent.name if parent is not None else 'unknown channel'}",
            f"Owner ID: {thread.owner_id}",
            f"Created: {created_at.isoformat()}",
            f"Member Count: {thread.member_count}",
            f"Message Count: {thread.message_count}",
            f"Archived: {thread.archived}",
            f"Locked: {thread.locked}",
            f"Pinned: {thread.flags.pinned}",
            f"Auto-archive duration: {thread.auto_archive_duration} minutes",
        ]
        if thread.applied_tags:
            info.append(f"Applied Tags: {join_names(thread.applied_tags)}")
        return "\n".join(info)

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def read_thread_messages(thread_id: str, count: int | None = None) -> str:
        """Read the most recent messages of a thread.

        Parameters:
            thread_id (str): ID of the thread
            count (int | None): Number of messages to read, 1 to 100. Defaults to 50.
        """
        require(thread_id, "thread_id")
        limit = check_count(count, DEFAULT_THREAD_MESSAGE_COUNT)
        thread = await _get_thread(thread_id)
        messages = await read_history(thread, limit)
        if not messages:
            return f"No messages found in thread: {thread.name}"

        lines = "\n".join(format_message(m) for m in messages)
        return f"Retrieved {len(messages)} messages from thread '{thread.name}':\n\n{lines}"
