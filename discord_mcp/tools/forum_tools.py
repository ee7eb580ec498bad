"""Forum Channel Tools.

This module contains MCP tools for forum channels and their posts:
- create_forum_channel: Create a forum channel, optionally in a category
- create_forum_post: Start a new post (thread) in a forum, with optional tags
- list_forum_channels: List the forum channels of a server
- find_forum_channel: Find a forum channel by name and show its tags
- delete_forum_channel: Delete a forum channel
- add_forum_tag: Add a tag to a forum's available tags
- list_forum_threads: List the active posts of a forum
"""

import discord
from mcp.server import FastMCP

from .. import lookup
from ..context import DiscordContext
from ..exceptions import InvalidArgumentError
from ..helpers import format_thread
from ..helpers import get_channel
from ..helpers import get_guild
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors
from ..utils.validation import parse_bool
from ..utils.validation import require
from ..utils.validation import split_names

MAX_FORUM_TAGS = 20


def _select_tags(forum: discord.ForumChannel, tag_names: str | None) -> list[discord.ForumTag]:
    """Map comma-separated tag names onto the forum's tags, case-insensitively."""
    available = {tag.name.lower(): tag for tag in forum.available_tags}
    selected = []
    unknown = []
    for name in split_names(tag_names):
        tag = available.get(name.lower())
        if tag is None:
            unknown.append(name)
        elif tag not in selected:
            selected.append(tag)
    if unknown:
        choices = ", ".join(tag.name for tag in forum.available_tags) or "none"
        raise InvalidArgumentError(
            f"Unknown tag(s) for forum {forum.name}: {', '.join(unknown)}. Available tags: {choices}",
            field="tag_names",
            value=tag_names,
        )
    return selected


def _describe_forum(forum: discord.ForumChannel) -> str:
    lines = [f"Found forum channel: {forum.name} (ID: {forum.id})"]
    if forum.topic:
        lines.append(f"Topic: {forum.topic}")
    if forum.available_tags:
        lines.append("Available tags:")
        for tag in forum.available_tags:
            lines.append(f"- {tag.name}" + (" (moderated)" if tag.moderated else ""))
    return "\n".join(lines)


def register_forum_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register forum channel tools with the MCP server."""

    async def _get_forum(forum_channel_id: str) -> discord.ForumChannel:
        return await get_channel(
            context, forum_channel_id, field="forum_channel_id", expected=discord.ForumChannel, kind="forum channel"
        )

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def create_forum_channel(
        name: str,
        guild_id: str | None = None,
        category_id: str | None = None,
        topic: str | None = None,
    ) -> str:
        """Create a new forum channel.

        Parameters:
            name (str): Name of the forum channel
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
            category_id (str | None): ID or name of the category to create the forum in
            topic (str | None): Topic (guidelines) shown at the top of the forum
        """
        require(name, "name")
        guild = await get_guild(context, guild_id)

        options = {}
        if topic:
            options["topic"] = topic
        category = None
        if category_id:
            category = lookup.categories.find_by_id_or_name(guild, category_id)
            options["category"] = category

        forum = await guild.create_forum(name, **options)
        result = f"Created new forum channel: {forum.name} (ID: {forum.id})"
        if category is not None:
            result += f" in category: {category.name}"
        return result

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def create_forum_post(
        forum_channel_id: str,
        title: str,
        content: str,
        tag_names: str | None = None,
    ) -> str:
        """Create a new post (thread) in a forum channel.

        Parameters:
            forum_channel_id (str): ID of the forum channel
            title (str): Title of the post
            content (str): Content of the first message
            tag_names (str | None): Comma-separated tag names to apply, matched case-insensitively

        Returns:
            str: The new thread's ID and name and a link to its first message.
        """
        require(forum_channel_id, "forum_channel_id")
        require(title, "title")
        require(content, "content")
        forum = await _get_forum(forum_channel_id)
        tags = _select_tags(forum, tag_names)

        thread, message = await forum.create_thread(name=title, content=content, applied_tags=tags)
        return (
            "Created forum post successfully!\n"
            f"Thread ID: {thread.id}\n"
            f"Thread Name: {thread.name}\n"
            f"Jump URL: {message.jump_url}"
        )

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def list_forum_channels(guild_id: str | None = None) -> str:
        """List all forum channels in a server.

        Parameters:
            guild_id (str | None): Discord server ID. Falls back to the configured default server.
        """
        guild = await get_guild(context, guild_id)
        forums = list(guild.forums)
        if not forums:
            return "No forum channels found in this server"

        lines = [f"- {f.name} (ID: {f.id})" + (f" - {f.topic}" if f.topic else "") for f in forums]
        return f"Retrieved {len(forums)} forum channels:\n" + "\n".join(lines)

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def find_forum_channel(forum_name: str, guild_id: str | None = None) -> str:
        """Find a forum channel by name.

        Parameters:
            forum_name (str): Forum channel name, matched case-insensitively
            guild_id (str | None): Discord server ID. Falls back to the configured default server.

        Returns:
            str: The forum's name, ID, topic and available tags. Fails listing
            every match when several forums share the name.
        """
        require(forum_name, "forum_name")
        guild = await get_guild(context, guild_id)
        forum = lookup.forums.find_by_name(guild, forum_name)
        return _describe_forum(forum)

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def delete_forum_channel(forum_channel_id: str) -> str:
        """Delete a forum channel.

        Parameters:
            forum_channel_id (str): ID of the forum channel
        """
        require(forum_channel_id, "forum_channel_id")
        forum = await _get_forum(forum_channel_id)
        await forum.delete()
        return f"Deleted forum channel: {forum.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def add_forum_tag(
        forum_channel_id: str,
        tag_name: str,
        emoji: str | None = None,
        moderated: bool = False,
    ) -> str:
        """Add a tag to a forum channel.

        Parameters:
            forum_channel_id (str): ID of the forum channel
            tag_name (str): Name of the new tag
            emoji (str | None): Emoji shown next to the tag
            moderated (bool): Whether only moderators can apply the tag
        """
        require(forum_channel_id, "forum_channel_id")
        require(tag_name, "tag_name")
        moderated = parse_bool(moderated, "moderated", default=False)
        forum = await _get_forum(forum_channel_id)

        tags = list(forum.available_tags)
        if len(tags) >= MAX_FORUM_TAGS:
            raise InvalidArgumentError(
                f"Forum channel already has maximum number of tags ({MAX_FORUM_TAGS})", field="tag_name"
            )
        if any(tag.name.lower() == tag_name.lower() for tag in tags):
            raise InvalidArgumentError(
                f"Forum channel {forum.name} already has a tag named {tag_name}", field="tag_name", value=tag_name
            )

        tags.append(discord.ForumTag(name=tag_name, emoji=emoji or None, moderated=moderated))
        await forum.edit(available_tags=tags)
        return f"Added tag '{tag_name}' to forum channel: {forum.name}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def list_forum_threads(forum_channel_id: str) -> str:
        """List all active posts (threads) in a forum channel.

        Parameters:
            forum_channel_id (str): ID of the forum channel
        """
        require(forum_channel_id, "forum_channel_id")
        forum = await _get_forum(forum_channel_id)
        threads = list(forum.threads)
        if not threads:
            return f"No active threads found in forum: {forum.name}"

        lines = "\n".join(format_thread(t) for t in threads)
        return f"Active threads in {forum.name} ({len(threads)} threads):\n{lines}"
