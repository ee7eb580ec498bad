"""Webhook Tools.

This module contains MCP tools for channel webhooks:
- create_webhook: Create a webhook on a channel and return its URL
- delete_webhook: Delete a webhook by ID
- list_webhooks: List the webhooks of a channel
- find_webhook: Find one of a channel's webhooks by name
- send_webhook_message: Post a message through a webhook URL
"""

import re

import discord
from mcp.server import FastMCP

from .. import lookup
from ..context import DiscordContext
from ..exceptions import EntityNotFoundError
from ..exceptions import InvalidArgumentError
from ..helpers import format_webhook
from ..helpers import get_channel
from ..logger_config import log_mcp_call
from ..utils.decorators import translate_discord_errors
from ..utils.validation import parse_snowflake
from ..utils.validation import require

WEBHOOK_CHANNEL_TYPES = (discord.TextChannel, discord.ForumChannel, discord.VoiceChannel)
# Shape check only; discord.Webhook.from_url applies the exact ID and token rules
WEBHOOK_URL_PATTERN = re.compile(r"discord(?:app)?\.com/api/webhooks/\d+/[\w.\-]+")


def _invalid_url(webhook_url: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        "webhook_url is not a valid Discord webhook URL", field="webhook_url", value=webhook_url
    )


def register_webhook_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    """Register webhook tools with the MCP server."""

    async def _channel_webhooks(channel_id: str) -> list[discord.Webhook]:
        channel = await get_channel(context, channel_id, expected=WEBHOOK_CHANNEL_TYPES)
        return await channel.webhooks()

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def create_webhook(channel_id: str, name: str) -> str:
        """Create a new webhook on a channel.

        Parameters:
            channel_id (str): ID of the channel
            name (str): Name of the webhook

        Returns:
            str: Confirmation with the webhook URL.
        """
        require(channel_id, "channel_id")
        require(name, "name")
        channel = await get_channel(context, channel_id, expected=WEBHOOK_CHANNEL_TYPES)
        webhook = await channel.create_webhook(name=name)
        return f"Created {webhook.name} webhook: {webhook.url}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def delete_webhook(webhook_id: str) -> str:
        """Delete a webhook.

        Parameters:
            webhook_id (str): ID of the webhook
        """
        snowflake = parse_snowflake(webhook_id, "webhook_id")
        client = await context.client.get()
        try:
            webhook = await client.fetch_webhook(snowflake)
        except discord.NotFound as e:
            raise EntityNotFoundError("webhook", webhook_id, f"Webhook not found by webhook_id: {webhook_id}") from e
        await webhook.delete()
        return f"Deleted {webhook.name} webhook"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def list_webhooks(channel_id: str) -> str:
        """List the webhooks of a channel.

        Parameters:
            channel_id (str): ID of the channel

        Returns:
            str: One line per webhook with its ID, name and URL.
        """
        require(channel_id, "channel_id")
        webhooks = await _channel_webhooks(channel_id)
        if not webhooks:
            raise EntityNotFoundError("webhook", channel_id, f"No webhooks found in channel: {channel_id}")
        lines = "\n".join(format_webhook(w) for w in webhooks)
        return f"**Retrieved {len(webhooks)} webhooks:** \n{lines}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def find_webhook(channel_id: str, webhook_name: str) -> str:
        """Find a webhook of a channel by name.

        Parameters:
            channel_id (str): ID of the channel
            webhook_name (str): Webhook name, matched case-insensitively
        """
        require(channel_id, "channel_id")
        require(webhook_name, "webhook_name")
        webhooks = await _channel_webhooks(channel_id)
        webhook = lookup.webhooks.find_by_name(webhooks, webhook_name)
        return f"Retrieved webhook:\n{format_webhook(webhook)}"

    @mcp_server.tool()
    @log_mcp_call
    @translate_discord_errors
    async def send_webhook_message(webhook_url: str, message: str) -> str:
        """Send a message through a webhook.

        Parameters:
            webhook_url (str): Full webhook URL as returned by create_webhook
            message (str): Message content
        """
        require(webhook_url, "webhook_url")
        require(message, "message")
        if not WEBHOOK_URL_PATTERN.search(webhook_url):
            raise _invalid_url(webhook_url)
        client = await context.client.get()
        try:
            webhook = discord.Webhook.from_url(webhook_url, client=client)
        except ValueError as e:
            raise _invalid_url(webhook_url) from e
        sent = await webhook.send(content=message, wait=True)
        return f"Message sent successfully. Message link: {sent.jump_url}"
