"""Unit tests for discord.py error translation."""

import inspect

import discord
import pytest

from discord_mcp.exceptions import EntityNotFoundError
from discord_mcp.exceptions import InvalidArgumentError
from discord_mcp.exceptions import UpstreamError
from discord_mcp.utils.decorators import translate_discord_errors

from ..shared.discord_fakes import forbidden
from ..shared.discord_fakes import not_found


@pytest.fixture(autouse=True)
def quiet_error_log(mocker):
    return mocker.patch("discord_mcp.utils.decorators.log_structured_error")


def _raising(exc):
    @translate_discord_errors
    async def delete_channel(channel_id: str) -> str:
        raise exc

    return delete_channel


class TestTranslateDiscordErrors:
    @pytest.mark.asyncio
    async def test_result_passes_through(self):
        @translate_discord_errors
        async def ok(value: str) -> str:
            return value.upper()

        assert await ok("done") == "DONE"

    @pytest.mark.asyncio
    async def test_forbidden_becomes_upstream_error(self, quiet_error_log):
        with pytest.raises(UpstreamError) as exc_info:
            await _raising(forbidden("Missing Permissions"))("1")

        error = exc_info.value
        assert error.status == 403
        assert error.operation == "delete_channel"
        assert "Missing Permissions" in error.message
        assert isinstance(error.__cause__, discord.Forbidden)
        assert quiet_error_log.call_args.kwargs["exception"] is error

    @pytest.mark.asyncio
    async def test_not_found_becomes_entity_not_found(self):
        with pytest.raises(EntityNotFoundError, match="Unknown Channel"):
            await _raising(not_found("Unknown Channel"))("1")

    @pytest.mark.asyncio
    async def test_other_discord_errors_become_upstream_error(self):
        with pytest.raises(UpstreamError, match="gateway lost"):
            await _raising(discord.ClientException("gateway lost"))("1")

    @pytest.mark.asyncio
    async def test_tool_errors_are_reraised_unchanged(self):
        original = InvalidArgumentError("channel_id cannot be null or empty", field="channel_id")

        with pytest.raises(InvalidArgumentError) as exc_info:
            await _raising(original)("")

        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_other_exceptions_are_not_wrapped(self):
        with pytest.raises(KeyError):
            await _raising(KeyError("bug"))("1")

    def test_keeps_tool_signature(self):
        assert list(inspect.signature(_raising(None)).parameters) == ["channel_id"]
