"""Lazily started, shared Discord client.

``LazyClientHandle`` owns the single ``discord.Client`` used by every tool.
The client is built on the first ``get()`` call, started in a background task
and only handed out once the gateway reports ready. A failed start is final:
later calls raise ``ConfigurationError`` again instead of reconnecting with a
credential that already failed. A lost gateway connection fails the handle the
same way, and ``close()`` at process shutdown is final too.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable

import discord

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ClientState(str, Enum):
    """Lifecycle of the shared client."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


def create_intents() -> discord.Intents:
    intents = discord.Intents.default()
    # Member lookups by name need the privileged members intent
    intents.members = True
    return intents


def default_client_factory() -> discord.Client:
    return discord.Client(intents=create_intents())


class LazyClientHandle:
    """Build the Discord client once, on first demand, and share it."""

    def __init__(
        self,
        token: str | None,
        *,
        client_factory: Callable[[], discord.Client] = default_client_factory,
        ready_timeout: float = 60.0,
    ) -> None:
        self._token = (token or "").strip()
        self._client_factory = client_factory
        self._ready_timeout = ready_timeout
        self._lock = asyncio.Lock()
        self._state = ClientState.UNINITIALIZED
        self._client: discord.Client | None = None
        self._runner: asyncio.Task | None = None
        self._failure: ConfigurationError | None = None

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ClientState.READY

    async def get(self) -> discord.Client:
        """Return the ready client, starting it if this is the first call.

        Raises:
            ConfigurationError: If no token is configured, the client could not
                connect, or an earlier start already failed.
        """
        if self._state is ClientState.READY:
            return self._client

        async with self._lock:
            if self._state is ClientState.READY:
                return self._client
            if self._state is ClientState.CLOSED:
                raise ConfigurationError("Discord client has been closed")
            if self._state is ClientState.FAILED:
                raise ConfigurationError(
                    f"Discord client is unavailable: {self._failure.message}",
                    details=self._failure.details,
                ) from self._failure

            self._state = ClientState.INITIALIZING
            try:
                client = await self._connect()
            except ConfigurationError as e:
                self._fail(e)
                raise
            except Exception as e:
                error = ConfigurationError(
                    f"Failed to initialize Discord client: {e}",
                    details={"exception_type": type(e).__name__},
                )
                self._fail(error)
                raise error from e

            self._client = client
            self._state = ClientState.READY
            self._runner.add_done_callback(self._on_runner_done)
            logger.info("Discord client ready as %s", client.user)
            return client

    def _fail(self, error: ConfigurationError) -> None:
        self._state = ClientState.FAILED
        self._failure = error
        logger.error("Discord client unavailable: %s", error.message)

    async def _connect(self) -> discord.Client:
        if not self._token:
            raise ConfigurationError("DISCORD_TOKEN environment variable is not set")

        client = self._client_factory()
        ready = asyncio.Event()

        async def on_ready() -> None:
            ready.set()

        client.event(on_ready)

        self._runner = asyncio.create_task(client.start(self._token), name="discord-mcp-client")
        waiter = asyncio.create_task(ready.wait())
        try:
            done, _ = await asyncio.wait(
                {self._runner, waiter},
                timeout=self._ready_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if not waiter.done():
                waiter.cancel()

        if waiter in done:
            return client

        runner_error = None
        if self._runner in done and not self._runner.cancelled():
            runner_error = self._runner.exception()
        await self._teardown(client)

        if runner_error is not None:
            raise runner_error
        if done:
            raise ConfigurationError("Discord connection closed before the client became ready")
        raise ConfigurationError(
            f"Timed out after {self._ready_timeout:g}s waiting for Discord to become ready"
        )

    async def _teardown(self, client: discord.Client) -> None:
        runner, self._runner = self._runner, None
        if not client.is_closed():
            await client.close()
        if runner is not None and not runner.done():
            runner.cancel()
        if runner is not None:
            try:
                await runner
            except asyncio.CancelledError:
                pass
            except Exception:
                # The start error was already reported; this is cleanup only
                logger.debug("Discord client task ended with error", exc_info=True)

    def _on_runner_done(self, runner: asyncio.Task) -> None:
        """Mark the handle failed when the gateway task ends while the client is in use."""
        if self._state is not ClientState.READY or runner.cancelled():
            return
        error = runner.exception()
        if error is not None:
            logger.error("Discord client task ended with error", exc_info=error)
            reason = f"Discord connection lost: {error}"
        else:
            reason = "Discord connection closed unexpectedly"
        self._fail(ConfigurationError(reason))

    async def close(self) -> None:
        """Close the client at process shutdown. A closed handle cannot be reopened."""
        async with self._lock:
            self._state = ClientState.CLOSED
            client, self._client = self._client, None
            if client is not None:
                await self._teardown(client)
                logger.info("Discord client closed")
