"""Custom exception hierarchy for the Discord MCP system.

Every error a tool can raise derives from ``DiscordMCPError`` so the MCP layer
can report a readable message while logs keep the structured details:

- InvalidArgumentError: a caller-supplied parameter is missing, empty or malformed
- EntityNotFoundError: a guild or sub-entity identifier/name did not resolve
- AmbiguousEntityError: a name matched several entities; the caller must pass an ID
- ConfigurationError: the credential is absent or the connection could not be built
- UpstreamError: Discord rejected or failed a request
"""

from __future__ import annotations

from typing import Any


class DiscordMCPError(Exception):
    """Base exception for all Discord MCP errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.user_message = user_message or message

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception into a dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "details": self.details,
        }


class InvalidArgumentError(DiscordMCPError, ValueError):
    """Raised when a tool parameter is missing, empty or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if field is not None:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = value
        super().__init__(message, error_code="INVALID_ARGUMENT", details=details)
        self.field = field


class EntityNotFoundError(DiscordMCPError):
    """Raised when a guild, channel, user or other entity cannot be resolved."""

    def __init__(self, kind: str, query: str, message: str | None = None):
        message = message or f"{kind.capitalize()} not found: {query}"
        super().__init__(
            message,
            error_code="ENTITY_NOT_FOUND",
            details={"kind": kind, "query": query},
            user_message=f"The {kind} '{query}' does not exist or is not visible to the bot.",
        )
        self.kind = kind
        self.query = query


class AmbiguousEntityError(DiscordMCPError):
    """Raised when a name matches more than one entity.

    ``candidates`` holds one ``(display_name, identifier)`` pair per match, in
    the order the platform listed them.
    """

    def __init__(self, kind: str, query: str, candidates: list[tuple[str, str]]):
        listing = ", ".join(f"**{name}** - `{identifier}`" for name, identifier in candidates)
        message = (
            f"Multiple {kind} entries found with name {query}.\n"
            f"List: {listing}.\n"
            f"Please specify the {kind} ID."
        )
        super().__init__(
            message,
            error_code="AMBIGUOUS_ENTITY",
            details={
                "kind": kind,
                "query": query,
                "candidates": [{"name": name, "id": identifier} for name, identifier in candidates],
            },
        )
        self.kind = kind
        self.query = query
        self.candidates = list(candidates)


class ConfigurationError(DiscordMCPError):
    """Raised when the Discord credential is missing or the client cannot start."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            details=details,
            user_message=f"Configuration error: {message}",
        )


class UpstreamError(DiscordMCPError):
    """Raised when Discord rejects or fails a request."""

    def __init__(
        self,
        operation: str,
        reason: str,
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        details.update({"operation": operation, "failure_reason": reason})
        if status is not None:
            details["status"] = status
        super().__init__(
            f"Discord request failed during '{operation}': {reason}",
            error_code="UPSTREAM_FAILURE",
            details=details,
            user_message=f"Discord rejected the request: {reason}",
        )
        self.operation = operation
        self.status = status
