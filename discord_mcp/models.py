"""Pydantic models for the Discord MCP system."""

from pydantic import BaseModel


class EntityReference(BaseModel):
    """A Discord entity reduced to what callers need to address it."""

    kind: str  # "category", "channel", "forum channel", "thread", "webhook", "user"
    identifier: str  # Snowflake ID as a string
    name: str  # Display name as shown in listings
