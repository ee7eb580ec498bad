"""Name and ID resolution for Discord entities.

A single ``EntityLookup`` implementation serves every entity kind. Each kind
is described by an ``EntityKind`` capability set: how to list the entities in
a container, how to fetch one directly by ID, and how to read its display name
and identifier. Containers are whatever holds the entities: a guild, a forum
channel, or an already fetched list of webhooks.

Name lookups never pick a winner among same-named entities. One match is
returned, no match raises ``EntityNotFoundError`` and several matches raise
``AmbiguousEntityError`` listing every candidate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import Generic
from typing import Iterable
from typing import TypeVar

import discord

from .exceptions import AmbiguousEntityError
from .exceptions import EntityNotFoundError
from .models import EntityReference

E = TypeVar("E")

SNOWFLAKE_PATTERN = re.compile(r"^\d+$")


def is_snowflake(value: str) -> bool:
    """Check whether a value has the shape of a Discord ID."""
    return bool(SNOWFLAKE_PATTERN.match(value))


def _entity_name(entity: Any) -> str:
    return entity.name


def _entity_id(entity: Any) -> str:
    return str(entity.id)


def _name_matches(entity: Any, query: str) -> bool:
    return entity.name.lower() == query.lower()


@dataclass(frozen=True)
class EntityKind(Generic[E]):
    """Capabilities needed to resolve one kind of entity."""

    label: str
    list_entities: Callable[[Any], Iterable[E]]
    get_by_id: Callable[[Any, int], E | None] | None = None
    display_name: Callable[[E], str] = _entity_name
    identifier: Callable[[E], str] = _entity_id
    matches: Callable[[E, str], bool] = _name_matches


class EntityLookup(Generic[E]):
    """Resolve entities of one kind by ID or case-insensitive name."""

    def __init__(self, kind: EntityKind[E]) -> None:
        self.kind = kind

    def reference(self, entity: E) -> EntityReference:
        return EntityReference(
            kind=self.kind.label,
            identifier=self.kind.identifier(entity),
            name=self.kind.display_name(entity),
        )

    def candidates(self, container: Any, name: str) -> list[E]:
        """Return every entity in ``container`` whose name matches ``name``."""
        return [entity for entity in self.kind.list_entities(container) if self.kind.matches(entity, name)]

    def find_by_name(self, container: Any, name: str) -> E:
        matches = self.candidates(container, name)
        if not matches:
            raise EntityNotFoundError(self.kind.label, name, f"{self.kind.label.capitalize()} {name} not found")
        if len(matches) > 1:
            references = [self.reference(entity) for entity in matches]
            raise AmbiguousEntityError(
                self.kind.label, name, [(ref.name, ref.identifier) for ref in references]
            )
        return matches[0]

    def get_by_id(self, container: Any, identifier: str) -> E | None:
        """Fetch an entity through the direct accessor, or ``None`` on a miss."""
        if self.kind.get_by_id is None or not is_snowflake(identifier):
            return None
        return self.kind.get_by_id(container, int(identifier))

    def find_by_id(self, container: Any, identifier: str) -> E:
        entity = self.get_by_id(container, identifier)
        if entity is None:
            raise EntityNotFoundError(
                self.kind.label, identifier, f"{self.kind.label.capitalize()} not found by ID: {identifier}"
            )
        return entity

    def find_by_id_or_name(self, container: Any, identifier_or_name: str) -> E:
        """Resolve by ID when the value looks like one, falling back to name search."""
        entity = self.get_by_id(container, identifier_or_name)
        if entity is not None:
            return entity
        return self.find_by_name(container, identifier_or_name)


def _typed(entity: Any, expected: type) -> Any:
    return entity if isinstance(entity, expected) else None


def _user_display_name(member: Any) -> str:
    if member.discriminator and member.discriminator != "0":
        return f"{member.name}#{member.discriminator}"
    return member.name


def _user_matches(member: Any, query: str) -> bool:
    """Match ``name`` or ``name#discriminator`` against a member's username."""
    name, discriminator = query, None
    if "#" in query:
        name, _, discriminator = query.rpartition("#")
        discriminator = discriminator or None
    if member.name.lower() != name.lower():
        return False
    return discriminator is None or member.discriminator == discriminator


CATEGORY = EntityKind(
    label="category",
    list_entities=lambda guild: guild.categories,
    get_by_id=lambda guild, id_: _typed(guild.get_channel(id_), discord.CategoryChannel),
)

CHANNEL = EntityKind(
    label="channel",
    list_entities=lambda guild: guild.channels,
    get_by_id=lambda guild, id_: guild.get_channel(id_),
)

FORUM = EntityKind(
    label="forum channel",
    list_entities=lambda guild: guild.forums,
    get_by_id=lambda guild, id_: _typed(guild.get_channel(id_), discord.ForumChannel),
)

THREAD = EntityKind(
    label="thread",
    list_entities=lambda guild: guild.threads,
    get_by_id=lambda guild, id_: guild.get_thread(id_),
)

# Webhooks are not cached by the client; the container is the list fetched from a channel.
WEBHOOK = EntityKind(
    label="webhook",
    list_entities=lambda webhooks: webhooks,
    get_by_id=lambda webhooks, id_: next((w for w in webhooks if w.id == id_), None),
)

USER = EntityKind(
    label="user",
    list_entities=lambda guild: guild.members,
    get_by_id=lambda guild, id_: guild.get_member(id_),
    display_name=_user_display_name,
    matches=_user_matches,
)

categories = EntityLookup(CATEGORY)
channels = EntityLookup(CHANNEL)
forums = EntityLookup(FORUM)
threads = EntityLookup(THREAD)
webhooks = EntityLookup(WEBHOOK)
users = EntityLookup(USER)
