"""Guild scope resolution."""

from __future__ import annotations


class ScopeResolver:
    """Resolve an optional guild ID against the configured default guild.

    The default is fixed when the resolver is built. ``resolve`` never raises:
    it returns an empty string when neither value is present so each tool can
    raise an error that names its own parameter.
    """

    def __init__(self, default_scope: str | None = None) -> None:
        self._default_scope = (default_scope or "").strip()

    @property
    def default_scope(self) -> str:
        return self._default_scope

    def resolve(self, explicit_scope: str | None = None) -> str:
        if explicit_scope:
            return explicit_scope
        return self._default_scope
