from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LookupService(Protocol):
    """Two-method capability for fetching instances by string identifier.

    Any service locator, registry or container exposing ``has``/``get``
    satisfies this protocol. Errors raised by ``get`` are wrapped by the
    resolving strategies, never swallowed.
    """

    def has(self, identifier: str) -> bool:
        """Return whether an entry exists for the identifier.

        Args:
            identifier: Entry identifier, for example ``"config"`` or a class's
                ``module.qualname``.

        """
        ...

    def get(self, identifier: str) -> Any:
        """Return the entry registered for the identifier.

        Args:
            identifier: Entry identifier to fetch.

        """
        ...


class MappingLookupService:
    """Lookup service backed by a dictionary of named entries.

    Entries are registered up front or with ``set`` during the composition
    phase. ``get`` raises ``KeyError`` for unknown identifiers.

    Examples:
        .. code-block:: python

            lookup = MappingLookupService({"config": {"database": {"host": "localhost"}}})
            lookup.set("custom.logger", logging.getLogger("custom"))

    """

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        self._entries: dict[str, Any] = dict(entries or {})

    def has(self, identifier: str) -> bool:
        return identifier in self._entries

    def get(self, identifier: str) -> Any:
        """Return the entry for identifier, raising ``KeyError`` when unknown."""
        return self._entries[identifier]

    def set(self, identifier: str, entry: Any) -> None:
        """Register or replace an entry.

        Args:
            identifier: Entry identifier.
            entry: Value returned by ``get``.

        """
        self._entries[identifier] = entry

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["LookupService", "MappingLookupService"]
