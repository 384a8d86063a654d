"""Abstract storage interfaces for the gallery core."""

from __future__ import annotations

from typing import (Any, Callable, Mapping, Optional, Protocol, Sequence,
                    TypeVar, Union)

_T = TypeVar("_T")

Updater = Callable[[Any], Any]


class KeyValueStore(Protocol):
    """Namespaced key-value persistence boundary."""

    def read(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default``."""

    def write(
        self,
        key: str,
        value: Union[Updater, Any],
        *,
        default: Any = None,
    ) -> Any:
        """
        Store a value under ``key``.

        A callable is treated as an updater: it receives the current value
        (or ``default`` when the key is absent) and its return value is
        stored. Returns the stored value.
        """


class EntityRepository(Protocol[_T]):
    """Ordered collection of records of one type keyed by identity."""

    def get_all(self) -> Sequence[_T]:
        """Return every record in insertion order."""

    def get(self, record_id: str) -> _T:
        """Return a record or raise RecordNotFound."""

    def find(self, record_id: str) -> Optional[_T]:
        """Return a record or ``None``."""

    def append(self, record: _T) -> _T:
        """Add a record; raise ValidationFailed on duplicate ids."""

    def update_where(self, record_id: str, patch: Mapping[str, Any]) -> _T:
        """Apply ``patch`` to a record, preserving every other field."""

    def remove_where(self, record_id: str) -> _T:
        """Remove a record and return it."""
