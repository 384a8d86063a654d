"""Ordered record collections kept under one key of a key-value store."""

from __future__ import annotations

import dataclasses
import logging
from typing import (Any, Dict, List, Mapping, Optional, Protocol, Type,
                    TypeVar)

from gallery.errors import RecordNotFound, ValidationFailed

from .base import EntityRepository, KeyValueStore

_LOGGER = logging.getLogger(__name__)
_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def _row_id(row: Any) -> Optional[str]:
    return row.get("id") if isinstance(row, Mapping) else None


class Record(Protocol):
    id: str

    def to_dict(self) -> Dict[str, Any]:
        ...

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Any:
        ...


_R = TypeVar("_R", bound=Record)


class EntityStore(EntityRepository[_R]):
    """Collection of ``record_type`` rows stored as a JSON-friendly list.

    Every read decodes the current list from the underlying store, so
    mutations are visible to the next read immediately.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        key: str,
        record_type: Type[_R],
    ) -> None:
        self._kv = kv_store
        self._key = key
        self._record_type = record_type

    @property
    def key(self) -> str:
        return self._key

    def _rows(self) -> List[Dict[str, Any]]:
        rows = self._kv.read(self._key, [])
        return list(rows or [])

    def _decode(self, row: Any) -> Optional[_R]:
        """Decode one stored row; rows that fail validation are skipped."""
        if not isinstance(row, Mapping):
            _LOGGER.warning(
                "Skipping %s row of type %s", self._key, type(row).__name__
            )
            return None
        try:
            return self._record_type.from_dict(row)
        except (ValidationFailed, TypeError) as exc:
            _LOGGER.warning(
                "Skipping invalid %s row id=%s: %s",
                self._key,
                row.get("id"),
                exc,
            )
            return None

    def get_all(self) -> List[_R]:
        records = (self._decode(row) for row in self._rows())
        return [record for record in records if record is not None]

    def find(self, record_id: str) -> Optional[_R]:
        for row in self._rows():
            if _row_id(row) == record_id:
                return self._decode(row)
        return None

    def get(self, record_id: str) -> _R:
        record = self.find(record_id)
        if record is None:
            raise RecordNotFound(
                f"{self._record_type.__name__} '{record_id}' does not exist"
            )
        return record

    def append(self, record: _R) -> _R:
        if not isinstance(record, self._record_type):
            raise ValidationFailed(
                f"Expected {self._record_type.__name__}, "
                f"got {type(record).__name__}"
            )
        if self.find(record.id) is not None:
            raise ValidationFailed(
                f"{self._record_type.__name__} '{record.id}' already exists"
            )
        payload = record.to_dict()
        self._kv.write(
            self._key, lambda rows: [*(rows or []), payload], default=[]
        )
        _LOGGER.debug("Appended %s id=%s", self._key, record.id)
        return record

    def update_where(self, record_id: str, patch: Mapping[str, Any]) -> _R:
        changes = dict(patch)
        illegal = _IMMUTABLE_FIELDS.intersection(changes)
        if illegal:
            raise ValidationFailed(
                f"Fields {sorted(illegal)} cannot be changed"
            )
        known = {f.name for f in dataclasses.fields(self._record_type)}
        unknown = set(changes) - known
        if unknown:
            raise ValidationFailed(
                f"Unknown {self._record_type.__name__} fields: "
                f"{sorted(unknown)}"
            )

        current = self.get(record_id)
        updated = dataclasses.replace(current, **changes)
        payload = updated.to_dict()

        def _update(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            return [
                payload if _row_id(row) == record_id else row
                for row in rows or []
            ]

        self._kv.write(self._key, _update, default=[])
        _LOGGER.debug(
            "Updated %s id=%s fields=%s", self._key, record_id, sorted(changes)
        )
        return updated

    def remove_where(self, record_id: str) -> _R:
        removed = self.get(record_id)
        self._kv.write(
            self._key,
            lambda rows: [
                row for row in rows or [] if _row_id(row) != record_id
            ],
            default=[],
        )
        _LOGGER.debug("Removed %s id=%s", self._key, record_id)
        return removed

    def __len__(self) -> int:
        return len(self.get_all())
