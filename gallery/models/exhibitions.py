"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Exhibition domain model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Tuple

from gallery.errors import ValidationFailed

from .common import (coerce_date, coerce_enum, ensure_utc, plain_text,
                     require_id, require_text, utcnow)


class ExhibitionStatus(str, Enum):
    """Lifecycle of an exhibition relative to its date range."""

    PLANNED = "planned"
    ACTIVE = "active"
    COMPLETED = "completed"


def normalize_artwork_ids(artwork_ids: Iterable[Any]) -> Tuple[str, ...]:
    """Return ids in first-seen order with duplicates collapsed."""
    if isinstance(artwork_ids, str):
        raise ValidationFailed("Artwork selection must be a list of ids")
    seen: set[str] = set()
    ordered: list[str] = []
    for artwork_id in artwork_ids:
        if not isinstance(artwork_id, str) or not artwork_id:
            raise ValidationFailed(
                f"Artwork id '{artwork_id}' in selection is invalid"
            )
        if artwork_id in seen:
            continue
        seen.add(artwork_id)
        ordered.append(artwork_id)
    return tuple(ordered)


@dataclass(frozen=True)
class Exhibition:
    """A dated show presenting an ordered set of artworks."""

    id: str
    name: str
    location: str
    start_date: date
    end_date: date
    artwork_ids: Tuple[str, ...]
    description: str = ""
    status: ExhibitionStatus = ExhibitionStatus.PLANNED
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        require_id(self.id, "Exhibition ID")
        object.__setattr__(
            self, "name", require_text(self.name, "Exhibition name")
        )
        object.__setattr__(
            self, "location", require_text(self.location, "Location")
        )
        start = coerce_date(self.start_date, "Start date")
        end = coerce_date(self.end_date, "End date")
        if end < start:
            raise ValidationFailed("End date must be after start date")
        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)

        if self.artwork_ids is None:
            raise ValidationFailed("Please select at least one artwork")
        artwork_ids = normalize_artwork_ids(self.artwork_ids)
        if not artwork_ids:
            raise ValidationFailed("Please select at least one artwork")
        object.__setattr__(self, "artwork_ids", artwork_ids)

        object.__setattr__(
            self, "description", plain_text(self.description, "Description")
        )
        object.__setattr__(
            self, "status",
            coerce_enum(ExhibitionStatus, self.status, "Status"),
        )
        object.__setattr__(
            self, "created_at", ensure_utc(self.created_at, "createdAt")
        )

    def includes(self, artwork_id: str) -> bool:
        return artwork_id in self.artwork_ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "description": self.description,
            "artworkIds": list(self.artwork_ids),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Exhibition":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            location=payload.get("location"),
            start_date=payload.get("startDate"),
            end_date=payload.get("endDate"),
            artwork_ids=payload.get("artworkIds") or (),
            description=payload.get("description", ""),
            status=payload.get("status", ExhibitionStatus.PLANNED),
            created_at=payload.get("createdAt"),
        )
