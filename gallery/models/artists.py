"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Artist domain model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .common import (ensure_utc, optional_text, plain_text, require_id,
                     require_text, utcnow)


@dataclass(frozen=True)
class Artist:
    """An artist represented by the gallery."""

    id: str
    name: str
    nationality: str = ""
    biography: str = ""
    style: str = ""
    image_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        require_id(self.id, "Artist ID")
        object.__setattr__(
            self, "name", require_text(self.name, "Artist name")
        )
        object.__setattr__(
            self, "nationality", plain_text(self.nationality, "Nationality")
        )
        object.__setattr__(
            self, "biography", plain_text(self.biography, "Biography")
        )
        object.__setattr__(self, "style", plain_text(self.style, "Style"))
        object.__setattr__(
            self, "image_url", optional_text(self.image_url, "Image URL")
        )
        object.__setattr__(
            self, "created_at", ensure_utc(self.created_at, "createdAt")
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "nationality": self.nationality,
            "biography": self.biography,
            "style": self.style,
            "createdAt": self.created_at.isoformat(),
        }
        if self.image_url:
            payload["imageUrl"] = self.image_url
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Artist":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            nationality=payload.get("nationality", ""),
            biography=payload.get("biography", ""),
            style=payload.get("style", ""),
            image_url=payload.get("imageUrl"),
            created_at=payload.get("createdAt"),
        )
