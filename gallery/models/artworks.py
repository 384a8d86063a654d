"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Artwork domain models and enums.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from gallery.errors import ValidationFailed

from .common import (coerce_enum, ensure_utc, optional_text, plain_text,
                     require_id, require_number, require_text, utcnow)


class ArtworkCategory(str, Enum):
    """Medium of an artwork."""

    PAINTING = "painting"
    SCULPTURE = "sculpture"
    PHOTOGRAPHY = "photography"
    INSTALLATION = "installation"
    DIGITAL = "digital"


class ArtworkStatus(str, Enum):
    """Availability of an artwork."""

    AVAILABLE = "available"
    IN_EXHIBITION = "in-exhibition"
    ON_LOAN = "on-loan"
    SOLD = "sold"


def _current_year() -> int:
    return utcnow().year


@dataclass(frozen=True)
class Dimensions:
    """Physical size; height and width are required, depth is optional."""

    height: float
    width: float
    depth: Optional[float] = None

    def __post_init__(self) -> None:
        for label, value in (("Height", self.height), ("Width", self.width)):
            if value is None:
                raise ValidationFailed(f"{label} is required")
            if require_number(value, label) <= 0:
                raise ValidationFailed(f"{label} must be positive")
        # A zero depth means "not given" for flat works.
        if not self.depth:
            object.__setattr__(self, "depth", None)
        elif require_number(self.depth, "Depth") < 0:
            raise ValidationFailed("Depth cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"height": self.height, "width": self.width}
        if self.depth is not None:
            payload["depth"] = self.depth
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Dimensions":
        return cls(
            height=payload.get("height"),
            width=payload.get("width"),
            depth=payload.get("depth"),
        )


@dataclass(frozen=True)
class Artwork:
    """A single work owned by an artist."""

    id: str
    title: str
    artist_id: str
    dimensions: Dimensions
    year: int = field(default_factory=_current_year)
    category: ArtworkCategory = ArtworkCategory.PAINTING
    technique: str = ""
    description: str = ""
    status: ArtworkStatus = ArtworkStatus.AVAILABLE
    image_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        require_id(self.id, "Artwork ID")
        object.__setattr__(
            self, "title", require_text(self.title, "Artwork title")
        )
        if not isinstance(self.artist_id, str) or not self.artist_id:
            raise ValidationFailed("Please select an artist")
        if isinstance(self.dimensions, Mapping):
            object.__setattr__(
                self, "dimensions", Dimensions.from_dict(self.dimensions)
            )
        elif not isinstance(self.dimensions, Dimensions):
            raise ValidationFailed("Dimensions are required")
        if isinstance(self.year, bool) or not isinstance(self.year, int):
            raise ValidationFailed("Year must be an integer")
        object.__setattr__(
            self, "category",
            coerce_enum(ArtworkCategory, self.category, "Category"),
        )
        object.__setattr__(
            self, "status", coerce_enum(ArtworkStatus, self.status, "Status")
        )
        object.__setattr__(
            self, "technique", plain_text(self.technique, "Technique")
        )
        object.__setattr__(
            self, "description", plain_text(self.description, "Description")
        )
        object.__setattr__(
            self, "image_url", optional_text(self.image_url, "Image URL")
        )
        object.__setattr__(
            self, "created_at", ensure_utc(self.created_at, "createdAt")
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "artistId": self.artist_id,
            "year": self.year,
            "category": self.category.value,
            "technique": self.technique,
            "description": self.description,
            "dimensions": self.dimensions.to_dict(),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }
        if self.image_url:
            payload["imageUrl"] = self.image_url
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Artwork":
        return cls(
            id=payload.get("id"),
            title=payload.get("title"),
            artist_id=payload.get("artistId"),
            dimensions=payload.get("dimensions") or {},
            year=payload.get("year"),
            category=payload.get("category", ArtworkCategory.PAINTING),
            technique=payload.get("technique", ""),
            description=payload.get("description", ""),
            status=payload.get("status", ArtworkStatus.AVAILABLE),
            image_url=payload.get("imageUrl"),
            created_at=payload.get("createdAt"),
        )
