"""Evaluation domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from gallery.config import MAX_RATING, MIN_RATING
from gallery.errors import ValidationFailed

from .common import (ensure_utc, optional_text, require_id, require_number,
                     utcnow)

Rating = Union[int, float]


def validate_rating(value: Any) -> Rating:
    """Ensure a rating is a number inside the inclusive [1, 10] range."""
    rating = require_number(value, "Rating")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationFailed(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )
    return rating


@dataclass(frozen=True)
class Evaluation:
    """A rating given to one artwork within one exhibition."""

    id: str
    exhibition_id: str
    artwork_id: str
    rating: Rating
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        require_id(self.id, "Evaluation ID")
        if not self.exhibition_id or not self.artwork_id:
            raise ValidationFailed("Please select exhibition and artwork")
        object.__setattr__(self, "rating", validate_rating(self.rating))
        object.__setattr__(self, "notes", optional_text(self.notes, "Notes"))
        object.__setattr__(
            self, "created_at", ensure_utc(self.created_at, "createdAt")
        )

    @property
    def pair(self) -> Tuple[str, str]:
        """The (exhibition, artwork) key used for upserts."""
        return (self.exhibition_id, self.artwork_id)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "exhibitionId": self.exhibition_id,
            "artworkId": self.artwork_id,
            "rating": self.rating,
            "createdAt": self.created_at.isoformat(),
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Evaluation":
        return cls(
            id=payload.get("id"),
            exhibition_id=payload.get("exhibitionId"),
            artwork_id=payload.get("artworkId"),
            rating=payload.get("rating"),
            notes=payload.get("notes"),
            created_at=payload.get("createdAt"),
        )
