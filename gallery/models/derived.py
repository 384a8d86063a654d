"""Read models derived from the stored collections; never persisted."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .artists import Artist
from .artworks import Artwork
from .evaluations import Evaluation
from .exhibitions import Exhibition


@dataclass(frozen=True)
class RankingEntry:
    """An artwork with its artist and aggregate rating."""

    artwork: Artwork
    artist: Artist
    average_rating: float
    evaluation_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artwork": self.artwork.to_dict(),
            "artist": self.artist.to_dict(),
            "averageRating": self.average_rating,
            "evaluationCount": self.evaluation_count,
        }


@dataclass(frozen=True)
class EvaluationRow:
    """An evaluation joined with the names it refers to."""

    evaluation: Evaluation
    exhibition_name: str
    artwork_title: str
    artist_name: str
    artwork: Optional[Artwork] = None


@dataclass(frozen=True)
class DashboardSummary:
    """Gallery statistics and recent activity."""

    artist_count: int
    artwork_count: int
    active_exhibition_count: int
    evaluation_count: int
    recent_artworks: Sequence[Artwork]
    active_exhibitions: Sequence[Exhibition]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artistCount": self.artist_count,
            "artworkCount": self.artwork_count,
            "exhibitionCount": self.active_exhibition_count,
            "evaluationCount": self.evaluation_count,
            "recentArtworks": [a.to_dict() for a in self.recent_artworks],
            "activeExhibitions": [
                e.to_dict() for e in self.active_exhibitions
            ],
        }
