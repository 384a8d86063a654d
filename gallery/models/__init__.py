"""Domain model package exports."""

from .artists import Artist
from .artworks import Artwork, ArtworkCategory, ArtworkStatus, Dimensions
from .derived import DashboardSummary, EvaluationRow, RankingEntry
from .evaluations import Evaluation, validate_rating
from .exhibitions import Exhibition, ExhibitionStatus, normalize_artwork_ids

__all__ = [
    "Artist",
    "Artwork",
    "ArtworkCategory",
    "ArtworkStatus",
    "DashboardSummary",
    "Dimensions",
    "Evaluation",
    "EvaluationRow",
    "Exhibition",
    "ExhibitionStatus",
    "RankingEntry",
    "normalize_artwork_ids",
    "validate_rating",
]
