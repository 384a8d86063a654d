"""Aggregate evaluations into an ordered artwork ranking."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from gallery.errors import BrokenReference
from gallery.models import Artist, Artwork, Evaluation, RankingEntry

_LOGGER = logging.getLogger(__name__)


def _ranking_key(entry: RankingEntry) -> tuple[float, int, str]:
    # Highest average first, then most evaluations, then artwork id.
    return (-entry.average_rating, -entry.evaluation_count, entry.artwork.id)


def compute_rankings(
    evaluations: Iterable[Evaluation],
    artworks: Iterable[Artwork],
    artists: Iterable[Artist],
    exhibition_id: Optional[str] = None,
    *,
    strict: bool = False,
) -> List[RankingEntry]:
    """Rank artworks by the mean rating of their evaluations.

    When ``exhibition_id`` is given only evaluations from that exhibition are
    considered. Groups whose artwork or owning artist cannot be resolved are
    dropped with a warning, or raise ``BrokenReference`` when ``strict``.
    """

    artworks_by_id = {artwork.id: artwork for artwork in artworks}
    artists_by_id = {artist.id: artist for artist in artists}

    ratings: Dict[str, List[float]] = {}
    for evaluation in evaluations:
        if exhibition_id and evaluation.exhibition_id != exhibition_id:
            continue
        ratings.setdefault(evaluation.artwork_id, []).append(
            float(evaluation.rating)
        )

    entries: List[RankingEntry] = []
    for artwork_id, values in ratings.items():
        artwork = artworks_by_id.get(artwork_id)
        artist = artists_by_id.get(artwork.artist_id) if artwork else None
        if artwork is None or artist is None:
            missing = "artwork" if artwork is None else "artist"
            message = (
                f"Ranking skipped artwork_id={artwork_id}: {missing} not "
                f"found ({len(values)} evaluation(s) dropped)"
            )
            if strict:
                raise BrokenReference(artwork_id, message)
            _LOGGER.warning(message)
            continue
        entries.append(
            RankingEntry(
                artwork=artwork,
                artist=artist,
                average_rating=sum(values) / len(values),
                evaluation_count=len(values),
            )
        )

    entries.sort(key=_ranking_key)
    return entries
