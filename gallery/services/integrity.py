"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Cross-collection reference checks applied before mutations.

Only artist deletion is blocked by dependents. Deleting an artwork or an
exhibition leaves dangling ids behind; readers filter them out. Evaluations
whose artwork was removed from an exhibition stay stored as orphans.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from gallery.errors import DependencyExists, ValidationFailed
from gallery.models import Artist, Artwork, Evaluation, Exhibition
from gallery.storage.base import EntityRepository

_LOGGER = logging.getLogger(__name__)


class ReferentialIntegrityGuard:
    """Validate references across the artist, artwork and exhibition stores."""

    def __init__(
        self,
        artists: EntityRepository[Artist],
        artworks: EntityRepository[Artwork],
        exhibitions: EntityRepository[Exhibition],
        evaluations: EntityRepository[Evaluation],
    ) -> None:
        self._artists = artists
        self._artworks = artworks
        self._exhibitions = exhibitions
        self._evaluations = evaluations

    def blocking_artworks(self, artist_id: str) -> List[Artwork]:
        return [
            artwork
            for artwork in self._artworks.get_all()
            if artwork.artist_id == artist_id
        ]

    def can_delete_artist(self, artist_id: str) -> bool:
        return not self.blocking_artworks(artist_id)

    def ensure_artist_deletable(self, artist_id: str) -> None:
        """Raise DependencyExists with the number of artworks still owned."""
        count = len(self.blocking_artworks(artist_id))
        if count:
            _LOGGER.warning(
                "Refusing to delete artist_id=%s: %d artwork(s) reference it",
                artist_id,
                count,
            )
            raise DependencyExists(artist_id, count)

    def ensure_artist_exists(self, artist_id: str) -> Artist:
        artist = self._artists.find(artist_id)
        if artist is None:
            _LOGGER.warning("Rejected reference to artist_id=%s", artist_id)
            raise ValidationFailed(f"Artist '{artist_id}' does not exist")
        return artist

    def ensure_artworks_exist(self, artwork_ids: Iterable[str]) -> None:
        known = {artwork.id for artwork in self._artworks.get_all()}
        missing = [aid for aid in artwork_ids if aid not in known]
        if missing:
            _LOGGER.warning("Rejected artwork selection missing=%s", missing)
            raise ValidationFailed(
                f"Unknown artwork id(s) in selection: {', '.join(missing)}"
            )

    def ensure_artwork_in_exhibition(
        self, exhibition_id: str, artwork_id: str
    ) -> Exhibition:
        exhibition = self._exhibitions.find(exhibition_id)
        if exhibition is None:
            _LOGGER.warning(
                "Rejected evaluation: exhibition_id=%s not found",
                exhibition_id,
            )
            raise ValidationFailed(
                f"Exhibition '{exhibition_id}' does not exist"
            )
        if not exhibition.includes(artwork_id):
            _LOGGER.warning(
                "Rejected evaluation: artwork_id=%s not in exhibition_id=%s",
                artwork_id,
                exhibition_id,
            )
            raise ValidationFailed(
                f"Artwork '{artwork_id}' is not part of exhibition "
                f"'{exhibition.name}'"
            )
        if self._artworks.find(artwork_id) is None:
            _LOGGER.warning(
                "Rejected evaluation: artwork_id=%s not found", artwork_id
            )
            raise ValidationFailed(f"Artwork '{artwork_id}' does not exist")
        return exhibition

    def orphaned_evaluations(self) -> List[Evaluation]:
        """Evaluations whose pair is no longer part of its exhibition.

        This covers removed exhibitions and artworks de-selected from an
        exhibition after being rated.
        """

        exhibitions = {e.id: e for e in self._exhibitions.get_all()}
        orphans: List[Evaluation] = []
        for evaluation in self._evaluations.get_all():
            exhibition = exhibitions.get(evaluation.exhibition_id)
            if exhibition is None or not exhibition.includes(
                evaluation.artwork_id
            ):
                orphans.append(evaluation)
        return orphans
