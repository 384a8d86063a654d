"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Service facade over the four gallery collections.

``GalleryService`` owns the artist, artwork, exhibition and evaluation stores
it is constructed with. It validates input, applies the integrity guard,
assigns identities and timestamps, and exposes the read models derived from
the collections (rankings, dashboard, evaluation listings).
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date, datetime
from typing import (Any, Callable, Dict, Iterable, List, Mapping, Optional,
                    Union)

from gallery.config import (ARTISTS_KEY, ARTWORKS_KEY,
                            DASHBOARD_RECENT_ARTWORKS, EVALUATIONS_KEY,
                            EXHIBITIONS_KEY, UNKNOWN_EXHIBITION_LABEL,
                            UNKNOWN_LABEL)
from gallery.errors import ValidationFailed
from gallery.logging_config import configure_logging
from gallery.models import (Artist, Artwork, ArtworkCategory, ArtworkStatus,
                            DashboardSummary, Dimensions, Evaluation,
                            EvaluationRow, Exhibition, ExhibitionStatus,
                            RankingEntry, normalize_artwork_ids,
                            validate_rating)
from gallery.models.common import utcnow
from gallery.storage.base import EntityRepository, KeyValueStore
from gallery.storage.entity_store import EntityStore
from gallery.storage.kv_store import build_kv_store_from_env
from gallery.utils.env import strict_rankings

from .integrity import ReferentialIntegrityGuard
from .ranking import compute_rankings
from .status import derive_status

_LOGGER = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class GalleryService:
    """CRUD operations and derived views for a single gallery."""

    def __init__(
        self,
        artists: EntityRepository[Artist],
        artworks: EntityRepository[Artwork],
        exhibitions: EntityRepository[Exhibition],
        evaluations: EntityRepository[Evaluation],
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = _new_id,
        strict: Optional[bool] = None,
    ) -> None:
        self.artists = artists
        self.artworks = artworks
        self.exhibitions = exhibitions
        self.evaluations = evaluations
        self._clock = clock
        self._id_factory = id_factory
        self._strict = strict_rankings() if strict is None else strict
        self.guard = ReferentialIntegrityGuard(
            artists, artworks, exhibitions, evaluations
        )

    @classmethod
    def from_kv_store(
        cls, kv_store: KeyValueStore, **kwargs: Any
    ) -> "GalleryService":
        """Wire the four collections onto their fixed keys."""
        return cls(
            EntityStore(kv_store, ARTISTS_KEY, Artist),
            EntityStore(kv_store, ARTWORKS_KEY, Artwork),
            EntityStore(kv_store, EXHIBITIONS_KEY, Exhibition),
            EntityStore(kv_store, EVALUATIONS_KEY, Evaluation),
            **kwargs,
        )

    # Artists ---------------------------------------------------------------

    def create_artist(
        self,
        name: str,
        *,
        nationality: str = "",
        biography: str = "",
        style: str = "",
        image_url: Optional[str] = None,
    ) -> Artist:
        artist = Artist(
            id=self._id_factory(),
            name=name,
            nationality=nationality,
            biography=biography,
            style=style,
            image_url=image_url,
            created_at=self._clock(),
        )
        self.artists.append(artist)
        _LOGGER.info("Created artist id=%s name=%s", artist.id, artist.name)
        return artist

    def update_artist(self, artist_id: str, **changes: Any) -> Artist:
        artist = self.artists.update_where(artist_id, changes)
        _LOGGER.info("Updated artist id=%s", artist_id)
        return artist

    def delete_artist(self, artist_id: str) -> Artist:
        """Delete an artist that owns no artworks.

        Raises DependencyExists carrying the number of blocking artworks.
        """
        self.guard.ensure_artist_deletable(artist_id)
        removed = self.artists.remove_where(artist_id)
        _LOGGER.info("Deleted artist id=%s", artist_id)
        return removed

    def artist_artwork_count(self, artist_id: str) -> int:
        return len(self.guard.blocking_artworks(artist_id))

    # Artworks --------------------------------------------------------------

    def create_artwork(
        self,
        title: str,
        artist_id: str,
        dimensions: Union[Dimensions, Mapping[str, Any]],
        *,
        year: Optional[int] = None,
        category: Union[ArtworkCategory, str] = ArtworkCategory.PAINTING,
        technique: str = "",
        description: str = "",
        status: Union[ArtworkStatus, str] = ArtworkStatus.AVAILABLE,
        image_url: Optional[str] = None,
    ) -> Artwork:
        created_at = self._clock()
        artwork = Artwork(
            id=self._id_factory(),
            title=title,
            artist_id=artist_id,
            dimensions=dimensions,
            year=created_at.year if year is None else year,
            category=category,
            technique=technique,
            description=description,
            status=status,
            image_url=image_url,
            created_at=created_at,
        )
        self.guard.ensure_artist_exists(artwork.artist_id)
        self.artworks.append(artwork)
        _LOGGER.info(
            "Created artwork id=%s artist_id=%s", artwork.id, artwork.artist_id
        )
        return artwork

    def update_artwork(self, artwork_id: str, **changes: Any) -> Artwork:
        if "artist_id" in changes:
            self.guard.ensure_artist_exists(changes["artist_id"])
        artwork = self.artworks.update_where(artwork_id, changes)
        _LOGGER.info("Updated artwork id=%s", artwork_id)
        return artwork

    def delete_artwork(self, artwork_id: str) -> Artwork:
        # Exhibitions keep the id; readers skip it.
        removed = self.artworks.remove_where(artwork_id)
        _LOGGER.info("Deleted artwork id=%s", artwork_id)
        return removed

    # Exhibitions -----------------------------------------------------------

    def create_exhibition(
        self,
        name: str,
        location: str,
        start_date: Union[date, str],
        end_date: Union[date, str],
        artwork_ids: Iterable[str],
        *,
        description: str = "",
    ) -> Exhibition:
        exhibition = Exhibition(
            id=self._id_factory(),
            name=name,
            location=location,
            start_date=start_date,
            end_date=end_date,
            artwork_ids=artwork_ids,
            description=description,
            created_at=self._clock(),
        )
        self.guard.ensure_artworks_exist(exhibition.artwork_ids)
        status = derive_status(
            exhibition.start_date, exhibition.end_date, self._clock()
        )
        exhibition = dataclasses.replace(exhibition, status=status)
        self.exhibitions.append(exhibition)
        _LOGGER.info(
            "Created exhibition id=%s status=%s artworks=%d",
            exhibition.id,
            exhibition.status.value,
            len(exhibition.artwork_ids),
        )
        return exhibition

    def update_exhibition(
        self, exhibition_id: str, **changes: Any
    ) -> Exhibition:
        """Apply changes and recompute the status from the date range.

        Artworks dropped from the selection keep their evaluations.
        """
        if "status" in changes:
            raise ValidationFailed(
                "Exhibition status is derived from its dates"
            )
        current = self.exhibitions.get(exhibition_id)
        if "artwork_ids" in changes:
            selection = normalize_artwork_ids(changes["artwork_ids"] or ())
            added = [aid for aid in selection if not current.includes(aid)]
            self.guard.ensure_artworks_exist(added)
            dropped = [
                aid for aid in current.artwork_ids if aid not in selection
            ]
            if dropped:
                _LOGGER.info(
                    "Exhibition id=%s de-selected artworks=%s; evaluations "
                    "for them are kept",
                    exhibition_id,
                    dropped,
                )
            changes["artwork_ids"] = selection

        changes["status"] = derive_status(
            changes.get("start_date", current.start_date),
            changes.get("end_date", current.end_date),
            self._clock(),
        )
        exhibition = self.exhibitions.update_where(exhibition_id, changes)
        _LOGGER.info(
            "Updated exhibition id=%s status=%s",
            exhibition_id,
            exhibition.status.value,
        )
        return exhibition

    def delete_exhibition(self, exhibition_id: str) -> Exhibition:
        # Evaluations keep the id and become orphans.
        removed = self.exhibitions.remove_where(exhibition_id)
        _LOGGER.info("Deleted exhibition id=%s", exhibition_id)
        return removed

    def refresh_exhibition_statuses(
        self, now: Optional[Union[date, datetime]] = None
    ) -> List[Exhibition]:
        """Recompute stored statuses; returns the exhibitions that changed."""
        moment = now if now is not None else self._clock()
        changed: List[Exhibition] = []
        for exhibition in self.exhibitions.get_all():
            status = derive_status(
                exhibition.start_date, exhibition.end_date, moment
            )
            if status != exhibition.status:
                changed.append(
                    self.exhibitions.update_where(
                        exhibition.id, {"status": status}
                    )
                )
        if changed:
            _LOGGER.info("Refreshed status of %d exhibition(s)", len(changed))
        return changed

    def exhibition_artworks(self, exhibition_id: str) -> List[Artwork]:
        """Artworks in selection order, skipping deleted ones."""
        exhibition = self.exhibitions.get(exhibition_id)
        artworks = {artwork.id: artwork for artwork in self.artworks.get_all()}
        return [
            artworks[aid] for aid in exhibition.artwork_ids if aid in artworks
        ]

    def participating_artists(self, exhibition_id: str) -> List[Artist]:
        artists = {artist.id: artist for artist in self.artists.get_all()}
        seen: Dict[str, Artist] = {}
        for artwork in self.exhibition_artworks(exhibition_id):
            artist = artists.get(artwork.artist_id)
            if artist is not None and artist.id not in seen:
                seen[artist.id] = artist
        return list(seen.values())

    # Evaluations -----------------------------------------------------------

    def submit_evaluation(
        self,
        exhibition_id: str,
        artwork_id: str,
        rating: Union[int, float],
        notes: Optional[str] = None,
    ) -> Evaluation:
        """Create an evaluation, or update the one for the same pair.

        A repeated submission for an (exhibition, artwork) pair replaces the
        rating and notes while keeping the id and creation timestamp.
        """
        if not exhibition_id or not artwork_id:
            raise ValidationFailed("Please select exhibition and artwork")
        validate_rating(rating)
        self.guard.ensure_artwork_in_exhibition(exhibition_id, artwork_id)

        existing = self.find_evaluation(exhibition_id, artwork_id)
        if existing is not None:
            evaluation = self.evaluations.update_where(
                existing.id, {"rating": rating, "notes": notes}
            )
            _LOGGER.info("Updated evaluation id=%s", evaluation.id)
            return evaluation

        evaluation = Evaluation(
            id=self._id_factory(),
            exhibition_id=exhibition_id,
            artwork_id=artwork_id,
            rating=rating,
            notes=notes,
            created_at=self._clock(),
        )
        self.evaluations.append(evaluation)
        _LOGGER.info(
            "Created evaluation id=%s exhibition_id=%s artwork_id=%s",
            evaluation.id,
            exhibition_id,
            artwork_id,
        )
        return evaluation

    def find_evaluation(
        self, exhibition_id: str, artwork_id: str
    ) -> Optional[Evaluation]:
        for evaluation in self.evaluations.get_all():
            if evaluation.pair == (exhibition_id, artwork_id):
                return evaluation
        return None

    def delete_evaluation(self, evaluation_id: str) -> Evaluation:
        removed = self.evaluations.remove_where(evaluation_id)
        _LOGGER.info("Deleted evaluation id=%s", evaluation_id)
        return removed

    def available_artworks(
        self, exhibition_id: Optional[str]
    ) -> List[Artwork]:
        """Artworks that can be rated within an exhibition."""
        if not exhibition_id:
            return []
        exhibition = self.exhibitions.find(exhibition_id)
        if exhibition is None:
            return []
        return [
            artwork
            for artwork in self.artworks.get_all()
            if exhibition.includes(artwork.id)
        ]

    def orphaned_evaluations(self) -> List[Evaluation]:
        return self.guard.orphaned_evaluations()

    def evaluation_rows(self) -> List[EvaluationRow]:
        exhibitions = {e.id: e for e in self.exhibitions.get_all()}
        artworks = {a.id: a for a in self.artworks.get_all()}
        artists = {a.id: a for a in self.artists.get_all()}
        rows: List[EvaluationRow] = []
        for evaluation in self.evaluations.get_all():
            exhibition = exhibitions.get(evaluation.exhibition_id)
            artwork = artworks.get(evaluation.artwork_id)
            artist = artists.get(artwork.artist_id) if artwork else None
            rows.append(
                EvaluationRow(
                    evaluation=evaluation,
                    exhibition_name=(
                        exhibition.name
                        if exhibition
                        else UNKNOWN_EXHIBITION_LABEL
                    ),
                    artwork_title=artwork.title if artwork else UNKNOWN_LABEL,
                    artist_name=artist.name if artist else UNKNOWN_LABEL,
                    artwork=artwork,
                )
            )
        return rows

    # Derived views ---------------------------------------------------------

    def rankings(
        self, exhibition_id: Optional[str] = None
    ) -> List[RankingEntry]:
        return compute_rankings(
            self.evaluations.get_all(),
            self.artworks.get_all(),
            self.artists.get_all(),
            exhibition_id,
            strict=self._strict,
        )

    def dashboard(self) -> DashboardSummary:
        artworks = self.artworks.get_all()
        active = [
            exhibition
            for exhibition in self.exhibitions.get_all()
            if exhibition.status == ExhibitionStatus.ACTIVE
        ]
        recent = list(reversed(artworks[-DASHBOARD_RECENT_ARTWORKS:]))
        return DashboardSummary(
            artist_count=len(self.artists.get_all()),
            artwork_count=len(artworks),
            active_exhibition_count=len(active),
            evaluation_count=len(self.evaluations.get_all()),
            recent_artworks=recent,
            active_exhibitions=active,
        )


def build_gallery_service_from_env(**kwargs: Any) -> GalleryService:
    """Configure logging and wire a service onto the configured store."""
    configure_logging()
    return GalleryService.from_kv_store(build_kv_store_from_env(), **kwargs)
