from __future__ import annotations

from datetime import datetime, timezone

import pytest

from gallery.config import (ARTISTS_KEY, ARTWORKS_KEY, EVALUATIONS_KEY,
                            EXHIBITIONS_KEY)
from gallery.errors import DependencyExists, ValidationFailed
from gallery.models import Artist, Artwork, Evaluation, Exhibition
from gallery.services.integrity import ReferentialIntegrityGuard
from gallery.storage import EntityStore, InMemoryKeyValueStore

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _artwork(artwork_id: str, artist_id: str) -> Artwork:
    return Artwork(
        id=artwork_id,
        title=artwork_id,
        artist_id=artist_id,
        dimensions={"height": 1, "width": 1},
        year=2000,
        created_at=CREATED,
    )


@pytest.fixture()
def stores():
    kv = InMemoryKeyValueStore()
    return (
        EntityStore(kv, ARTISTS_KEY, Artist),
        EntityStore(kv, ARTWORKS_KEY, Artwork),
        EntityStore(kv, EXHIBITIONS_KEY, Exhibition),
        EntityStore(kv, EVALUATIONS_KEY, Evaluation),
    )


@pytest.fixture()
def guard(stores) -> ReferentialIntegrityGuard:
    return ReferentialIntegrityGuard(*stores)


def test_artist_with_one_artwork_cannot_be_deleted(stores, guard) -> None:
    artists, artworks, _, _ = stores
    artists.append(Artist(id="x", name="X", created_at=CREATED))
    artworks.append(_artwork("a1", "x"))

    assert guard.can_delete_artist("x") is False
    with pytest.raises(DependencyExists) as excinfo:
        guard.ensure_artist_deletable("x")

    assert excinfo.value.count == 1
    assert excinfo.value.artist_id == "x"
    assert "1 associated artwork(s)" in str(excinfo.value)


@pytest.mark.parametrize("count", [0, 2, 5])
def test_blocking_count_matches_exact_artworks(stores, guard, count) -> None:
    _, artworks, _, _ = stores
    for index in range(count):
        artworks.append(_artwork(f"a{index}", "x"))
    artworks.append(_artwork("other", "y"))

    assert len(guard.blocking_artworks("x")) == count
    assert guard.can_delete_artist("x") is (count == 0)
    if count:
        with pytest.raises(DependencyExists) as excinfo:
            guard.ensure_artist_deletable("x")
        assert excinfo.value.count == count
    else:
        guard.ensure_artist_deletable("x")


def test_ensure_artist_exists(stores, guard) -> None:
    artists, _, _, _ = stores
    artists.append(Artist(id="x", name="X", created_at=CREATED))

    assert guard.ensure_artist_exists("x").name == "X"
    with pytest.raises(ValidationFailed, match="Artist 'nobody'"):
        guard.ensure_artist_exists("nobody")


def test_ensure_artworks_exist_lists_missing_ids(stores, guard) -> None:
    _, artworks, _, _ = stores
    artworks.append(_artwork("a1", "x"))

    guard.ensure_artworks_exist(["a1"])
    with pytest.raises(ValidationFailed, match="ghost, phantom"):
        guard.ensure_artworks_exist(["a1", "ghost", "phantom"])


def test_artwork_must_belong_to_exhibition(stores, guard) -> None:
    _, artworks, exhibitions, _ = stores
    artworks.append(_artwork("a1", "x"))
    artworks.append(_artwork("a2", "x"))
    exhibitions.append(
        Exhibition(
            id="e1",
            name="Show",
            location="Hall",
            start_date="2024-01-01",
            end_date="2024-01-31",
            artwork_ids=["a1"],
            created_at=CREATED,
        )
    )

    assert guard.ensure_artwork_in_exhibition("e1", "a1").id == "e1"
    with pytest.raises(ValidationFailed, match="not part of exhibition"):
        guard.ensure_artwork_in_exhibition("e1", "a2")
    with pytest.raises(ValidationFailed, match="Exhibition 'e9'"):
        guard.ensure_artwork_in_exhibition("e9", "a1")


def test_guard_rejections_log_warnings(stores, guard, caplog) -> None:
    _, artworks, exhibitions, _ = stores
    artworks.append(_artwork("a1", "x"))
    exhibitions.append(
        Exhibition(
            id="e1",
            name="Show",
            location="Hall",
            start_date="2024-01-01",
            end_date="2024-01-31",
            artwork_ids=["a1", "gone"],
            created_at=CREATED,
        )
    )

    with caplog.at_level("WARNING", logger="gallery.services.integrity"):
        for call in (
            lambda: guard.ensure_artwork_in_exhibition("e9", "a1"),
            lambda: guard.ensure_artwork_in_exhibition("e1", "gone"),
            lambda: guard.ensure_artwork_in_exhibition("e1", "a2"),
            lambda: guard.ensure_artist_exists("nobody"),
            lambda: guard.ensure_artworks_exist(["ghost"]),
        ):
            with pytest.raises(ValidationFailed):
                call()

    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 5
    assert "exhibition_id=e9 not found" in messages[0]
    assert "artwork_id=gone not found" in messages[1]
    assert all(r.levelname == "WARNING" for r in caplog.records)
