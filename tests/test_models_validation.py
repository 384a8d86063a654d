"""

Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from gallery.errors import ValidationFailed
from gallery.models import (Artist, Artwork, ArtworkCategory, ArtworkStatus,
                            Dimensions, Evaluation, Exhibition,
                            ExhibitionStatus)
from gallery.models.common import coerce_date

CREATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _exhibition(**overrides) -> Exhibition:
    fields = {
        "id": "ex-1",
        "name": "Spring Show",
        "location": "Main Hall",
        "start_date": "2024-03-01",
        "end_date": "2024-03-31",
        "artwork_ids": ["w1"],
        "created_at": CREATED,
    }
    fields.update(overrides)
    return Exhibition(**fields)


def test_artist_requires_name_and_strips_it() -> None:
    """
    test_artist_requires_name_and_strips_it: Function description.
    :param:
    :returns:
    """

    with pytest.raises(ValidationFailed, match="Artist name is required"):
        Artist(id="a1", name="   ")

    artist = Artist(id="a1", name="  Frida  ", image_url="")
    assert artist.name == "Frida"
    assert artist.image_url is None


def test_artist_rejects_naive_timestamps() -> None:
    with pytest.raises(ValidationFailed, match="timezone information"):
        Artist(id="a1", name="Frida", created_at=datetime(2024, 1, 1))


def test_artist_dict_round_trip_uses_camel_case_keys() -> None:
    artist = Artist(
        id="a1",
        name="Frida",
        nationality="Mexican",
        image_url="https://example.com/frida.png",
        created_at=CREATED,
    )
    payload = artist.to_dict()

    assert payload["imageUrl"] == "https://example.com/frida.png"
    assert payload["createdAt"] == "2024-01-02T03:04:05+00:00"
    assert Artist.from_dict(payload) == artist


def test_dimensions_require_positive_height_and_width() -> None:
    with pytest.raises(ValidationFailed, match="Height is required"):
        Dimensions(height=None, width=10)  # type: ignore[arg-type]
    with pytest.raises(ValidationFailed, match="Width must be positive"):
        Dimensions(height=10, width=0)
    with pytest.raises(ValidationFailed, match="Height must be a number"):
        Dimensions(height=True, width=10)  # type: ignore[arg-type]


def test_dimensions_zero_depth_means_absent() -> None:
    assert Dimensions(height=10, width=20, depth=0).depth is None
    assert Dimensions(height=10, width=20, depth=5).to_dict() == {
        "height": 10,
        "width": 20,
        "depth": 5,
    }
    assert "depth" not in Dimensions(height=10, width=20).to_dict()


def test_artwork_coerces_enums_and_dimension_mappings() -> None:
    artwork = Artwork(
        id="w1",
        title="Portrait",
        artist_id="a1",
        dimensions={"height": 50, "width": 40},
        year=1940,
        category="sculpture",
        status="on-loan",
        created_at=CREATED,
    )

    assert artwork.category is ArtworkCategory.SCULPTURE
    assert artwork.status is ArtworkStatus.ON_LOAN
    assert artwork.dimensions == Dimensions(height=50, width=40)
    assert Artwork.from_dict(artwork.to_dict()) == artwork


def test_artwork_rejects_unknown_category_and_missing_artist() -> None:
    with pytest.raises(ValidationFailed, match="Category 'fresco'"):
        Artwork(
            id="w1",
            title="Portrait",
            artist_id="a1",
            dimensions={"height": 1, "width": 1},
            year=2000,
            category="fresco",
        )
    with pytest.raises(ValidationFailed, match="Please select an artist"):
        Artwork(
            id="w1",
            title="Portrait",
            artist_id="",
            dimensions={"height": 1, "width": 1},
            year=2000,
        )


def test_exhibition_validates_dates_and_selection() -> None:
    with pytest.raises(ValidationFailed, match="End date must be after"):
        _exhibition(start_date="2024-03-31", end_date="2024-03-01")
    with pytest.raises(ValidationFailed, match="at least one artwork"):
        _exhibition(artwork_ids=[])
    with pytest.raises(ValidationFailed, match="Location is required"):
        _exhibition(location="")

    same_day = _exhibition(start_date="2024-03-01", end_date="2024-03-01")
    assert same_day.start_date == same_day.end_date == date(2024, 3, 1)


def test_exhibition_collapses_duplicate_artworks_in_order() -> None:
    exhibition = _exhibition(artwork_ids=["w2", "w1", "w2"])

    assert exhibition.artwork_ids == ("w2", "w1")
    assert exhibition.status is ExhibitionStatus.PLANNED
    assert Exhibition.from_dict(exhibition.to_dict()) == exhibition


@pytest.mark.parametrize("rating", [0, 10.5, -1, float("nan"), True, "7"])
def test_evaluation_rejects_invalid_ratings(rating) -> None:
    with pytest.raises(ValidationFailed):
        Evaluation(id="e1", exhibition_id="ex", artwork_id="w", rating=rating)


@pytest.mark.parametrize("rating", [1, 10, 7.5])
def test_evaluation_accepts_inclusive_bounds(rating) -> None:
    evaluation = Evaluation(
        id="e1", exhibition_id="ex", artwork_id="w", rating=rating, notes=" "
    )

    assert evaluation.rating == rating
    assert evaluation.notes is None
    assert evaluation.pair == ("ex", "w")


@pytest.mark.parametrize(
    "raw", ["2024-07-01garbage", "2024-07-01 junk", "2024-13-01", "July 1"]
)
def test_coerce_date_rejects_malformed_strings(raw) -> None:
    with pytest.raises(ValidationFailed, match="not a valid date"):
        coerce_date(raw, "Start date")


def test_coerce_date_accepts_dates_and_iso_timestamps() -> None:
    assert coerce_date(" 2024-07-01 ", "Start date") == date(2024, 7, 1)
    assert coerce_date("2024-07-01T10:30:00Z", "Start date") == date(
        2024, 7, 1
    )
    assert coerce_date(date(2024, 7, 1), "Start date") == date(2024, 7, 1)


def test_coerce_date_reduces_aware_datetimes_to_utc() -> None:
    # 01:00 on July 2nd at UTC+02:00 is still July 1st in UTC.
    plus_two = timezone(timedelta(hours=2))
    local = datetime(2024, 7, 2, 1, 0, tzinfo=plus_two)

    assert coerce_date(local, "End date") == date(2024, 7, 1)
    assert coerce_date(local.isoformat(), "End date") == date(2024, 7, 1)
    assert coerce_date(
        datetime(2024, 7, 2, 1, 0), "End date"
    ) == date(2024, 7, 2)
