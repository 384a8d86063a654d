"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Shared fixtures for the gallery test-suite.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Callable

import pytest

from gallery.services import GalleryService
from gallery.storage import InMemoryKeyValueStore
from gallery.utils import env

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep store and ranking settings from leaking into tests."""

    for key in (
        "GALLERY_STORE_BACKEND",
        "GALLERY_STORE_DIR",
        "GALLERY_STORE_BUCKET",
        "GALLERY_STORE_PREFIX",
        "GALLERY_STORE_REGION",
        "GALLERY_STRICT_RANKINGS",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(env, "_ENV_LOADED", True)


@pytest.fixture()
def id_factory() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture()
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def service(
    kv_store: InMemoryKeyValueStore, id_factory: Callable[[], str]
) -> GalleryService:
    return GalleryService.from_kv_store(
        kv_store,
        clock=lambda: FIXED_NOW,
        id_factory=id_factory,
    )
