"""Helpers for loading environment configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

_ENV_LOADED = False
_BACKENDS = {"memory", "local", "s3"}
_DEFAULT_LOCAL_DIR = "/tmp/gallery-store"
_DEFAULT_PREFIX = "gallery"

_LOGGER = logging.getLogger(__name__)


def load_dotenv(dotenv_path: Union[str, Path] = ".env") -> None:
    """Load environment variables from a simple ``.env`` file if present."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    path = Path(dotenv_path)
    if path.exists():
        for line in path.read_text().splitlines():
            parsed = _parse_line(line)
            if parsed:
                key, value = parsed
                os.environ.setdefault(key, value)

    _ENV_LOADED = True


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    if "=" not in stripped:
        return None

    key, value = stripped.split("=", 1)
    return (key.strip(), value.strip())


def _truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    lowered = value.strip().lower()
    return lowered in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class StoreSettings:
    """Key-value backend selection read from the environment."""

    backend: str
    local_dir: Path
    bucket: Optional[str]
    prefix: str
    region: Optional[str]


def store_settings() -> StoreSettings:
    """Return the key-value backend settings.

    ``GALLERY_STORE_BACKEND`` picks ``memory`` (default), ``local`` or
    ``s3``. Unknown values fall back to ``memory`` with a warning.
    """

    load_dotenv()
    backend = os.environ.get("GALLERY_STORE_BACKEND", "memory").strip().lower()
    if backend not in _BACKENDS:
        _LOGGER.warning(
            "Unknown GALLERY_STORE_BACKEND=%s; using in-memory store", backend
        )
        backend = "memory"

    bucket = os.environ.get("GALLERY_STORE_BUCKET", "").strip() or None
    region = (
        os.environ.get("GALLERY_STORE_REGION")
        or os.environ.get("AWS_REGION")
        or os.environ.get("AWS_DEFAULT_REGION")
    )
    return StoreSettings(
        backend=backend,
        local_dir=Path(
            os.environ.get("GALLERY_STORE_DIR", _DEFAULT_LOCAL_DIR)
        ),
        bucket=bucket,
        prefix=os.environ.get("GALLERY_STORE_PREFIX", _DEFAULT_PREFIX).strip(
            "/"
        ),
        region=region or None,
    )


def strict_rankings() -> bool:
    """Return True when rankings should raise on dangling references."""

    load_dotenv()
    return _truthy(os.environ.get("GALLERY_STRICT_RANKINGS"))
