"""Key-value store adapters backing the gallery collections."""

from __future__ import annotations

import copy
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from gallery.errors import StoreError
from gallery.utils.env import StoreSettings, store_settings

from .base import KeyValueStore, Updater

KEY_REGEX = re.compile(r"^[a-zA-Z0-9_\-]+$")
_LOGGER = logging.getLogger(__name__)


def validate_key(key: str) -> str:
    """Ensure keys are safe to use as file names and object keys."""
    if not key or not KEY_REGEX.match(key):
        raise StoreError(
            f"Store key '{key}' is invalid. Expected pattern "
            f"{KEY_REGEX.pattern}"
        )
    return key


def _json_dumps(payload: Any) -> str:
    """Serialize JSON using a strict encoder (no NaN/Infinity literals)."""
    return json.dumps(payload, allow_nan=False)


def _apply(value: Union[Updater, Any], current: Any) -> Any:
    if callable(value):
        return value(current)
    return value


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store used for tests and local runs."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self._values[validate_key(key)] = copy.deepcopy(value)

    def read(self, key: str, default: Any = None) -> Any:
        validate_key(key)
        if key not in self._values:
            return default
        return copy.deepcopy(self._values[key])

    def write(
        self,
        key: str,
        value: Union[Updater, Any],
        *,
        default: Any = None,
    ) -> Any:
        new_value = _apply(value, self.read(key, default))
        self._values[key] = copy.deepcopy(new_value)
        return new_value

    def keys(self) -> list[str]:
        return sorted(self._values)


class LocalKeyValueStore(KeyValueStore):
    """One JSON file per key inside a namespace directory."""

    def __init__(self, directory: Union[str, Path], prefix: str = "") -> None:
        base = Path(directory)
        self._directory = base / prefix if prefix else base

    def _path(self, key: str) -> Path:
        return self._directory / f"{validate_key(key)}.json"

    def read(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _LOGGER.error("Failed to read key=%s from %s: %s", key, path, exc)
            raise StoreError(f"Failed to read '{key}'") from exc

    def write(
        self,
        key: str,
        value: Union[Updater, Any],
        *,
        default: Any = None,
    ) -> Any:
        new_value = _apply(value, self.read(key, default))
        path = self._path(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_text(_json_dumps(new_value), encoding="utf-8")
        except (OSError, ValueError) as exc:
            _LOGGER.error("Failed to write key=%s to %s: %s", key, path, exc)
            raise StoreError(f"Failed to write '{key}'") from exc
        return new_value


def _build_s3_client(region: Optional[str] = None) -> Any:
    client_kwargs: Dict[str, Any] = {
        "config": Config(retries={"max_attempts": 5, "mode": "standard"}),
    }
    if region:
        client_kwargs["region_name"] = region
    return boto3.client("s3", **client_kwargs)


class S3KeyValueStore(KeyValueStore):
    """Store each key as a JSON object under ``<prefix>/<key>.json``."""

    def __init__(
        self,
        bucket: str,
        *,
        prefix: str = "",
        client: Any | None = None,
        region: Optional[str] = None,
    ) -> None:
        if not bucket:
            raise StoreError("bucket must be provided for S3 storage")
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._client = client or _build_s3_client(region)

    def _object_key(self, key: str) -> str:
        validate_key(key)
        if self._prefix:
            return f"{self._prefix}/{key}.json"
        return f"{key}.json"

    def read(self, key: str, default: Any = None) -> Any:
        object_key = self._object_key(key)
        try:
            response = self._client.get_object(
                Bucket=self._bucket, Key=object_key
            )
            return json.loads(response["Body"].read())
        except ClientError as exc:
            error_code = exc.response.get("Error", {}).get("Code")
            if error_code in {"NoSuchKey", "404"}:
                return default
            _LOGGER.error(
                "ClientError fetching key=%s from bucket=%s: %s",
                object_key,
                self._bucket,
                exc,
            )
            raise StoreError(f"Failed to read '{key}'") from exc
        except BotoCoreError as exc:
            _LOGGER.error("BotoCoreError fetching key=%s: %s", object_key, exc)
            raise StoreError(f"Failed to read '{key}'") from exc
        except ValueError as exc:
            _LOGGER.error(
                "Invalid JSON for key=%s in bucket=%s: %s",
                object_key,
                self._bucket,
                exc,
            )
            raise StoreError(f"Failed to read '{key}'") from exc

    def write(
        self,
        key: str,
        value: Union[Updater, Any],
        *,
        default: Any = None,
    ) -> Any:
        new_value = _apply(value, self.read(key, default))
        object_key = self._object_key(key)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=object_key,
                Body=_json_dumps(new_value).encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as exc:
            _LOGGER.error(
                "Failed to store key=%s in bucket=%s: %s",
                object_key,
                self._bucket,
                exc,
            )
            raise StoreError(f"Failed to write '{key}'") from exc
        return new_value


def build_kv_store_from_env(
    settings: Optional[StoreSettings] = None,
) -> KeyValueStore:
    """Return the key-value adapter selected by the environment."""

    settings = settings or store_settings()
    if settings.backend == "local":
        _LOGGER.info("Using local key-value store at %s", settings.local_dir)
        return LocalKeyValueStore(settings.local_dir, prefix=settings.prefix)
    if settings.backend == "s3":
        if not settings.bucket:
            raise StoreError("GALLERY_STORE_BUCKET is not configured")
        _LOGGER.info("Using S3 key-value store bucket=%s", settings.bucket)
        return S3KeyValueStore(
            settings.bucket,
            prefix=settings.prefix,
            region=settings.region,
        )
    return InMemoryKeyValueStore()
