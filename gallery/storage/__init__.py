"""Storage layer abstractions and adapters."""

from .base import EntityRepository, KeyValueStore
from .entity_store import EntityStore
from .kv_store import (InMemoryKeyValueStore, LocalKeyValueStore,
                       S3KeyValueStore, build_kv_store_from_env)

__all__ = [
    "EntityRepository",
    "EntityStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "LocalKeyValueStore",
    "S3KeyValueStore",
    "build_kv_store_from_env",
]
