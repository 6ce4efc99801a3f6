"""Persisted key/schema state behind an injectable storage port."""

from .backends import JsonFileStorage, MemoryStorage, StoragePort
from .workspace import API_KEY_SLOT, SCHEMA_SLOT, Workspace

__all__ = [
    "API_KEY_SLOT",
    "SCHEMA_SLOT",
    "JsonFileStorage",
    "MemoryStorage",
    "StoragePort",
    "Workspace",
]
