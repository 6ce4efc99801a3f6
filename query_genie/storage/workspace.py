from __future__ import annotations

import logging
from pathlib import Path

from .backends import StoragePort

logger = logging.getLogger(__name__)

API_KEY_SLOT = "query_genie_openai_api_key"
SCHEMA_SLOT = "query_genie_schema"


class Workspace:
    """The user's saved API key and last-entered schema text."""

    def __init__(self, storage: StoragePort) -> None:
        self.storage = storage

    @property
    def api_key(self) -> str:
        return (self.storage.get(API_KEY_SLOT) or "").strip()

    @property
    def schema_text(self) -> str:
        return self.storage.get(SCHEMA_SLOT) or ""

    def save_api_key(self, value: str) -> None:
        self.storage.set(API_KEY_SLOT, value)

    def clear_api_key(self) -> None:
        self.storage.remove(API_KEY_SLOT)

    def save_schema(self, schema_text: str) -> None:
        self.storage.set(SCHEMA_SLOT, schema_text)

    def clear_schema(self) -> None:
        self.storage.remove(SCHEMA_SLOT)

    def import_schema_file(self, path: str | Path) -> str:
        """Replace the saved schema with the contents of a local text file.

        Bytes that are not valid UTF-8 become U+FFFD rather than failing.
        """
        schema_text = Path(path).read_text(encoding="utf-8", errors="replace")
        self.save_schema(schema_text)
        logger.info(f"Imported schema from {path} ({len(schema_text)} chars)")
        return schema_text
