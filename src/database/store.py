"""
Element Alchemy - Save Stores

Key-value storage collaborators holding serialized game snapshots. A store
only moves opaque strings; validation happens in ProgressManager.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from supabase import Client

from src.config.settings import Settings
from src.database.client import get_supabase_client


class SaveStore(Protocol):
    """Key-value storage for serialized snapshots."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, blob: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Keeps blobs in a dict. Useful for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, blob: str) -> None:
        self._data[key] = blob

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class LocalFileStore:
    """Stores each key as a JSON file inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, blob: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(blob, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class SupabaseStore:
    """Stores blobs in the `saves` table (columns: key, blob)."""

    def __init__(self, client: Client, table: str = "saves") -> None:
        self.client = client
        self.table = client.table(table)

    def read(self, key: str) -> str | None:
        data = (
            self.table
            .select("blob")
            .eq("key", key)
            .execute()
        )
        if data.data:
            return data.data[0]["blob"]
        return None

    def write(self, key: str, blob: str) -> None:
        (
            self.table
            .upsert({"key": key, "blob": blob})
            .execute()
        )

    def delete(self, key: str) -> None:
        self.table.delete().eq("key", key).execute()


def create_store(settings: Settings) -> SaveStore:
    """
    Build the store selected by settings.storage_backend.

    Raises:
        ValueError: If the supabase backend is selected without credentials
    """
    backend = settings.storage_backend
    if backend == "memory":
        return MemoryStore()
    if backend == "local":
        return LocalFileStore(settings.save_dir)
    if backend == "supabase":
        return SupabaseStore(get_supabase_client())
    raise ValueError(f"Unknown storage backend: {backend}")
