"""
Element Alchemy Persistence Layer.

Saved-snapshot models, key-value stores, and progress load/save.
"""

from src.database.client import get_supabase_client
from src.database.models import SavedProgress
from src.database.progress import (
    ProgressManager,
    deserialize_progress,
    serialize_progress,
)
from src.database.store import (
    LocalFileStore,
    MemoryStore,
    SaveStore,
    SupabaseStore,
    create_store,
)

__all__ = [
    "get_supabase_client",
    "create_store",
    "deserialize_progress",
    "serialize_progress",
    "LocalFileStore",
    "MemoryStore",
    "ProgressManager",
    "SavedProgress",
    "SaveStore",
    "SupabaseStore",
]
