from .view_tracking import (
    Identity, UserIdentity, SessionIdentity, ViewResult,
    identity_for, record_view, unique_viewers,
)
from .storage import (
    StorageProvider, DjangoStorageProvider, StoredObject, StorageStats,
    collect_storage_stats, get_storage_provider,
)
from .storage_history import update_storage_history, get_storage_history

__all__ = [
    "Identity",
    "UserIdentity",
    "SessionIdentity",
    "ViewResult",
    "identity_for",
    "record_view",
    "unique_viewers",
    "StorageProvider",
    "DjangoStorageProvider",
    "StoredObject",
    "StorageStats",
    "collect_storage_stats",
    "get_storage_provider",
    "update_storage_history",
    "get_storage_history",
]
