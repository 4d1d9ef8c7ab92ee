import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.module_loading import import_string

from ..exceptions import StorageProviderError

logger = logging.getLogger(__name__)

BYTES_IN_MB = 1024 * 1024
BYTES_IN_GB = 1024 * 1024 * 1024
TWO_PLACES = Decimal("0.01")

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
BROCHURE_EXTENSIONS = (".pdf",)


@dataclass(frozen=True)
class StoredObject:
    name: str
    size: int


class StorageProvider:
    """Minimal surface the tracker needs from a file store."""

    def list_objects(self, prefix: str) -> List[StoredObject]:
        raise NotImplementedError


class DjangoStorageProvider(StorageProvider):
    """Walks a Django storage backend (``default_storage`` unless given)."""

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def list_objects(self, prefix: str) -> List[StoredObject]:
        found = []
        self._walk(prefix.strip("/"), found)
        return found

    def _walk(self, path: str, found: list):
        try:
            dirs, files = self.storage.listdir(path)
        except FileNotFoundError:
            # nothing uploaded under this prefix yet
            return
        for name in files:
            full = f"{path}/{name}" if path else name
            found.append(StoredObject(name=full, size=int(self.storage.size(full))))
        for name in dirs:
            self._walk(f"{path}/{name}" if path else name, found)


def get_storage_provider() -> StorageProvider:
    dotted = getattr(
        settings, "PROPERTIES_STORAGE_PROVIDER",
        "src.properties.services.storage.DjangoStorageProvider",
    )
    return import_string(dotted)()


def _to_mb(size_bytes: int) -> Decimal:
    return (Decimal(size_bytes) / BYTES_IN_MB).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _to_gb(size_bytes: int) -> Decimal:
    return (Decimal(size_bytes) / BYTES_IN_GB).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def classify(name: str) -> Optional[str]:
    """'images', 'brochures' or None, by case-insensitive extension."""
    lowered = name.lower()
    if lowered.endswith(IMAGE_EXTENSIONS):
        return "images"
    if lowered.endswith(BROCHURE_EXTENSIONS):
        return "brochures"
    return None


@dataclass
class FileTypeStats:
    type: str
    count: int = 0
    size_bytes: int = 0

    @property
    def size_mb(self) -> Decimal:
        return _to_mb(self.size_bytes)


@dataclass
class StorageStats:
    total_files: int
    total_size_bytes: int
    quota_gb: int
    images: FileTypeStats = field(default_factory=lambda: FileTypeStats("images"))
    brochures: FileTypeStats = field(default_factory=lambda: FileTypeStats("brochures"))

    @property
    def total_size_mb(self) -> Decimal:
        return _to_mb(self.total_size_bytes)

    @property
    def total_size_gb(self) -> Decimal:
        return _to_gb(self.total_size_bytes)

    @property
    def usage_percentage(self) -> Decimal:
        if not self.quota_gb:
            return Decimal("0.00")
        ratio = Decimal(self.total_size_bytes) / (self.quota_gb * BYTES_IN_GB) * 100
        return ratio.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    @property
    def remaining_gb(self) -> Decimal:
        return Decimal(self.quota_gb) - self.total_size_gb

    @property
    def files_by_type(self) -> List[FileTypeStats]:
        return [self.images, self.brochures]


def collect_storage_stats(provider: Optional[StorageProvider] = None) -> StorageStats:
    """
    Take one snapshot of the provider's usage under PROPERTIES_STORAGE_PREFIX.
    Files that are neither images nor brochures only count towards the totals.
    """
    provider = provider or get_storage_provider()
    prefix = getattr(settings, "PROPERTIES_STORAGE_PREFIX", "properties/")
    try:
        objects = provider.list_objects(prefix)
    except Exception as exc:
        raise StorageProviderError(f"failed to list storage objects under {prefix!r}: {exc}") from exc

    stats = StorageStats(
        total_files=0,
        total_size_bytes=0,
        quota_gb=int(getattr(settings, "PROPERTIES_STORAGE_QUOTA_GB", 5)),
    )
    for obj in objects:
        size = int(obj.size or 0)
        stats.total_files += 1
        stats.total_size_bytes += size
        kind = classify(obj.name)
        if kind is not None:
            bucket = getattr(stats, kind)
            bucket.count += 1
            bucket.size_bytes += size

    logger.debug("storage snapshot: %s files, %s MB", stats.total_files, stats.total_size_mb)
    return stats
