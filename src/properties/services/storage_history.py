"""
Monthly storage usage ledger.

One ``StorageHistoryRecord`` per UTC calendar month, overwritten in place on
every snapshot taken during that month. Past months are never touched again.
"""
import logging
from datetime import datetime, timezone as dt_timezone
from typing import Optional

from django.utils import timezone

from ..models import StorageHistoryRecord
from .storage import StorageStats, collect_storage_stats

logger = logging.getLogger(__name__)


def month_key(moment: Optional[datetime] = None) -> str:
    moment = moment or timezone.now()
    if timezone.is_aware(moment):
        moment = moment.astimezone(dt_timezone.utc)
    return moment.strftime("%Y-%m")


def _shift_month(key: str, months_back: int) -> str:
    year, month = (int(part) for part in key.split("-"))
    index = year * 12 + (month - 1) - months_back
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def update_storage_history(stats: Optional[StorageStats] = None) -> StorageHistoryRecord:
    """
    Upsert the current month's record from a fresh storage snapshot.
    A provider failure propagates and leaves the table untouched.
    """
    if stats is None:
        stats = collect_storage_stats()
    current = month_key()

    record, created = StorageHistoryRecord.objects.update_or_create(
        record_month=current,
        defaults={
            "total_files": stats.total_files,
            "total_size_mb": stats.total_size_mb,
            "images_count": stats.images.count,
            "images_size_mb": stats.images.size_mb,
            "brochures_count": stats.brochures.count,
            "brochures_size_mb": stats.brochures.size_mb,
        },
    )
    logger.info(
        "storage history %s for %s: %s files, %s MB",
        "created" if created else "updated", current, record.total_files, record.total_size_mb,
    )
    return record


def get_storage_history(months: int = 12):
    """Records of the trailing ``months`` calendar months, oldest first."""
    months = max(int(months), 1)
    first = _shift_month(month_key(), months - 1)
    return StorageHistoryRecord.objects.filter(record_month__gte=first).order_by("record_month")
