from django.db import models


class StorageHistoryRecord(models.Model):
    """Monthly snapshot of file-storage usage; one row per ``YYYY-MM``."""
    record_month = models.CharField(max_length=7, unique=True)
    total_files = models.PositiveIntegerField(default=0)
    total_size_mb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    images_count = models.PositiveIntegerField(default=0)
    images_size_mb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    brochures_count = models.PositiveIntegerField(default=0)
    brochures_size_mb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'storage_history'
        ordering = ['record_month']

    def __str__(self):
        return f"Storage {self.record_month}: {self.total_files} files, {self.total_size_mb} MB"
