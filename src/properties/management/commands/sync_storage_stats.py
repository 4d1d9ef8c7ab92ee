from django.core.management.base import BaseCommand, CommandError

from src.properties.exceptions import StorageProviderError
from src.properties.services import update_storage_history


class Command(BaseCommand):
    """
    Re-sync this month's storage history row with the storage backend.
    Useful after files were removed outside the API, or to start tracking.
    """

    help = "Take a storage snapshot and upsert the current month's storage history record."

    def handle(self, *args, **opts):
        self.stdout.write("Syncing storage stats with the database...")
        try:
            record = update_storage_history()
        except StorageProviderError as e:
            raise CommandError(f"Error syncing storage stats: {e}") from e

        self.stdout.write(self.style.SUCCESS("Storage history updated."))
        self.stdout.write(f"  Month:        {record.record_month}")
        self.stdout.write(f"  Total files:  {record.total_files}")
        self.stdout.write(f"  Total size:   {record.total_size_mb} MB")
        self.stdout.write(f"  Images:       {record.images_count} files ({record.images_size_mb} MB)")
        self.stdout.write(f"  Brochures:    {record.brochures_count} files ({record.brochures_size_mb} MB)")
        self.stdout.write(f"  Last updated: {record.updated_at:%Y-%m-%d %H:%M:%S %Z}")
