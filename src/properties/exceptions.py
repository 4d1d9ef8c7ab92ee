class ViewRecordingError(Exception):
    """The view ledger or the property counter could not be written."""


class StorageProviderError(Exception):
    """The file-storage provider could not report its current usage."""
