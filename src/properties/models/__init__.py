from .property import Property
from .property_image import PropertyImage
from .property_view import PropertyView
from .storage_history import StorageHistoryRecord

__all__ = [
    "Property",
    "PropertyImage",
    "PropertyView",
    "StorageHistoryRecord",
]
