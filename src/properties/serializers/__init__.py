from .property import PropertySerializer
from .property_image import PropertyImageSerializer, PropertyImageUploadSerializer, BrochureUploadSerializer
from .tracking import (
    RecordViewSerializer, ViewResultSerializer, PropertyViewersSerializer,
    StorageStatsSerializer, StorageHistoryRecordSerializer, StorageOverviewSerializer,
)

__all__ = [
    "PropertySerializer",
    "PropertyImageSerializer",
    "PropertyImageUploadSerializer",
    "BrochureUploadSerializer",
    "RecordViewSerializer",
    "ViewResultSerializer",
    "PropertyViewersSerializer",
    "StorageStatsSerializer",
    "StorageHistoryRecordSerializer",
    "StorageOverviewSerializer",
]
