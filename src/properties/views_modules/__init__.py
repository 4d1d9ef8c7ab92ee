from .property import PropertyViewSet
from .property_image import PropertyImageViewSet
from .filters import PropertyFilter

__all__ = [
    "PropertyViewSet",
    "PropertyImageViewSet",
    "PropertyFilter",
]
