from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views_modules import PropertyViewSet, PropertyImageViewSet

app_name = "properties"

router = DefaultRouter()
router.register(r"properties", PropertyViewSet, basename="property")
router.register(r"property-images", PropertyImageViewSet, basename="propertyimage")

urlpatterns = [
    path("", include(router.urls)),
]
