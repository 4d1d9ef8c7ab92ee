from django_filters import rest_framework as df
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes, OpenApiExample
)
from rest_framework import mixins, viewsets

from ..models import PropertyImage
from ..permissions import IsStaffOrReadOnly
from ..serializers import PropertyImageSerializer


@extend_schema(tags=["properties"])
@extend_schema_view(
    list=extend_schema(
        summary="List property images",
        parameters=[
            OpenApiParameter(name="property", type=OpenApiTypes.INT,
                             description="Filter by property id",
                             examples=[OpenApiExample("For property #1", value=1)]),
        ],
        auth=[],
    ),
    retrieve=extend_schema(summary="Retrieve property image", auth=[]),
    partial_update=extend_schema(
        summary="Update image caption (staff only)",
        examples=[OpenApiExample("Set caption", value={"caption": "Kitchen view"})],
    ),
    destroy=extend_schema(summary="Delete image (staff only)"),
)
class PropertyImageViewSet(mixins.ListModelMixin,
                           mixins.RetrieveModelMixin,
                           mixins.UpdateModelMixin,
                           mixins.DestroyModelMixin,
                           viewsets.GenericViewSet):
    """
    Uploads happen via /api/properties/{id}/images/. This ViewSet supports:
      - GET    /api/property-images/?property=ID
      - PATCH  /api/property-images/{id}/     {"caption": "..."}  (staff only)
      - DELETE /api/property-images/{id}/                         (staff only)
    Deleting an image removes the stored file and refreshes the storage ledger.
    """
    queryset = PropertyImage.objects.select_related('property').all()
    serializer_class = PropertyImageSerializer
    permission_classes = (IsStaffOrReadOnly,)
    http_method_names = ['get', 'patch', 'delete', 'head', 'options']
    filter_backends = (df.DjangoFilterBackend,)
    filterset_fields = ('property',)
