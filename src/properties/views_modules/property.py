import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django_filters import rest_framework as df
from drf_spectacular.utils import (
    extend_schema_view, extend_schema, OpenApiParameter, OpenApiTypes,
    OpenApiExample, OpenApiResponse
)
from rest_framework import viewsets, permissions, filters, status
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response

from ..exceptions import StorageProviderError, ViewRecordingError
from ..models import Property, PropertyImage
from ..pagination import PropertyPagination
from ..permissions import IsStaffOrReadOnly, IsStaffOrListingCreator
from ..serializers import (
    PropertySerializer, PropertyImageSerializer, PropertyImageUploadSerializer,
    BrochureUploadSerializer, RecordViewSerializer, ViewResultSerializer,
    PropertyViewersSerializer, StorageHistoryRecordSerializer, StorageOverviewSerializer,
)
from ..services import (
    collect_storage_stats, get_storage_history, identity_for,
    record_view, unique_viewers, update_storage_history,
)
from ..throttling import ScopedRateThrottleIsolated, PropertyViewThrottle
from ..validators import validate_image_file, validate_brochure_file
from .filters import PropertyFilter

logger = logging.getLogger(__name__)


@extend_schema(tags=["properties"])
@extend_schema_view(
    list=extend_schema(
        summary="List properties",
        description="Browse listings with filters, search and ordering.",
        auth=[],
        parameters=[
            OpenApiParameter("q", OpenApiTypes.STR, description="Search in title/description/address/city",
                             examples=[OpenApiExample("Single term", value="pune")]),
            OpenApiParameter("ordering", OpenApiTypes.STR,
                             description="price, -price, created_at, -created_at, views, -views"),
        ],
    ),
    retrieve=extend_schema(summary="Retrieve property", auth=[]),
    create=extend_schema(summary="Create property (staff only)"),
    update=extend_schema(summary="Update property (staff only)"),
    partial_update=extend_schema(summary="Partial update property (staff only)"),
    destroy=extend_schema(
        summary="Delete property (staff only)",
        description="Deletes the listing with its images and brochure; the storage ledger is refreshed afterwards.",
    ),
)
class PropertyViewSet(viewsets.ModelViewSet):
    queryset = Property.objects.select_related('created_by').prefetch_related('images')
    serializer_class = PropertySerializer
    permission_classes = (IsStaffOrReadOnly,)
    pagination_class = PropertyPagination

    filter_backends = (df.DjangoFilterBackend, filters.OrderingFilter)
    filterset_class = PropertyFilter
    ordering_fields = ('price', 'created_at', 'views', 'area_sqft')
    ordering = ('-created_at',)

    # Per-action throttling
    throttle_classes = (ScopedRateThrottleIsolated,)

    def get_throttles(self):
        action_name = getattr(self, 'action', None)
        scope_map = {
            'list': 'properties_list',
            'record_view': 'property_view',
            'upload_images': 'property_upload',
            'brochure': 'property_upload',
        }
        self.throttle_scope = scope_map.get(action_name)
        if action_name == 'record_view':
            return [PropertyViewThrottle()]
        return super().get_throttles()

    def get_serializer_class(self):
        action_name = getattr(self, 'action', None)
        if action_name == 'upload_images':
            return PropertyImageUploadSerializer
        if action_name == 'brochure':
            return BrochureUploadSerializer
        if action_name == 'record_view':
            return RecordViewSerializer
        return super().get_serializer_class()

    def perform_create(self, serializer):
        """Bind creator to the authenticated staff user."""
        serializer.save(created_by=self.request.user)

    # --- unique view counting ---
    @staticmethod
    def _client_ip(request):
        xff = (request.META.get('HTTP_X_FORWARDED_FOR') or '').split(',')[0].strip()
        return xff or request.META.get('REMOTE_ADDR') or None

    @extend_schema(
        summary="Record a property view",
        description=(
            "Counts one unique view per viewer. Logged-in users are identified by their account, "
            "anonymous browsers by `sessionId` (body) or the `X-Session-Id` header. "
            "Requests with neither are accepted but not counted."
        ),
        request=RecordViewSerializer,
        auth=[],
        responses={
            200: OpenApiResponse(response=ViewResultSerializer, description="View result"),
            404: OpenApiResponse(description="Property not found"),
            500: OpenApiResponse(description="View could not be recorded"),
        },
        examples=[
            OpenApiExample("Anonymous beacon", value={"sessionId": "3f2c9d1e-session"}, request_only=True),
            OpenApiExample("First view", value={"isNew": True, "viewCount": 1}, response_only=True),
        ],
    )
    @action(
        detail=True, methods=['post'], url_path='view', url_name='record-view',
        permission_classes=[permissions.AllowAny],
        parser_classes=[JSONParser, FormParser, MultiPartParser],
    )
    def record_view(self, request, pk=None):
        prop = self.get_object()
        body = request.data if hasattr(request.data, 'get') else {}
        # body wins over the header; both go through the same length check
        raw_session = body.get('sessionId') or request.headers.get('X-Session-Id', '')
        payload = self.get_serializer(data={'sessionId': raw_session})
        payload.is_valid(raise_exception=True)

        identity = identity_for(request.user, payload.validated_data.get('sessionId'))
        try:
            result = record_view(prop.pk, identity, ip_address=self._client_ip(request))
        except ViewRecordingError:
            logger.exception("recording view of property %s failed", prop.pk)
            return Response({"detail": "Error recording view"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(ViewResultSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="View counters of a property (staff or listing creator)",
        responses={200: OpenApiResponse(response=PropertyViewersSerializer)},
    )
    @action(detail=True, methods=['get'], url_path='viewers',
            permission_classes=[permissions.IsAuthenticated, IsStaffOrListingCreator])
    def viewers(self, request, pk=None):
        prop = self.get_object()
        data = {"views": prop.views, "unique_viewers": unique_viewers(prop.pk)}
        return Response(PropertyViewersSerializer(data).data)

    # --- storage usage (admin dashboard) ---
    @extend_schema(
        summary="Live storage statistics (staff only)",
        description="Takes a storage snapshot, upserts this month's history record and returns both.",
        responses={
            200: OpenApiResponse(response=StorageOverviewSerializer),
            403: OpenApiResponse(description="Staff only"),
            502: OpenApiResponse(description="Storage provider unavailable"),
        },
    )
    @action(detail=False, methods=['get'], url_path='storage-stats', url_name='storage-stats',
            permission_classes=[permissions.IsAdminUser])
    def storage_stats(self, request):
        try:
            stats = collect_storage_stats()
        except StorageProviderError:
            logger.exception("storage stats unavailable")
            return Response({"detail": "Error fetching storage statistics"}, status=status.HTTP_502_BAD_GATEWAY)

        try:
            history = update_storage_history(stats)
        except DatabaseError:
            # live stats are still useful without the ledger row
            logger.exception("storage history upsert failed")
            history = None

        return Response(StorageOverviewSerializer({"stats": stats, "history": history}).data)

    @extend_schema(
        summary="Monthly storage history (staff only)",
        parameters=[
            OpenApiParameter("months", OpenApiTypes.INT, description="Trailing calendar months (default 12)",
                             examples=[OpenApiExample("Last half year", value=6)]),
        ],
        responses={200: OpenApiResponse(response=StorageHistoryRecordSerializer(many=True))},
    )
    @action(detail=False, methods=['get'], url_path='storage-history', url_name='storage-history',
            permission_classes=[permissions.IsAdminUser])
    def storage_history(self, request):
        try:
            months = int(request.query_params.get('months', 12))
        except (TypeError, ValueError):
            return Response({"detail": "months must be an integer"}, status=status.HTTP_400_BAD_REQUEST)
        months = min(max(months, 1), 120)
        records = get_storage_history(months)
        return Response(StorageHistoryRecordSerializer(records, many=True).data)

    # --- files ---
    @extend_schema(
        summary="Upload image(s) for a property (staff only)",
        description=(
            "Send multipart/form-data.\n"
            "- `image`: single file\n"
            "- `images`: multiple files (repeat the field)\n"
            "Optional `caption` applies to all files in the request."
        ),
        request=PropertyImageUploadSerializer,
        responses={
            201: OpenApiResponse(response=PropertyImageSerializer(many=True), description="Created images"),
            400: OpenApiResponse(description="Invalid image or limit exceeded"),
        },
    )
    @action(detail=True, methods=['post'], url_path='images', parser_classes=[MultiPartParser, FormParser])
    def upload_images(self, request, pk=None):
        prop = self.get_object()

        files = request.FILES.getlist('images')
        if not files and 'image' in request.FILES:
            files = [request.FILES['image']]
        if not files:
            return Response(
                {"detail": 'No files provided. Use "image" or repeated "images".'},
                status=status.HTTP_400_BAD_REQUEST
            )

        existing = prop.images.count()
        max_total = int(getattr(settings, "PROPERTY_IMAGES_MAX_PER_PROPERTY", 10))
        if existing + len(files) > max_total:
            return Response(
                {
                    "detail": f"Too many images. Limit {max_total} per property. "
                              f"You already have {existing}, tried to add {len(files)}."
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        errors = []
        for idx, f in enumerate(files, start=1):
            try:
                validate_image_file(f)
            except DjangoValidationError as e:
                errors.append({"file_index": idx, "error": " ".join(e.messages)})
        if errors:
            return Response({"detail": "Invalid images", "errors": errors}, status=status.HTTP_400_BAD_REQUEST)

        caption = (request.data.get('caption') or '')[:200]
        with transaction.atomic():
            created = [PropertyImage.objects.create(property=prop, image=f, caption=caption) for f in files]
        return Response(
            PropertyImageSerializer(created, many=True, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Upload or remove the PDF brochure (staff only)",
        description="POST multipart with field `brochure` replaces the current file; DELETE removes it.",
        request=BrochureUploadSerializer,
        responses={
            200: OpenApiResponse(response=PropertySerializer),
            400: OpenApiResponse(description="Missing or invalid PDF"),
        },
    )
    @action(detail=True, methods=['post', 'delete'], url_path='brochure', parser_classes=[MultiPartParser, FormParser])
    def brochure(self, request, pk=None):
        prop = self.get_object()

        if request.method == 'DELETE':
            if prop.brochure:
                prop.brochure = ''
                prop.save(update_fields=['brochure', 'updated_at'])
            return Response(PropertySerializer(prop, context={'request': request}).data)

        file = request.FILES.get('brochure')
        if not file:
            return Response({"detail": "Provide file in 'brochure' field (multipart)."},
                            status=status.HTTP_400_BAD_REQUEST)
        try:
            validate_brochure_file(file)
        except DjangoValidationError as e:
            return Response({"detail": " ".join(e.messages)}, status=status.HTTP_400_BAD_REQUEST)

        prop.brochure = file
        prop.save(update_fields=['brochure', 'updated_at'])
        return Response(PropertySerializer(prop, context={'request': request}).data)
