from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field, OpenApiTypes

from src.properties.models import PropertyImage


class PropertyImageSerializer(serializers.ModelSerializer):
    # Absolute URL (with scheme/host) if request is in context
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = PropertyImage
        fields = ["id", "property", "image", "image_url", "caption", "created_at"]
        read_only_fields = ["id", "property", "image", "image_url", "created_at"]

    @extend_schema_field(OpenApiTypes.STR)
    def get_image_url(self, obj) -> str:
        if not obj.image:
            return ""
        rel = obj.image.url
        request = self.context.get("request")
        return request.build_absolute_uri(rel) if request else rel


class PropertyImageUploadSerializer(serializers.Serializer):
    """
    Documents the multipart shape for OpenAPI; the view reads
    request.FILES.getlist('images') and falls back to a single 'image'.
    """
    image = serializers.ImageField(required=False)
    images = serializers.ListField(
        child=serializers.ImageField(),
        required=False,
        write_only=True,
        allow_empty=True,
    )
    caption = serializers.CharField(required=False, allow_blank=True, max_length=200)


class BrochureUploadSerializer(serializers.Serializer):
    brochure = serializers.FileField()
