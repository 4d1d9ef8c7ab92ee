from drf_spectacular.utils import extend_schema_field, OpenApiTypes
from rest_framework import serializers

from src.properties.models import Property
from .property_image import PropertyImageSerializer


class PropertySerializer(serializers.ModelSerializer):
    created_by = serializers.StringRelatedField(read_only=True)
    images = PropertyImageSerializer(many=True, read_only=True)
    brochure_url = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = [
            "id", "title", "description",
            "property_type", "listing_type", "status",
            "price", "available_from",
            "address", "city", "state", "pincode",
            "latitude", "longitude",
            "area_sqft", "bedrooms", "bathrooms",
            "is_featured", "views",
            "images", "brochure_url",
            "created_by", "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "views", "images", "brochure_url",
            "created_by", "created_at", "updated_at",
        ]

    @extend_schema_field(OpenApiTypes.STR)
    def get_brochure_url(self, obj) -> str:
        if not obj.brochure:
            return ""
        rel = obj.brochure.url
        request = self.context.get("request")
        return request.build_absolute_uri(rel) if request else rel

    def validate_price(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Price must be >= 0.")
        return value

    def validate_area_sqft(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Area must be >= 0.")
        return value

    def validate_latitude(self, value):
        if value is not None and not (-90 <= float(value) <= 90):
            raise serializers.ValidationError("Latitude must be between -90 and 90.")
        return value

    def validate_longitude(self, value):
        if value is not None and not (-180 <= float(value) <= 180):
            raise serializers.ValidationError("Longitude must be between -180 and 180.")
        return value
