from rest_framework import serializers

from src.properties.models import StorageHistoryRecord


class RecordViewSerializer(serializers.Serializer):
    """Body of the view beacon; the session id may also come as X-Session-Id."""
    sessionId = serializers.CharField(required=False, allow_blank=True, max_length=255)


class ViewResultSerializer(serializers.Serializer):
    isNew = serializers.BooleanField(source="is_new")
    viewCount = serializers.IntegerField(source="view_count")


class PropertyViewersSerializer(serializers.Serializer):
    views = serializers.IntegerField()
    unique_viewers = serializers.IntegerField()


class FileTypeStatsSerializer(serializers.Serializer):
    type = serializers.CharField()
    count = serializers.IntegerField()
    size_mb = serializers.DecimalField(max_digits=14, decimal_places=2)


class StorageStatsSerializer(serializers.Serializer):
    total_files = serializers.IntegerField()
    total_size_bytes = serializers.IntegerField()
    total_size_mb = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_size_gb = serializers.DecimalField(max_digits=12, decimal_places=2)
    usage_percentage = serializers.DecimalField(max_digits=8, decimal_places=2)
    quota_gb = serializers.IntegerField()
    remaining_gb = serializers.DecimalField(max_digits=12, decimal_places=2)
    files_by_type = FileTypeStatsSerializer(many=True)


class StorageHistoryRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = StorageHistoryRecord
        fields = [
            "record_month",
            "total_files", "total_size_mb",
            "images_count", "images_size_mb",
            "brochures_count", "brochures_size_mb",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class StorageOverviewSerializer(serializers.Serializer):
    stats = StorageStatsSerializer()
    history = StorageHistoryRecordSerializer(allow_null=True)
