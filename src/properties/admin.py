from django.contrib import admin
from .models import Property, PropertyImage, PropertyView, StorageHistoryRecord


class PropertyImageInline(admin.TabularInline):
    model = PropertyImage
    extra = 0
    fields = ('image', 'caption', 'created_at')
    readonly_fields = ('created_at',)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'title', 'city', 'price', 'property_type',
        'listing_type', 'status', 'is_featured', 'views', 'created_at'
    )
    list_filter = (
        'status',
        'property_type',
        'listing_type',
        'is_featured',
        'city',
        'created_at',
    )
    date_hierarchy = 'created_at'
    search_fields = ('id', 'title', 'city', 'address', 'description', 'created_by__email')
    autocomplete_fields = ('created_by',)
    # the counter is owned by the view tracker
    readonly_fields = ('views', 'created_at', 'updated_at')
    ordering = ('-created_at',)
    list_select_related = ('created_by',)
    inlines = (PropertyImageInline,)


@admin.register(PropertyView)
class PropertyViewAdmin(admin.ModelAdmin):
    list_display = ('id', 'property', 'user', 'session_id', 'ip_address', 'viewed_at')
    list_filter = ('viewed_at',)
    date_hierarchy = 'viewed_at'
    search_fields = ('property__title', 'user__email', 'session_id', 'ip_address')
    autocomplete_fields = ('property', 'user')
    readonly_fields = ('viewed_at',)
    list_select_related = ('property', 'user')


@admin.register(StorageHistoryRecord)
class StorageHistoryRecordAdmin(admin.ModelAdmin):
    list_display = (
        'record_month', 'total_files', 'total_size_mb',
        'images_count', 'images_size_mb', 'brochures_count', 'brochures_size_mb', 'updated_at'
    )
    ordering = ('-record_month',)
    readonly_fields = [f.name for f in StorageHistoryRecord._meta.fields]

    def has_add_permission(self, request):
        return False
