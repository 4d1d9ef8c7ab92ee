from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.db.models import Count

from .models import CustomUser


class CustomUserCreationForm(UserCreationForm):
    class Meta:
        model = CustomUser
        fields = ('email',)


class CustomUserChangeForm(UserChangeForm):
    class Meta:
        model = CustomUser
        fields = '__all__'


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    """Admins are plain staff accounts; the listings column counts what they created."""
    add_form = CustomUserCreationForm
    form = CustomUserChangeForm
    model = CustomUser

    list_display = ('email', 'role', 'location', 'listings', 'is_active', 'date_joined')
    list_filter = ('is_staff', 'is_active')
    search_fields = ('email', 'first_name', 'last_name', 'phone_number', 'location')
    ordering = ('email',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('first_name', 'last_name', 'phone_number', 'location')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups')}),
        ('Activity', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'password1', 'password2', 'is_staff')}),
    )
    readonly_fields = ('last_login', 'date_joined')

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(listings_count=Count('properties'))

    @admin.display(ordering='listings_count', description='Listings')
    def listings(self, obj):
        return obj.listings_count
