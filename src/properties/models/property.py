from django.db import models
from django.conf import settings


class Property(models.Model):
    class PropertyType(models.TextChoices):
        APARTMENT = "apartment", "Apartment"
        HOUSE = "house", "House"
        VILLA = "villa", "Villa"
        PLOT = "plot", "Plot"
        COMMERCIAL = "commercial", "Commercial"
        OFFICE = "office", "Office"

    class ListingType(models.TextChoices):
        SALE = "sale", "Sale"
        RENT = "rent", "Rent"

    class Status(models.TextChoices):
        AVAILABLE = "available", "Available"
        SOLD = "sold", "Sold"
        RENTED = "rented", "Rented"

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.APARTMENT,
    )
    listing_type = models.CharField(
        max_length=10,
        choices=ListingType.choices,
        default=ListingType.SALE,
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.AVAILABLE)
    price = models.DecimalField(max_digits=15, decimal_places=2)
    available_from = models.DateField(null=True, blank=True)

    address = models.TextField(blank=True, default='')
    city = models.CharField(max_length=100, blank=True, default='')
    state = models.CharField(max_length=100, blank=True, default='')
    pincode = models.CharField(max_length=20, blank=True, default='')
    latitude = models.DecimalField(max_digits=10, decimal_places=8, null=True, blank=True)
    longitude = models.DecimalField(max_digits=11, decimal_places=8, null=True, blank=True)

    area_sqft = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    bedrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    bathrooms = models.PositiveSmallIntegerField(null=True, blank=True)

    # PDF brochure; stored under the same prefix the storage tracker scans
    brochure = models.FileField(upload_to='properties/brochures/%Y/%m/', blank=True, default='')

    is_featured = models.BooleanField(default=False)
    # Denormalized unique-view counter; only ever bumped with F('views') + 1
    views = models.PositiveIntegerField(default=0)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='properties',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'properties'
        ordering = ['-created_at']
        verbose_name_plural = 'properties'
        indexes = [
            models.Index(fields=['city'], name='property_city_idx'),
            models.Index(fields=['property_type'], name='property_type_idx'),
            models.Index(fields=['status'], name='property_status_idx'),
            models.Index(fields=['price'], name='property_price_idx'),
        ]

    def __str__(self):
        return self.title
