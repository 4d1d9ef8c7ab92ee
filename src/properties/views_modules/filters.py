from django.db.models import Q
from django_filters import rest_framework as df

from ..models import Property


class PropertyFilter(df.FilterSet):
    price_min     = df.NumberFilter(field_name='price', lookup_expr='gte', label='Price min')
    price_max     = df.NumberFilter(field_name='price', lookup_expr='lte', label='Price max')
    bedrooms_min  = df.NumberFilter(field_name='bedrooms', lookup_expr='gte', label='Bedrooms min')
    area_min      = df.NumberFilter(field_name='area_sqft', lookup_expr='gte', label='Area min (sqft)')
    area_max      = df.NumberFilter(field_name='area_sqft', lookup_expr='lte', label='Area max (sqft)')
    city          = df.CharFilter(field_name='city', lookup_expr='icontains', label='City (contains)')
    property_type = df.ChoiceFilter(choices=Property.PropertyType.choices)
    listing_type  = df.ChoiceFilter(choices=Property.ListingType.choices)
    status        = df.ChoiceFilter(choices=Property.Status.choices)
    is_featured   = df.BooleanFilter(field_name='is_featured')

    q = df.CharFilter(method='filter_q', label='Search')

    def filter_q(self, queryset, name, value):
        terms = [t.strip() for t in (value or "").split() if t.strip()]
        for term in terms:
            queryset = queryset.filter(
                Q(title__icontains=term) |
                Q(description__icontains=term) |
                Q(address__icontains=term) |
                Q(city__icontains=term)
            )
        return queryset

    class Meta:
        model = Property
        fields = [
            'q', 'price_min', 'price_max', 'bedrooms_min',
            'area_min', 'area_max', 'city',
            'property_type', 'listing_type', 'status', 'is_featured',
        ]
