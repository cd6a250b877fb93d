from django.db.models import Q
from django_filters import rest_framework as filters
from apps.catalog.models import Product, Variant


class VariantFilter(filters.FilterSet):
    """Price and stock filters applied to variants before facet matching."""

    # Price filters
    min_price = filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='price', lookup_expr='lte')

    # Stock filters
    in_stock = filters.BooleanFilter(method='filter_in_stock')

    class Meta:
        model = Variant
        fields = ['min_price', 'max_price', 'in_stock']

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(stock__gt=0)
        elif value is False:
            return queryset.filter(stock__lte=0)
        return queryset


class ProductFilter(filters.FilterSet):
    """
    Filters for category listings.
    Price bounds keep a product when its base price, or one active variant
    price, lies within both bounds at once.
    """

    # Applied together in filter_queryset
    min_price = filters.NumberFilter(method='collect_price_bound')
    max_price = filters.NumberFilter(method='collect_price_bound')
    brand = filters.CharFilter(field_name='brand', lookup_expr='iexact')

    class Meta:
        model = Product
        fields = ['min_price', 'max_price', 'brand']

    def collect_price_bound(self, queryset, name, value):
        return queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        low = self.form.cleaned_data.get('min_price')
        high = self.form.cleaned_data.get('max_price')
        if low is None and high is None:
            return queryset

        base = Q()
        variant = Q(variants__status=Variant.STATUS_ACTIVE)
        if low is not None:
            base &= Q(base_price__gte=low)
            variant &= Q(variants__price__gte=low)
        if high is not None:
            base &= Q(base_price__lte=high)
            variant &= Q(variants__price__lte=high)
        return queryset.filter(base | variant).distinct()
