from .serializers import (
    CategorySerializer,
    CategorySummarySerializer,
    ProductSummarySerializer,
    VariantAttributeSerializer,
    SearchMatchSerializer,
    SearchResultSerializer,
    ParsedQuerySerializer,
    ListingEntrySerializer,
    CategoryListingSerializer,
)

__all__ = [
    'CategorySerializer',
    'CategorySummarySerializer',
    'ProductSummarySerializer',
    'VariantAttributeSerializer',
    'SearchMatchSerializer',
    'SearchResultSerializer',
    'ParsedQuerySerializer',
    'ListingEntrySerializer',
    'CategoryListingSerializer',
]
