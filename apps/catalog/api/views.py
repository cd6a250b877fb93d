from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.catalog.models import Category, Variant
from apps.catalog.services import (
    CatalogSearchService,
    CategoryListingService,
    parse_query,
    signature_provider,
)
from .filters import ProductFilter, VariantFilter
from .serializers import (
    CategoryListingSerializer,
    CategorySerializer,
    ParsedQuerySerializer,
    SearchResultSerializer,
)


def _search_query(request):
    query = request.query_params.get('q')
    if query is None:
        return None, Response(
            {'error': 'Search query is required'},
            status=status.HTTP_400_BAD_REQUEST
        )
    return query, None


class SearchViewSet(viewsets.ViewSet):
    """
    API endpoint for free-text catalog search.

    list: categories and variants matching ?q=
    parse: price range, categories and attribute values found in ?q=
    refresh: reload the catalog signature (staff only)
    """

    def get_permissions(self):
        if self.action == 'refresh':
            return [permissions.IsAdminUser()]
        return [permissions.AllowAny()]

    def list(self, request):
        query, error = _search_query(request)
        if error:
            return error

        result = CatalogSearchService.search(query)
        serializer = SearchResultSerializer(result, context={'request': request})
        return Response(serializer.data)

    @action(detail=False, methods=['get'])
    def parse(self, request):
        query, error = _search_query(request)
        if error:
            return error

        parsed = parse_query(query)
        return Response(ParsedQuerySerializer(parsed).data)

    @action(detail=False, methods=['post'])
    def refresh(self, request):
        signature = signature_provider.refresh()
        return Response({
            'categories': len(signature.categories),
            'attributes': len(signature.attributes),
        })


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for categories.

    products: the category's products narrowed by facet parameters
    (?attr_<attribute id>=<option id>[,<option id>...]) plus price/stock filters.
    """
    queryset = Category.objects.filter(is_active=True).select_related('parent')
    serializer_class = CategorySerializer
    permission_classes = [permissions.AllowAny]

    @action(detail=True, methods=['get'])
    def products(self, request, pk=None):
        category = self.get_object()
        params = {
            key: request.query_params.getlist(key)
            for key in request.query_params.keys()
        }

        products = ProductFilter(
            request.query_params,
            queryset=CategoryListingService.published_products(category)
        ).qs
        variants = VariantFilter(
            request.query_params,
            queryset=Variant.objects.all()
        ).qs

        listing = CategoryListingService.list_products(
            category, params, products=products, variants=variants
        )
        return Response(CategoryListingSerializer(listing).data)
