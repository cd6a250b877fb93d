from rest_framework import serializers
from apps.catalog.models import (
    Category,
    Product,
    Variant,
    VariantAttribute,
)


# =============================================================================
# Category Serializers
# =============================================================================

class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug']


class CategorySerializer(serializers.ModelSerializer):
    full_path = serializers.CharField(read_only=True)
    level = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'parent', 'full_path', 'level', 'display_order']


# =============================================================================
# Search Result Serializers
# =============================================================================

class ProductSummarySerializer(serializers.ModelSerializer):
    image = serializers.SerializerMethodField()
    category = CategorySummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'slug', 'image', 'category']

    def get_image(self, obj):
        return obj.get_thumbnail_url()


class VariantAttributeSerializer(serializers.ModelSerializer):
    """One (attribute, option) pair that distinguishes a variant."""
    attribute = serializers.SerializerMethodField()
    option = serializers.SerializerMethodField()

    class Meta:
        model = VariantAttribute
        fields = ['attribute', 'option']

    def get_attribute(self, obj):
        return {'id': obj.attribute_id, 'name': obj.attribute.name}

    def get_option(self, obj):
        return {'id': obj.option_id, 'value': obj.option.value}


class SearchMatchSerializer(serializers.ModelSerializer):
    """
    A matched variant. ``attributes`` only lists assignments to active
    options; the matchers prefetch ``variantattribute_set`` filtered that way.
    """
    image = serializers.SerializerMethodField()
    product = ProductSummarySerializer(read_only=True)
    attributes = VariantAttributeSerializer(
        source='variantattribute_set', many=True, read_only=True
    )

    class Meta:
        model = Variant
        fields = ['id', 'name', 'price', 'slug', 'image', 'product', 'attributes']

    def get_image(self, obj):
        return obj.get_image_url()


class SearchResultSerializer(serializers.Serializer):
    categories = CategorySummarySerializer(many=True, read_only=True)
    products = SearchMatchSerializer(many=True, read_only=True)


# =============================================================================
# Structured Query Serializer
# =============================================================================

class ParsedQuerySerializer(serializers.Serializer):
    residual_query = serializers.CharField()
    matched_categories = serializers.SerializerMethodField()
    matched_attribute_values = serializers.SerializerMethodField()
    price_range = serializers.SerializerMethodField()

    def get_matched_categories(self, obj):
        return [
            {'id': c.id, 'name': c.name, 'slug': c.slug}
            for c in obj.matched_categories
        ]

    def get_matched_attribute_values(self, obj):
        return [
            {'name': m.name, 'value': m.value}
            for m in obj.matched_attribute_values
        ]

    def get_price_range(self, obj):
        if obj.price_range is None:
            return None
        return {k: str(v) for k, v in obj.price_range.to_dict().items()}


# =============================================================================
# Category Listing Serializers
# =============================================================================

class ListingEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField(source='product.id')
    name = serializers.CharField(source='product.name')
    slug = serializers.CharField(source='product.slug')
    brand = serializers.CharField(source='product.brand')
    base_price = serializers.DecimalField(
        source='product.base_price', max_digits=10, decimal_places=2
    )
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image = serializers.CharField(allow_null=True)
    category = CategorySummarySerializer(source='product.category', read_only=True)
    variants = serializers.SerializerMethodField()

    def get_variants(self, obj):
        return [
            {
                'id': v.id,
                'sku': v.sku,
                'price': str(v.price),
                'attributes': VariantAttributeSerializer(
                    v.variantattribute_set.all(), many=True
                ).data,
            }
            for v in obj.variants
        ]


class CategoryListingSerializer(serializers.Serializer):
    category = CategorySummarySerializer(read_only=True)
    attributes = serializers.SerializerMethodField()
    products = ListingEntrySerializer(many=True, read_only=True)
    applied_filters = serializers.SerializerMethodField()
    invalid_params = serializers.ListField(child=serializers.CharField())
    includes_subcategories = serializers.BooleanField()
    subcategories = serializers.SerializerMethodField()

    def get_attributes(self, obj):
        return [
            {
                'id': attr.id,
                'name': attr.name,
                'is_filterable': attr.is_filterable,
                'options': [{'id': o.id, 'value': o.value} for o in attr.options],
            }
            for attr in obj.attributes
        ]

    def get_applied_filters(self, obj):
        return {
            str(attr_id): sorted(option_ids)
            for attr_id, option_ids in obj.facet_filter.items()
        }

    def get_subcategories(self, obj):
        return [
            {
                'id': c.id,
                'name': c.name,
                'slug': c.slug,
                'has_products': c.published_count > 0,
            }
            for c in obj.subcategories
        ]
