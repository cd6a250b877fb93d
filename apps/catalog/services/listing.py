"""
Service for listing a category's products narrowed by facet parameters.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Tuple

from django.db.models import Count, Min, Prefetch, Q

from apps.catalog.models import Category, Product, Variant, VariantAttribute

from .facets import FacetFilter, RawValue, resolve_facets, variant_matches_facets
from .signature import AttributeSignature, CatalogSignature, signature_provider

logger = logging.getLogger(__name__)


@dataclass
class ListingEntry:
    product: Product
    price: Decimal
    image: Optional[str]
    variants: List[Variant] = field(default_factory=list)


@dataclass
class CategoryListing:
    category: Category
    attributes: Tuple[AttributeSignature, ...]
    products: List[ListingEntry]
    facet_filter: FacetFilter
    invalid_params: List[str]
    # Set when the category has no products of its own and its
    # descendants were listed instead
    includes_subcategories: bool = False
    subcategories: List[Category] = field(default_factory=list)


class CategoryListingService:
    """
    Applies facet filters to the products of one category.

    Without a usable facet filter every published product is listed with
    its base price and thumbnail. With one, only products that have a
    matching ACTIVE variant are listed, priced and pictured from their
    cheapest matching variant.

    A category without published products of its own (a parent such as
    "Electronics") lists the products of its active descendants instead,
    each priced from its cheapest ACTIVE variant, and exposes its direct
    children for navigation.
    """

    @staticmethod
    def _published():
        return Product.objects.filter(
            status=Product.STATUS_PUBLISHED,
            slug__isnull=False,
        ).exclude(slug='')

    @staticmethod
    def has_own_products(category: Category) -> bool:
        return CategoryListingService._published().filter(category=category).exists()

    @staticmethod
    def listing_categories(category: Category) -> List[Category]:
        """The category itself, or its active descendants when it has no products."""
        if CategoryListingService.has_own_products(category):
            return [category]
        return [c for c in category.get_descendants() if c.is_active]

    @staticmethod
    def published_products(category: Category):
        categories = CategoryListingService.listing_categories(category)
        return CategoryListingService._published().filter(
            category__in=categories
        ).select_related('category').prefetch_related('images')

    @staticmethod
    def subcategories(category: Category) -> List[Category]:
        """Active direct children, annotated with their own published product count."""
        return list(
            category.children.filter(is_active=True).annotate(
                published_count=Count(
                    'products',
                    filter=Q(products__status=Product.STATUS_PUBLISHED),
                )
            )
        )

    @staticmethod
    def list_products(
        category: Category,
        params: Mapping[str, RawValue],
        products=None,
        variants=None,
        signature: CatalogSignature = None,
    ) -> CategoryListing:
        """
        Args:
            category: Category whose products are listed
            params: Raw query parameters; only facet keys are read
            products: Optional pre-filtered product queryset
            variants: Optional pre-filtered variant queryset
            signature: Catalog signature to validate against (current one by default)
        """
        signature = signature or signature_provider.get()
        attributes = signature.attributes_for_category(category.id)
        resolution = resolve_facets(attributes, params)

        categories = CategoryListingService.listing_categories(category)
        includes_subcategories = bool(categories) and categories != [category]
        if products is None:
            products = CategoryListingService.published_products(category)
        else:
            products = products.filter(category__in=categories)

        if resolution.invalid_params:
            logger.info(
                "Category %s: ignoring invalid facet params %s",
                category.id, resolution.invalid_params
            )

        if resolution.facet_filter:
            entries = CategoryListingService._filtered_entries(
                products, variants, resolution.facet_filter
            )
        elif includes_subcategories:
            entries = CategoryListingService._cheapest_variant_entries(products)
        else:
            entries = [
                ListingEntry(
                    product=product,
                    price=product.base_price,
                    image=product.get_thumbnail_url(),
                )
                for product in products
            ]

        return CategoryListing(
            category=category,
            attributes=attributes,
            products=entries,
            facet_filter=resolution.facet_filter,
            invalid_params=resolution.invalid_params,
            includes_subcategories=includes_subcategories,
            subcategories=(
                CategoryListingService.subcategories(category)
                if includes_subcategories else []
            ),
        )

    @staticmethod
    def _cheapest_variant_entries(products) -> List[ListingEntry]:
        """Priced from the cheapest ACTIVE variant, base price when there is none."""
        cheapest = dict(
            Variant.objects.filter(
                product__in=products,
                status=Variant.STATUS_ACTIVE,
            ).order_by().values('product_id').annotate(
                min_price=Min('price')
            ).values_list('product_id', 'min_price')
        )
        return [
            ListingEntry(
                product=product,
                price=cheapest.get(product.id, product.base_price),
                image=product.get_thumbnail_url(),
            )
            for product in products
        ]

    @staticmethod
    def _filtered_entries(products, variants, facet_filter: FacetFilter) -> List[ListingEntry]:
        if variants is None:
            variants = Variant.objects.all()
        variants = variants.filter(
            status=Variant.STATUS_ACTIVE,
            product__in=products,
        ).select_related('product').prefetch_related(
            'images',
            'product__images',
            Prefetch(
                'variantattribute_set',
                queryset=VariantAttribute.objects.filter(
                    option__is_active=True
                ).select_related('attribute', 'option')
            ),
        ).order_by('price', 'sku')

        matching: Dict[int, List[Variant]] = {}
        for variant in variants:
            assignments = [
                (a.attribute_id, a.option_id)
                for a in variant.variantattribute_set.all()
            ]
            if variant_matches_facets(facet_filter, assignments):
                matching.setdefault(variant.product_id, []).append(variant)

        entries = []
        for product in products:
            product_variants = matching.get(product.id)
            if not product_variants:
                continue
            cheapest = product_variants[0]
            entries.append(ListingEntry(
                product=product,
                price=cheapest.price,
                image=cheapest.get_image_url(),
                variants=product_variants,
            ))
        return entries
