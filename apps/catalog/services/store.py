"""
Read access to the catalog store used by the search matchers.

Every variant read is scoped to ACTIVE variants, capped at the configured
result limit, and loads the related rows a search result needs in the same
round of queries.
"""

import logging
from typing import Iterable, List

from django.db.models import Prefetch, Q
from django.db.models.functions import Lower

from apps.catalog.conf import search_setting
from apps.catalog.models import (
    AttributeOption,
    Category,
    Variant,
    VariantAttribute,
)

logger = logging.getLogger(__name__)


UNLINKED = Q(product__slug__isnull=True) | Q(product__slug='')


class VariantStore:
    """
    Catalog reads issued by the category, name and attribute matchers.
    """

    def __init__(self, limit: int = None, category_limit: int = None):
        self.limit = limit or search_setting('RESULT_LIMIT')
        self.category_limit = category_limit or search_setting('CATEGORY_LIMIT')

    def active_variants(self):
        return Variant.objects.filter(
            status=Variant.STATUS_ACTIVE
        ).select_related(
            'product__category'
        ).prefetch_related(
            'images',
            'product__images',
            Prefetch(
                'variantattribute_set',
                queryset=VariantAttribute.objects.filter(
                    option__is_active=True
                ).select_related('attribute', 'option').order_by(
                    'attribute__display_order', 'attribute__name'
                )
            ),
        )

    def _fetch(self, queryset) -> List[Variant]:
        """
        Linkable matches up to the limit. Variants whose product has no slug
        are excluded before the cap and reported at WARNING.
        """
        skipped = queryset.filter(UNLINKED).count()
        if skipped:
            logger.warning("Skipping %d matching variants: product has no slug", skipped)
        return list(queryset.exclude(UNLINKED)[:self.limit])

    def variants_named(self, names: Iterable[str]) -> List[Variant]:
        """ACTIVE variants whose name equals one of ``names``, ignoring case."""
        names = {name.lower() for name in names}
        if not names:
            return []
        queryset = self.active_variants().annotate(
            name_lower=Lower('name')
        ).filter(name_lower__in=names)
        return self._fetch(queryset)

    def variants_name_containing(self, text: str) -> List[Variant]:
        if not text:
            return []
        return self._fetch(self.active_variants().filter(name__icontains=text))

    def variants_with_option(self, option_id: int) -> List[Variant]:
        queryset = self.active_variants().filter(
            variantattribute__option_id=option_id
        ).distinct()
        return self._fetch(queryset)

    def active_options_valued(self, values: Iterable[str]) -> List[AttributeOption]:
        values = {value.lower() for value in values}
        if not values:
            return []
        return list(
            AttributeOption.objects.filter(is_active=True).annotate(
                value_lower=Lower('value')
            ).filter(value_lower__in=values).select_related('attribute')
        )

    def categories_named(self, names: Iterable[str]) -> List[Category]:
        names = {name.lower() for name in names if name}
        if not names:
            return []
        return list(
            Category.objects.filter(is_active=True).annotate(
                name_lower=Lower('name')
            ).filter(name_lower__in=names)[:self.category_limit]
        )
