"""
Catalog signature: the read-only snapshot of categories, attributes and
active options that query resolution validates against.

The provider owns a single reference to an immutable ``CatalogSignature``.
A refresh builds a complete new snapshot and then replaces the reference,
so readers always see either the old or the new signature in full.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from django.db.models import Prefetch

from apps.catalog.models import Attribute, AttributeOption, Category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionSignature:
    id: int
    value: str


@dataclass(frozen=True)
class AttributeSignature:
    id: int
    name: str
    category_id: int
    is_filterable: bool
    options: Tuple[OptionSignature, ...] = ()

    @property
    def option_ids(self) -> FrozenSet[int]:
        return frozenset(option.id for option in self.options)

    @property
    def option_values(self) -> Tuple[str, ...]:
        return tuple(option.value.lower() for option in self.options)


@dataclass(frozen=True)
class CategorySignature:
    id: int
    name: str
    slug: str
    parent_id: Optional[int] = None


@dataclass(frozen=True)
class CatalogSignature:
    categories: Tuple[CategorySignature, ...] = ()
    attributes: Tuple[AttributeSignature, ...] = ()
    _by_category: Dict[int, Tuple[AttributeSignature, ...]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        grouped = {}
        for attribute in self.attributes:
            grouped.setdefault(attribute.category_id, []).append(attribute)
        object.__setattr__(
            self, '_by_category', {k: tuple(v) for k, v in grouped.items()}
        )

    def attributes_for_category(self, category_id) -> Tuple[AttributeSignature, ...]:
        """Attributes of a category; unknown categories have none."""
        return self._by_category.get(category_id, ())

    def category_names(self) -> Tuple[str, ...]:
        return tuple(category.name.lower() for category in self.categories)

    def attributes_by_name(self) -> Dict[str, Tuple[AttributeSignature, ...]]:
        """Attributes grouped by lowercase name across all categories."""
        grouped = {}
        for attribute in self.attributes:
            grouped.setdefault(attribute.name.lower(), []).append(attribute)
        return {name: tuple(attrs) for name, attrs in grouped.items()}


def load_signature() -> CatalogSignature:
    """Read the current signature from the catalog store."""
    categories = tuple(
        CategorySignature(id=c.id, name=c.name, slug=c.slug, parent_id=c.parent_id)
        for c in Category.objects.filter(is_active=True)
    )
    attributes = Attribute.objects.prefetch_related(
        Prefetch(
            'options',
            queryset=AttributeOption.objects.filter(is_active=True)
        )
    ).order_by('category_id', 'display_order', 'name')

    return CatalogSignature(
        categories=categories,
        attributes=tuple(
            AttributeSignature(
                id=attr.id,
                name=attr.name,
                category_id=attr.category_id,
                is_filterable=attr.is_filterable,
                options=tuple(
                    OptionSignature(id=opt.id, value=opt.value)
                    for opt in attr.options.all()
                ),
            )
            for attr in attributes
        ),
    )


class CatalogSignatureProvider:
    """
    Read-through holder of the current catalog signature.

    The snapshot is loaded on first use and rebuilt by ``refresh()``.
    ``invalidate()`` drops it so the next reader reloads; readers that
    already hold the previous snapshot keep a consistent view.

    Every invalidation bumps a generation counter. A load that started
    before the latest invalidation is discarded and repeated, so a refresh
    racing a catalog edit never installs pre-edit data.
    """

    def __init__(self, loader: Callable[[], CatalogSignature] = load_signature):
        self._loader = loader
        self._snapshot: Optional[CatalogSignature] = None
        self._generation = 0
        self._refresh_lock = threading.Lock()
        self._state_lock = threading.Lock()

    def get(self) -> CatalogSignature:
        snapshot = self._snapshot
        if snapshot is None:
            snapshot = self.refresh()
        return snapshot

    def refresh(self) -> CatalogSignature:
        with self._refresh_lock:
            while True:
                with self._state_lock:
                    generation = self._generation
                snapshot = self._loader()
                with self._state_lock:
                    if generation == self._generation:
                        self._snapshot = snapshot
                        break
                logger.debug("Catalog changed during signature load, reloading")
        logger.info(
            "Catalog signature loaded: %d categories, %d attributes",
            len(snapshot.categories), len(snapshot.attributes)
        )
        return snapshot

    def invalidate(self):
        with self._state_lock:
            self._generation += 1
            self._snapshot = None


signature_provider = CatalogSignatureProvider()
