"""
Pytest configuration and shared fixtures
"""

import itertools
from decimal import Decimal

import pytest

from apps.catalog.models import (
    Attribute,
    AttributeOption,
    Category,
    Product,
    Variant,
    VariantAttribute,
)
from apps.catalog.services import signature_provider

_sku_counter = itertools.count(1)


@pytest.fixture(autouse=True)
def fresh_signature():
    """Each test starts without a cached catalog signature."""
    signature_provider.invalidate()
    yield
    signature_provider.invalidate()


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_category(db):
    def _make(name, parent=None, **kwargs):
        return Category.objects.create(name=name, parent=parent, **kwargs)
    return _make


@pytest.fixture
def make_attribute(db):
    def _make(category, name, is_filterable=True, display_order=0):
        return Attribute.objects.create(
            category=category,
            name=name,
            is_filterable=is_filterable,
            display_order=display_order,
        )
    return _make


@pytest.fixture
def make_option(db):
    def _make(attribute, value, is_active=True):
        return AttributeOption.objects.create(
            attribute=attribute, value=value, is_active=is_active
        )
    return _make


@pytest.fixture
def make_product(db):
    def _make(category, name, base_price='100.00', status=Product.STATUS_PUBLISHED, **kwargs):
        return Product.objects.create(
            category=category,
            name=name,
            base_price=Decimal(base_price),
            status=status,
            **kwargs
        )
    return _make


@pytest.fixture
def make_variant(db):
    def _make(product, name, price='100.00', status=Variant.STATUS_ACTIVE,
              options=(), stock=5, sku=None):
        variant = Variant.objects.create(
            product=product,
            name=name,
            sku=sku or f"SKU-{next(_sku_counter):05d}",
            price=Decimal(price),
            status=status,
            stock=stock,
        )
        for option in options:
            VariantAttribute.objects.create(
                variant=variant, attribute=option.attribute, option=option
            )
        return variant
    return _make


# =============================================================================
# Sample Catalog
# =============================================================================

@pytest.fixture
def phone_catalog(make_category, make_attribute, make_option, make_product, make_variant):
    """
    Phone category with Color and Storage attributes and one published
    product in four variants:

        iPhone 15 Space Gray 256GB   949.00  Space Gray / 256GB
        iPhone 15 Gray 128GB         799.00  Gray / 128GB
        iPhone 15 Silver 128GB       799.00  Silver / 128GB
        iPhone 15 Silver 256GB       949.00  Silver / 256GB  (INACTIVE)
    """
    phone = make_category('Phone')
    color = make_attribute(phone, 'Color', display_order=1)
    storage = make_attribute(phone, 'Storage', display_order=2)

    options = {
        'space gray': make_option(color, 'Space Gray'),
        'gray': make_option(color, 'Gray'),
        'silver': make_option(color, 'Silver'),
        'red': make_option(color, 'Red', is_active=False),
        '128gb': make_option(storage, '128GB'),
        '256gb': make_option(storage, '256GB'),
    }

    iphone = make_product(phone, 'iPhone 15', base_price='799.00', brand='Apple')
    variants = {
        'space_gray_256': make_variant(
            iphone, 'iPhone 15 Space Gray 256GB', price='949.00',
            options=[options['space gray'], options['256gb']]
        ),
        'gray_128': make_variant(
            iphone, 'iPhone 15 Gray 128GB', price='799.00',
            options=[options['gray'], options['128gb']]
        ),
        'silver_128': make_variant(
            iphone, 'iPhone 15 Silver 128GB', price='799.00',
            options=[options['silver'], options['128gb']]
        ),
        'silver_256': make_variant(
            iphone, 'iPhone 15 Silver 256GB', price='949.00',
            status=Variant.STATUS_INACTIVE,
            options=[options['silver'], options['256gb']]
        ),
    }

    return {
        'category': phone,
        'color': color,
        'storage': storage,
        'options': options,
        'product': iphone,
        'variants': variants,
    }
