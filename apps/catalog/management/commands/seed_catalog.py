"""
Create a small sample catalog for trying out search and facet filtering.
Run with: python manage.py seed_catalog
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import (
    Attribute,
    AttributeOption,
    Category,
    Product,
    Variant,
    VariantAttribute,
)
from apps.catalog.services import signature_provider

PHONE_COLORS = ['Gray', 'Space Gray', 'Silver', 'Midnight Blue']
PHONE_STORAGE = ['128GB', '256GB', '512GB']
SHOE_COLORS = ['Black', 'White', 'Red']
SHOE_SIZES = ['40', '41', '42', '43']

PHONES = [
    # name, brand, base price, storage price step
    ('Pixel 8', 'Google', Decimal('699.00'), Decimal('100.00')),
    ('iPhone 15', 'Apple', Decimal('799.00'), Decimal('150.00')),
]

SHOES = [
    ('Trail Runner', 'Northpeak', Decimal('129.90')),
    ('Court Classic', 'Baseline', Decimal('89.90')),
]


def _options(attribute, values):
    options = []
    for i, value in enumerate(values):
        option, _ = AttributeOption.objects.get_or_create(
            attribute=attribute,
            value=value,
            defaults={'display_order': i}
        )
        options.append(option)
    return options


def _variant(product, sku, price, stock, assignments):
    variant, created = Variant.objects.get_or_create(
        sku=sku,
        defaults={'product': product, 'price': price, 'stock': stock}
    )
    if created:
        for option in assignments:
            VariantAttribute.objects.create(
                variant=variant, attribute=option.attribute, option=option
            )
        # Regenerate the name now that the options exist
        variant.name = ''
        variant.slug = ''
        variant.save()
    return variant


class Command(BaseCommand):
    help = 'Create sample categories, attributes, products and variants'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating categories...')
        electronics, _ = Category.objects.get_or_create(
            slug='electronics', defaults={'name': 'Electronics'}
        )
        phones, _ = Category.objects.get_or_create(
            slug='phones', defaults={'name': 'Phone', 'parent': electronics}
        )
        fashion, _ = Category.objects.get_or_create(
            slug='fashion', defaults={'name': 'Fashion'}
        )
        shoes, _ = Category.objects.get_or_create(
            slug='shoes', defaults={'name': 'Shoe', 'parent': fashion}
        )

        self.stdout.write('Creating attributes...')
        phone_color, _ = Attribute.objects.get_or_create(
            category=phones, name='Color', defaults={'display_order': 1}
        )
        phone_storage, _ = Attribute.objects.get_or_create(
            category=phones, name='Storage', defaults={'display_order': 2}
        )
        shoe_color, _ = Attribute.objects.get_or_create(
            category=shoes, name='Color', defaults={'display_order': 1}
        )
        shoe_size, _ = Attribute.objects.get_or_create(
            category=shoes, name='Size', defaults={'display_order': 2}
        )

        colors = _options(phone_color, PHONE_COLORS)
        storage = _options(phone_storage, PHONE_STORAGE)
        shoe_colors = _options(shoe_color, SHOE_COLORS)
        sizes = _options(shoe_size, SHOE_SIZES)

        self.stdout.write('Creating products and variants...')
        variant_count = 0
        for name, brand, base_price, step in PHONES:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    'brand': brand,
                    'category': phones,
                    'base_price': base_price,
                    'status': Product.STATUS_PUBLISHED,
                }
            )
            for color in colors:
                for i, size in enumerate(storage):
                    sku = f"{product.slug}-{color.value}-{size.value}".upper().replace(' ', '-')
                    _variant(product, sku, base_price + step * i, 10, [color, size])
                    variant_count += 1

        for name, brand, base_price in SHOES:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    'brand': brand,
                    'category': shoes,
                    'base_price': base_price,
                    'status': Product.STATUS_PUBLISHED,
                }
            )
            for color in shoe_colors:
                for size in sizes:
                    sku = f"{product.slug}-{color.value}-{size.value}".upper()
                    _variant(product, sku, base_price, 5, [color, size])
                    variant_count += 1

        signature = signature_provider.refresh()
        self.stdout.write(self.style.SUCCESS(
            f'Sample catalog ready: {len(signature.categories)} categories, '
            f'{Product.objects.count()} products, {variant_count} variants'
        ))
