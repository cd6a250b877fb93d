"""
Tests for category listings narrowed by facet parameters.
"""

from decimal import Decimal

import pytest

from apps.catalog.models import Product, Variant
from apps.catalog.services import CategoryListingService


pytestmark = pytest.mark.django_db


@pytest.fixture
def shoe_catalog(make_category, make_attribute, make_option, make_product, make_variant):
    """
    Trail    Red/M 50.00, Blue/L 40.00, Green/L 35.00 (INACTIVE)
    Court    Green/M 30.00
    Slipper  no variants, base price 20.00
    Draft    Red/M 10.00, not published
    """
    shoe = make_category('Shoe')
    color = make_attribute(shoe, 'Color', display_order=1)
    size = make_attribute(shoe, 'Size', display_order=2)
    red = make_option(color, 'Red')
    blue = make_option(color, 'Blue')
    green = make_option(color, 'Green')
    medium = make_option(size, 'M')
    large = make_option(size, 'L')

    trail = make_product(shoe, 'Trail', base_price='60.00')
    make_variant(trail, 'Trail Red M', price='50.00', options=[red, medium])
    make_variant(trail, 'Trail Blue L', price='40.00', options=[blue, large])
    make_variant(trail, 'Trail Green L', price='35.00', options=[green, large],
                 status=Variant.STATUS_INACTIVE)

    court = make_product(shoe, 'Court', base_price='45.00')
    make_variant(court, 'Court Green M', price='30.00', options=[green, medium])

    slipper = make_product(shoe, 'Slipper', base_price='20.00')

    draft = make_product(shoe, 'Draft', base_price='15.00', status=Product.STATUS_DRAFT)
    make_variant(draft, 'Draft Red M', price='10.00', options=[red, medium])

    return {
        'category': shoe,
        'color': color,
        'size': size,
        'options': {'red': red, 'blue': blue, 'green': green, 'm': medium, 'l': large},
        'products': {'trail': trail, 'court': court, 'slipper': slipper, 'draft': draft},
    }


def entries_by_name(listing):
    return {entry.product.name: entry for entry in listing.products}


# =============================================================================
# Pass-through Tests
# =============================================================================

class TestUnfilteredListing:

    def test_lists_published_products_at_base_price(self, shoe_catalog):
        listing = CategoryListingService.list_products(shoe_catalog['category'], {})

        entries = entries_by_name(listing)
        assert set(entries) == {'Trail', 'Court', 'Slipper'}
        assert entries['Trail'].price == Decimal('60.00')
        assert entries['Slipper'].price == Decimal('20.00')
        assert entries['Trail'].variants == []
        assert listing.facet_filter == {}
        assert listing.invalid_params == []

    def test_exposes_category_attributes(self, shoe_catalog):
        listing = CategoryListingService.list_products(shoe_catalog['category'], {})
        assert [a.name for a in listing.attributes] == ['Color', 'Size']

    def test_only_invalid_params_fall_back_to_unfiltered(self, shoe_catalog):
        listing = CategoryListingService.list_products(
            shoe_catalog['category'], {'attr_999': '1', 'attr_abc': '2'}
        )
        assert set(entries_by_name(listing)) == {'Trail', 'Court', 'Slipper'}
        assert sorted(listing.invalid_params) == ['attr_999', 'attr_abc']

    def test_products_without_slug_are_skipped(self, shoe_catalog):
        Product.objects.filter(pk=shoe_catalog['products']['court'].pk).update(slug='')
        listing = CategoryListingService.list_products(shoe_catalog['category'], {})
        assert 'Court' not in entries_by_name(listing)

    def test_attribute_of_other_category_is_invalid(self, shoe_catalog, phone_catalog):
        color_id = phone_catalog['color'].id
        option_id = phone_catalog['options']['silver'].id
        listing = CategoryListingService.list_products(
            shoe_catalog['category'], {f'attr_{color_id}': str(option_id)}
        )
        assert listing.invalid_params == [f'attr_{color_id}']
        assert listing.facet_filter == {}


# =============================================================================
# Facet Filter Tests
# =============================================================================

class TestFacetFilteredListing:

    def params(self, shoe_catalog, **facets):
        return {
            f"attr_{shoe_catalog[attr].id}": ','.join(
                str(shoe_catalog['options'][value].id) for value in values
            )
            for attr, values in facets.items()
        }

    def test_or_within_attribute(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['red', 'blue'])
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)

        entries = entries_by_name(listing)
        assert set(entries) == {'Trail'}
        # Cheapest matching variant sets the price
        assert entries['Trail'].price == Decimal('40.00')
        assert [v.name for v in entries['Trail'].variants] == ['Trail Blue L', 'Trail Red M']

    def test_and_across_attributes(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['red', 'blue'], size=['m'])
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)

        entries = entries_by_name(listing)
        assert set(entries) == {'Trail'}
        assert entries['Trail'].price == Decimal('50.00')
        assert [v.name for v in entries['Trail'].variants] == ['Trail Red M']

    def test_no_variant_satisfies_every_attribute(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['red'], size=['l'])
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)
        assert listing.products == []

    def test_inactive_variants_do_not_match(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['green'], size=['l'])
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)
        assert listing.products == []

    def test_draft_products_are_excluded(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['red'])
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)
        assert set(entries_by_name(listing)) == {'Trail'}

    def test_products_without_variants_drop_out(self, shoe_catalog):
        params = self.params(shoe_catalog, size=['m'])
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)
        entries = entries_by_name(listing)
        assert set(entries) == {'Trail', 'Court'}
        assert entries['Court'].price == Decimal('30.00')

    def test_valid_and_invalid_params_together(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['green'])
        params['attr_999'] = '1'
        listing = CategoryListingService.list_products(shoe_catalog['category'], params)

        assert set(entries_by_name(listing)) == {'Court'}
        assert listing.invalid_params == ['attr_999']
        assert listing.facet_filter == {
            shoe_catalog['color'].id: frozenset({shoe_catalog['options']['green'].id})
        }

    def test_list_encoded_params(self, shoe_catalog):
        red = str(shoe_catalog['options']['red'].id)
        green = str(shoe_catalog['options']['green'].id)
        key = f"attr_{shoe_catalog['color'].id}[]"
        listing = CategoryListingService.list_products(
            shoe_catalog['category'], {key: [red, green]}
        )
        assert set(entries_by_name(listing)) == {'Trail', 'Court'}

    def test_prefiltered_variants(self, shoe_catalog):
        params = self.params(shoe_catalog, color=['red', 'blue'])
        variants = Variant.objects.filter(price__gte=Decimal('45.00'))
        listing = CategoryListingService.list_products(
            shoe_catalog['category'], params, variants=variants
        )
        entries = entries_by_name(listing)
        assert entries['Trail'].price == Decimal('50.00')


# =============================================================================
# Subcategory Fallback Tests
# =============================================================================

class TestSubcategoryListing:

    @pytest.fixture
    def electronics(self, make_category, make_product, make_variant):
        """
        Electronics (no products)
            Phone      iPhone 15 base 799.00, variants 949.00 / 899.00 (INACTIVE 699.00)
                Rugged     Tough One base 300.00, no variants
            Laptop     (no products)
            Tablet     inactive, Old Tab
        """
        electronics = make_category('Electronics')
        phone = make_category('Phone', parent=electronics)
        rugged = make_category('Rugged', parent=phone)
        make_category('Laptop', parent=electronics)
        tablet = make_category('Tablet', parent=electronics, is_active=False)

        iphone = make_product(phone, 'iPhone 15', base_price='799.00')
        make_variant(iphone, 'iPhone 15 A', price='949.00')
        make_variant(iphone, 'iPhone 15 B', price='899.00')
        make_variant(iphone, 'iPhone 15 C', price='699.00', status=Variant.STATUS_INACTIVE)
        make_product(rugged, 'Tough One', base_price='300.00')
        make_product(tablet, 'Old Tab', base_price='100.00')
        return electronics

    def test_parent_lists_descendant_products(self, electronics):
        listing = CategoryListingService.list_products(electronics, {})

        assert listing.includes_subcategories is True
        entries = entries_by_name(listing)
        assert set(entries) == {'iPhone 15', 'Tough One'}

    def test_priced_from_cheapest_active_variant(self, electronics):
        entries = entries_by_name(CategoryListingService.list_products(electronics, {}))
        assert entries['iPhone 15'].price == Decimal('899.00')
        assert entries['Tough One'].price == Decimal('300.00')

    def test_direct_children_for_navigation(self, electronics):
        listing = CategoryListingService.list_products(electronics, {})
        children = {c.name: c.published_count for c in listing.subcategories}
        assert children == {'Phone': 1, 'Laptop': 0}

    def test_category_with_own_products_does_not_fall_back(self, electronics):
        phone = electronics.children.get(name='Phone')
        listing = CategoryListingService.list_products(phone, {})

        assert listing.includes_subcategories is False
        assert listing.subcategories == []
        entries = entries_by_name(listing)
        assert set(entries) == {'iPhone 15'}
        assert entries['iPhone 15'].price == Decimal('799.00')

    def test_empty_leaf_category(self, electronics):
        laptop = electronics.children.get(name='Laptop')
        listing = CategoryListingService.list_products(laptop, {})
        assert listing.products == []
        assert listing.includes_subcategories is False

    def test_prefiltered_products_keep_descendants(self, electronics):
        products = CategoryListingService.published_products(electronics).filter(
            base_price__lt=Decimal('500.00')
        )
        listing = CategoryListingService.list_products(electronics, {}, products=products)
        assert set(entries_by_name(listing)) == {'Tough One'}
