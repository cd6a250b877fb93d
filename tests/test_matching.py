"""
Tests for category matching and the variant matcher cascade.
"""

import logging

import pytest

from apps.catalog.models import Product, Variant
from apps.catalog.services.matching import (
    VARIANT_TIERS,
    first_non_empty,
    match_categories,
    match_variants,
    match_variants_by_attribute,
    match_variants_by_name,
    partial_name_matches,
    plural_forms,
)
from apps.catalog.services.store import VariantStore
from apps.catalog.services.tokenizer import tokenize


def names(variants):
    return sorted(v.name for v in variants)


# =============================================================================
# Cascade Tests
# =============================================================================

class TestFirstNonEmpty:

    def test_stops_at_first_tier_with_results(self):
        called = []

        def empty(tokens, store):
            called.append('empty')
            return []

        def found(tokens, store):
            called.append('found')
            return ['a', 'b']

        def never(tokens, store):
            called.append('never')
            return ['c']

        tier, matches = first_non_empty([empty, found, never], ['x'], store=None)

        assert tier == 'found'
        assert matches == ['a', 'b']
        assert called == ['empty', 'found']

    def test_no_tier_matches(self):
        tier, matches = first_non_empty([lambda t, s: []], ['x'], store=None)
        assert tier is None
        assert matches == []

    def test_tier_order(self):
        assert [t.__name__ for t in VARIANT_TIERS] == [
            'exact_name_matches',
            'partial_name_matches',
            'match_variants_by_attribute',
        ]


# =============================================================================
# Category Tests
# =============================================================================

class TestPluralForms:

    def test_plain_word(self):
        assert plural_forms('phone') == ['phone', 'phones']

    def test_word_ending_in_s(self):
        assert plural_forms('shoes') == ['shoes', 'shoess', 'shoe']


@pytest.mark.django_db
class TestMatchCategories:

    def test_plural_token_finds_singular_name(self, make_category):
        shoe = make_category('Shoe')
        assert match_categories(['shoes']) == [shoe]

    def test_singular_token_finds_plural_name(self, make_category):
        shoes = make_category('Shoes')
        assert match_categories(['shoe']) == [shoes]

    def test_case_insensitive(self, make_category):
        phone = make_category('Phone')
        assert match_categories(tokenize('PHONES')) == [phone]

    def test_inactive_categories_are_skipped(self, make_category):
        make_category('Phone', is_active=False)
        assert match_categories(['phone']) == []

    def test_capped_at_category_limit(self, make_category):
        for i in range(7):
            parent = make_category(f'Brand {i}')
            make_category('Case', parent=parent, slug=f'case-{i}')

        assert len(match_categories(['case'])) == 5
        assert len(match_categories(['case'], VariantStore(category_limit=2))) == 2

    def test_no_tokens(self):
        assert match_categories([]) == []


# =============================================================================
# Name Tier Tests
# =============================================================================

@pytest.mark.django_db
class TestNameMatching:

    def test_exact_name_beats_partial(self, phone_catalog):
        tier, variants = match_variants(tokenize('iPhone 15 Gray 128GB'))
        assert tier == 'exact_name_matches'
        assert names(variants) == ['iPhone 15 Gray 128GB']

    def test_partial_match_on_longest_token(self, phone_catalog):
        tier, variants = match_variants(tokenize('Space Gray'))
        assert tier == 'partial_name_matches'
        assert names(variants) == ['iPhone 15 Space Gray 256GB']

    def test_partial_first_token_wins(self, phone_catalog):
        # "gray" alone would also find the Gray 128GB variant, but
        # "space gray" is tried first and answers.
        variants = partial_name_matches(tokenize('space gray'), VariantStore())
        assert names(variants) == ['iPhone 15 Space Gray 256GB']

    def test_partial_falls_through_to_shorter_tokens(self, phone_catalog):
        variants = match_variants_by_name(tokenize('midnight 128gb'))
        assert names(variants) == ['iPhone 15 Gray 128GB', 'iPhone 15 Silver 128GB']

    def test_inactive_variants_never_match(self, phone_catalog):
        variants = match_variants_by_name(tokenize('iPhone 15 Silver 256GB'))
        assert names(variants) == []

    def test_results_capped_at_limit(self, phone_catalog, make_variant):
        for i in range(25):
            make_variant(phone_catalog['product'], f'Bulk Case {i:02d}')

        assert len(match_variants_by_name(['bulk case'])) == 20
        assert len(match_variants_by_name(['bulk case'], VariantStore(limit=3))) == 3

    def test_variant_of_product_without_slug_is_skipped(self, phone_catalog, make_product,
                                                        make_variant, caplog, monkeypatch):
        monkeypatch.setattr(logging.getLogger('apps.catalog'), 'propagate', True)
        orphan = make_product(phone_catalog['category'], 'Orphan Phone')
        make_variant(orphan, 'Orphan Phone Gray')
        Product.objects.filter(pk=orphan.pk).update(slug=None)

        with caplog.at_level(logging.WARNING, logger='apps.catalog.services.store'):
            variants = match_variants_by_name(['orphan phone'])

        assert variants == []
        assert 'has no slug' in caplog.text

    def test_unlinked_variants_do_not_use_up_the_limit(self, phone_catalog, make_product,
                                                       make_variant):
        # Products order by name, so the orphan's variants come first
        orphan = make_product(phone_catalog['category'], 'AAA Orphan')
        linked = make_product(phone_catalog['category'], 'ZZZ Linked')
        for i in range(20):
            make_variant(orphan, f'Bulk Case O{i:02d}')
            make_variant(linked, f'Bulk Case L{i:02d}')
        Product.objects.filter(pk=orphan.pk).update(slug=None)

        tier, variants = match_variants(['bulk case'])

        assert tier == 'partial_name_matches'
        assert len(variants) == 20
        assert all(v.product_id == linked.id for v in variants)

    def test_no_tokens(self, phone_catalog):
        assert match_variants([]) == (None, [])


# =============================================================================
# Attribute Tier Tests
# =============================================================================

@pytest.mark.django_db
class TestAttributeMatching:

    def test_used_only_when_no_name_matches(self, phone_catalog, make_product, make_variant):
        # Names say nothing about color; only the option assignment does
        pixel = make_product(phone_catalog['category'], 'Pixel 8')
        make_variant(pixel, 'Pixel 8 Basic', options=[phone_catalog['options']['silver']])

        tier, variants = match_variants(['silver'])
        assert tier == 'partial_name_matches'
        assert 'Pixel 8 Basic' not in names(variants)

        tier, variants = match_variants(['256gb'])
        assert tier == 'partial_name_matches'

    def test_fallback_to_option_value(self, phone_catalog, make_product, make_variant):
        pixel = make_product(phone_catalog['category'], 'Pixel 8')
        make_variant(pixel, 'Pixel 8 Basic', options=[phone_catalog['options']['silver']])
        Variant.objects.filter(name__icontains='silver').update(status=Variant.STATUS_INACTIVE)

        tier, variants = match_variants(['silver'])
        assert tier == 'match_variants_by_attribute'
        assert names(variants) == ['Pixel 8 Basic']

    def test_longest_option_value_first(self, phone_catalog, make_product, make_variant):
        options = phone_catalog['options']
        pixel = make_product(phone_catalog['category'], 'Pixel 8')
        make_variant(pixel, 'Pixel A', options=[options['space gray']])
        make_variant(pixel, 'Pixel B', options=[options['gray']])

        variants = match_variants_by_attribute(['space gray', 'gray'], VariantStore())
        assert names(variants) == ['Pixel A', 'iPhone 15 Space Gray 256GB']

    def test_inactive_option_is_not_matched(self, phone_catalog, make_product, make_variant):
        pixel = make_product(phone_catalog['category'], 'Pixel 8')
        make_variant(pixel, 'Pixel Basic', options=[phone_catalog['options']['red']])

        assert match_variants_by_attribute(['red']) == []

    def test_unknown_value(self, phone_catalog):
        assert match_variants_by_attribute(['purple']) == []
