"""
Matchers that resolve search tokens against the catalog.

Variant matching is a fallback cascade: each tier is a plain function of
``(tokens, store)`` and the first tier that returns anything answers the
query. Later tiers never run once an earlier one has results, and results
are never merged across tiers.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from apps.catalog.models import Category, Variant

from .store import VariantStore

logger = logging.getLogger(__name__)

Tier = Callable[[Sequence[str], VariantStore], List[Variant]]


def first_non_empty(tiers: Sequence[Tier], tokens: Sequence[str],
                    store: VariantStore) -> Tuple[Optional[str], List[Variant]]:
    """
    Run ``tiers`` in order and stop at the first non-empty result.

    Returns the name of the tier that answered (None when none did) and
    its matches.
    """
    for tier in tiers:
        matches = tier(tokens, store)
        if matches:
            logger.debug("Tier %s matched %d variants", tier.__name__, len(matches))
            return tier.__name__, matches
    return None, []


# =============================================================================
# Categories
# =============================================================================

def plural_forms(token: str) -> List[str]:
    """The token itself, with a trailing 's' added, and with one trailing 's' removed."""
    forms = [token, token + 's']
    if token.endswith('s') and len(token) > 1:
        forms.append(token[:-1])
    return forms


def match_categories(tokens: Sequence[str], store: VariantStore = None) -> List[Category]:
    """
    Categories named like any token, tolerating a plural 's' either way.
    Catalog order, at most CATEGORY_LIMIT entries.
    """
    if not tokens:
        return []
    store = store or VariantStore()
    names = []
    for token in tokens:
        names.extend(plural_forms(token))
    return store.categories_named(names)


# =============================================================================
# Variant names
# =============================================================================

def exact_name_matches(tokens: Sequence[str], store: VariantStore) -> List[Variant]:
    """Variants whose whole name equals any token, in one query."""
    return store.variants_named(tokens)


def partial_name_matches(tokens: Sequence[str], store: VariantStore) -> List[Variant]:
    """
    Substring match, one token at a time in token order (longest first).
    The first token that finds anything wins; remaining tokens are not tried.
    """
    for token in tokens:
        matches = store.variants_name_containing(token)
        if matches:
            logger.debug("Partial name match on %r", token)
            return matches
    return []


NAME_TIERS = (exact_name_matches, partial_name_matches)


def match_variants_by_name(tokens: Sequence[str], store: VariantStore = None) -> List[Variant]:
    if not tokens:
        return []
    _, matches = first_non_empty(NAME_TIERS, tokens, store or VariantStore())
    return matches


# =============================================================================
# Attribute options
# =============================================================================

def match_variants_by_attribute(tokens: Sequence[str], store: VariantStore = None) -> List[Variant]:
    """
    Variants carrying an active option whose value equals a token.

    Candidate options are tried longest value first ("space gray" before
    "gray"); the first option with any variants answers.
    """
    if not tokens:
        return []
    store = store or VariantStore()
    options = store.active_options_valued(tokens)
    options.sort(key=lambda option: len(option.value), reverse=True)

    for option in options:
        matches = store.variants_with_option(option.id)
        if matches:
            logger.debug(
                "Attribute match on %s=%r", option.attribute.name, option.value
            )
            return matches
    return []


# Name tiers first, attribute options only when no name matched.
VARIANT_TIERS = NAME_TIERS + (match_variants_by_attribute,)


def match_variants(tokens: Sequence[str], store: VariantStore = None) -> Tuple[Optional[str], List[Variant]]:
    if not tokens:
        return None, []
    return first_non_empty(VARIANT_TIERS, tokens, store or VariantStore())
