"""
Free-text catalog search: tokens -> categories + variant matches.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.models import Category, Variant

from .matching import match_categories, match_variants
from .store import VariantStore
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    query: str
    tokens: List[str] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    products: List[Variant] = field(default_factory=list)
    matched_by: Optional[str] = None


class CatalogSearchService:
    """
    Resolves a raw search query against the catalog.

    Categories and variants are matched independently from the same tokens.
    Variants come from the first matcher tier with results: exact name,
    then partial name, then attribute option value.
    """

    @staticmethod
    def search(query: str, store: VariantStore = None) -> SearchResult:
        store = store or VariantStore()
        tokens = tokenize(query)
        logger.debug("Search %r tokens: %s", query, tokens)

        if not tokens:
            return SearchResult(query=query)

        categories = match_categories(tokens, store)
        matched_by, variants = match_variants(tokens, store)

        logger.info(
            "Search %r: %d categories, %d variants (tier: %s)",
            query, len(categories), len(variants), matched_by or 'none'
        )
        return SearchResult(
            query=query,
            tokens=tokens,
            categories=categories,
            products=variants,
            matched_by=matched_by,
        )
