from .facets import FacetResolution, resolve_facets, variant_matches_facets
from .listing import CategoryListing, CategoryListingService, ListingEntry
from .matching import (
    first_non_empty,
    match_categories,
    match_variants,
    match_variants_by_attribute,
    match_variants_by_name,
)
from .query_parser import ParsedQuery, PriceRange, parse_query
from .search import CatalogSearchService, SearchResult
from .signature import CatalogSignature, CatalogSignatureProvider, signature_provider
from .store import VariantStore
from .tokenizer import tokenize

__all__ = [
    'CatalogSearchService',
    'CatalogSignature',
    'CatalogSignatureProvider',
    'CategoryListing',
    'CategoryListingService',
    'FacetResolution',
    'ListingEntry',
    'ParsedQuery',
    'PriceRange',
    'SearchResult',
    'VariantStore',
    'first_non_empty',
    'match_categories',
    'match_variants',
    'match_variants_by_attribute',
    'match_variants_by_name',
    'parse_query',
    'resolve_facets',
    'signature_provider',
    'tokenize',
    'variant_matches_facets',
]
