"""
Facet filters: attribute/option selections sent as query parameters.

A facet parameter looks like ``attr_<attribute id>=<option ids>``, where the
option ids may be a single id, a comma-separated list, or a repeated key.
All three encodings become one ``frozenset`` of ints here, so matching
never sees the wire format.

Matching law: a variant passes when, for every attribute in the filter, it
has an assignment whose option is in that attribute's set. Attributes are
ANDed, options within one attribute are ORed.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Tuple, Union

from apps.catalog.conf import search_setting
from apps.catalog.exceptions import InvalidFacetValue

from .signature import AttributeSignature

logger = logging.getLogger(__name__)

FacetFilter = Dict[int, FrozenSet[int]]
RawValue = Union[str, Iterable[str]]


class FacetResolution(NamedTuple):
    facet_filter: FacetFilter
    invalid_params: List[str]


def parse_attribute_id(key: str, prefix: str):
    """Attribute id encoded in a parameter key, or None when the key is not a facet."""
    if not key.startswith(prefix):
        return None
    suffix = key[len(prefix):]
    if suffix.endswith('[]'):
        suffix = suffix[:-2]
    return suffix


def parse_option_ids(raw_value: RawValue) -> FrozenSet[int]:
    """
    Normalize a single id, a CSV string or a list of either into a set of ids.

    Raises InvalidFacetValue when any piece is not an integer or when no
    id is present at all.
    """
    if isinstance(raw_value, str):
        values = [raw_value]
    else:
        values = list(raw_value)

    ids = set()
    for value in values:
        for piece in str(value).split(','):
            piece = piece.strip()
            if not piece:
                continue
            try:
                ids.add(int(piece))
            except ValueError:
                raise InvalidFacetValue(raw_value) from None
    if not ids:
        raise InvalidFacetValue(raw_value)
    return frozenset(ids)


def _describe(raw_value: RawValue) -> str:
    if isinstance(raw_value, str):
        return raw_value
    return ','.join(str(v) for v in raw_value)


def resolve_facets(category_attributes: Iterable[AttributeSignature],
                   raw_params: Mapping[str, RawValue],
                   prefix: str = None) -> FacetResolution:
    """
    Validate facet parameters against a category's attributes.

    Keys without the facet prefix are ignored. Invalid pieces are dropped
    and reported, never raised:
        - unknown attribute id, or unparseable value -> the key
        - option id not among the attribute's active options -> "key=<id>"
    Repeated attributes union their option sets.
    """
    if prefix is None:
        prefix = search_setting('FACET_PARAM_PREFIX')
    attributes = {attribute.id: attribute for attribute in category_attributes}

    facet_filter: Dict[int, set] = {}
    invalid = []

    for key, raw_value in raw_params.items():
        suffix = parse_attribute_id(key, prefix)
        if suffix is None:
            continue

        try:
            attribute = attributes.get(int(suffix))
        except ValueError:
            attribute = None
        if attribute is None:
            invalid.append(key)
            continue

        try:
            option_ids = parse_option_ids(raw_value)
        except InvalidFacetValue:
            logger.info("Dropping facet %s=%s: unparseable option ids", key, _describe(raw_value))
            invalid.append(key)
            continue

        known = attribute.option_ids
        for option_id in sorted(option_ids - known):
            invalid.append(f"{key}={option_id}")

        valid = option_ids & known
        if valid:
            facet_filter.setdefault(attribute.id, set()).update(valid)

    return FacetResolution(
        facet_filter={attr_id: frozenset(ids) for attr_id, ids in facet_filter.items()},
        invalid_params=invalid,
    )


def variant_matches_facets(facet_filter: FacetFilter,
                           assignments: Iterable[Tuple[int, int]]) -> bool:
    """
    True when every filtered attribute has an assigned option in its set.
    ``assignments`` are (attribute_id, option_id) pairs.
    """
    assigned = {}
    for attribute_id, option_id in assignments:
        assigned.setdefault(attribute_id, set()).add(option_id)

    for attribute_id, option_ids in facet_filter.items():
        if not assigned.get(attribute_id, set()) & option_ids:
            return False
    return True
