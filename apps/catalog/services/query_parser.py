"""
Best-effort structured parsing of free-text queries.

Extracts a price range, category mentions and known attribute values from a
query and strips each recognized piece from the text, leaving the residual
free text for tokenization. The output is advisory: callers may use it to
pre-narrow a search but nothing here rejects a query.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .signature import CatalogSignature, CategorySignature, signature_provider

_NUMBER = r'(\d+(?:\.\d+)?)'

# Tried in order; only the first form found is honored.
PRICE_PATTERNS = [
    ('max', re.compile(r'\b(?:under|below|less than)\s+' + _NUMBER, re.IGNORECASE)),
    ('range', re.compile(_NUMBER + r'\s?-\s?' + _NUMBER)),
    ('min', re.compile(r'\b(?:above|over|more than)\s+' + _NUMBER, re.IGNORECASE)),
]

_WHITESPACE = re.compile(r'\s+')


@dataclass(frozen=True)
class PriceRange:
    min: Optional[Decimal] = None
    max: Optional[Decimal] = None

    def to_dict(self):
        data = {}
        if self.min is not None:
            data['min'] = self.min
        if self.max is not None:
            data['max'] = self.max
        return data


@dataclass(frozen=True)
class AttributeMention:
    name: str
    value: str


@dataclass
class ParsedQuery:
    residual_query: str
    matched_categories: List[CategorySignature] = field(default_factory=list)
    matched_attribute_values: List[AttributeMention] = field(default_factory=list)
    price_range: Optional[PriceRange] = None


def _strip_span(text, match):
    return (text[:match.start()] + ' ' + text[match.end():]).strip()


def extract_price_range(query: str):
    """
    Returns (PriceRange or None, query without the price clause).

    "phones under 500" -> max 500
    "200-400"          -> min 200, max 400
    "over 1000"        -> min 1000
    """
    for kind, pattern in PRICE_PATTERNS:
        match = pattern.search(query)
        if not match:
            continue
        if kind == 'max':
            price_range = PriceRange(max=Decimal(match.group(1)))
        elif kind == 'min':
            price_range = PriceRange(min=Decimal(match.group(1)))
        else:
            price_range = PriceRange(
                min=Decimal(match.group(1)), max=Decimal(match.group(2))
            )
        return price_range, _strip_span(query, match)
    return None, query


def _category_pattern(name):
    forms = {name, name + 's'}
    if name.endswith('s') and len(name) > 1:
        forms.add(name[:-1])
    alternatives = '|'.join(re.escape(f) for f in sorted(forms, key=len, reverse=True))
    return re.compile(r'\b(?:' + alternatives + r')\b', re.IGNORECASE)


def extract_categories(query: str, signature: CatalogSignature):
    matched = []
    for category in signature.categories:
        pattern = _category_pattern(category.name.lower())
        if pattern.search(query):
            matched.append(category)
            query = pattern.sub(' ', query).strip()
    return matched, query


def _attribute_patterns(name, values):
    """
    Patterns for one attribute name.

    With predefined values: "space gray", "space gray color", "color: space gray".
    Without: "256 storage", "storage: 256".
    """
    attr = re.escape(name).replace(r'\ ', r'\s*')
    if values:
        choices = '|'.join(
            re.escape(v) for v in sorted(set(values), key=len, reverse=True)
        )
        return re.compile(
            r'\b(' + choices + r')\b(?:\s+' + attr + r')?'
            r'|\b' + attr + r'\s*:\s*(' + choices + r')\b',
            re.IGNORECASE
        )
    return re.compile(
        r'(\d+)\s*' + attr + r'\b|\b' + attr + r'\s*:\s*(\d+)',
        re.IGNORECASE
    )


def extract_attributes(query: str, signature: CatalogSignature):
    mentions = []
    for name, attributes in signature.attributes_by_name().items():
        values = []
        for attribute in attributes:
            values.extend(attribute.option_values)
        textual = any(a.is_filterable for a in attributes) and values
        pattern = _attribute_patterns(name, values if textual else None)

        for match in list(pattern.finditer(query)):
            value = next((g for g in match.groups() if g), None)
            if value is None:
                continue
            value = value.lower()
            if values and value not in values:
                continue
            mentions.append(AttributeMention(name=name, value=value))
            query = query.replace(match.group(0), ' ', 1).strip()
    return mentions, query


def parse_query(query: str, signature: CatalogSignature = None) -> ParsedQuery:
    """
    Split a free-text query into price range, categories, attribute values
    and the residual text, in that order.
    """
    if signature is None:
        signature = signature_provider.get()
    text = query or ''

    price_range, text = extract_price_range(text)
    categories, text = extract_categories(text, signature)
    mentions, text = extract_attributes(text, signature)

    return ParsedQuery(
        residual_query=_WHITESPACE.sub(' ', text).strip(),
        matched_categories=categories,
        matched_attribute_values=mentions,
        price_range=price_range,
    )
