"""
Query tokenization for catalog search.

A query is normalized to lowercase ASCII words, then expanded into every
contiguous phrase of up to ``MAX_PHRASE_WORDS`` words. Longer candidates
come first so matchers try the most specific phrase before its parts.
"""

import re
from typing import List

from apps.catalog.conf import search_setting

_NON_TOKEN_CHARS = re.compile(r'[^a-z0-9\s|]')
_WHITESPACE = re.compile(r'\s+')
_TOKEN_SEPARATORS = re.compile(r'[ ,|]+')


def normalize_query(query: str) -> str:
    """Lowercase the query and turn anything but a-z, 0-9 and '|' into single spaces."""
    if not query:
        return ''
    text = _NON_TOKEN_CHARS.sub(' ', query.lower())
    return _WHITESPACE.sub(' ', text).strip()


def split_words(normalized: str, min_length: int = None) -> List[str]:
    if min_length is None:
        min_length = search_setting('MIN_TOKEN_LENGTH')
    return [
        word for word in _TOKEN_SEPARATORS.split(normalized)
        if len(word) >= min_length
    ]


def build_phrases(words: List[str], max_words: int = None) -> List[str]:
    """
    Every contiguous run of 1..max_words words, joined by single spaces.

    Example:
        ['space', 'gray', '256gb'] ->
        ['space', 'space gray', 'space gray 256gb', 'gray', 'gray 256gb', '256gb']
    """
    if max_words is None:
        max_words = search_setting('MAX_PHRASE_WORDS')
    phrases = []
    for start in range(len(words)):
        for end in range(start + 1, min(start + max_words, len(words)) + 1):
            phrases.append(' '.join(words[start:end]))
    return phrases


def tokenize(query: str) -> List[str]:
    """
    Turn a raw query into search tokens, longest first.

    The whole normalized query, every phrase and every single word are
    collected, deduplicated keeping the first occurrence, and stable-sorted
    by length descending. Empty or punctuation-only input gives [].
    """
    min_length = search_setting('MIN_TOKEN_LENGTH')
    normalized = normalize_query(query)
    if not normalized:
        return []

    words = split_words(normalized, min_length)
    candidates = []
    if len(normalized) >= min_length:
        candidates.append(normalized)
    candidates.extend(build_phrases(words))
    candidates.extend(words)

    unique = list(dict.fromkeys(candidates))
    return sorted(unique, key=len, reverse=True)
