"""Engine knobs, overridable through the ``CATALOG_SEARCH`` setting."""

from django.conf import settings

DEFAULTS = {
    'RESULT_LIMIT': 20,
    'CATEGORY_LIMIT': 5,
    'MAX_PHRASE_WORDS': 3,
    'MIN_TOKEN_LENGTH': 2,
    'FACET_PARAM_PREFIX': 'attr_',
}


def search_setting(name):
    """Return a catalog search setting, falling back to the built-in default."""
    overrides = getattr(settings, 'CATALOG_SEARCH', None) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
