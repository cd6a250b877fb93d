class CatalogError(Exception):
    """Base class for catalog query resolution errors."""


class InvalidFacetValue(CatalogError):
    """A facet parameter value could not be parsed into option ids."""

    def __init__(self, raw_value):
        self.raw_value = raw_value
        super().__init__(f"Cannot parse option ids from {raw_value!r}")
