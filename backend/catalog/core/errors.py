"""Error taxonomy of the search core.

Zero matches is not an error: the engine returns an empty bundle.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""


class InvalidRequest(CatalogError):
    """A search request that cannot be turned into a query."""


class StoreUnavailable(CatalogError):
    """The catalog store could not be reached or queried. Safe to retry."""
