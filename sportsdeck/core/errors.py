"""Catalog error types.

NetworkError and ApiError are raised by the HTTP clients and surface
unchanged through the catalog. Benign outcomes (missing envelope fields,
late responses for abandoned views) are not errors and have no exception.
"""


class CatalogError(Exception):
    """Base class for all errors raised by sportsdeck."""

    retryable = False


class NetworkError(CatalogError):
    """Transport failure: DNS, connection refused, timeout."""

    retryable = True

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Network error for {url}: {reason}")


class ApiError(CatalogError):
    """The remote service answered with a failure status."""

    def __init__(self, status: int, message: str, url: str | None = None):
        self.status = status
        self.message = message
        self.url = url
        super().__init__(message)

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status == 429 or self.status >= 500


class FavoriteConflict(CatalogError):
    """A favorite toggle was attempted without an authenticated user."""

    def __init__(self, message: str = "You must log in to manage favorites"):
        self.message = message
        super().__init__(message)
