"""
Provider Geocoder — Custom Exception Hierarchy
===============================================
Every layer of the geocoder (value types, builder, collections, providers,
dumpers and the batch tool) raises exceptions from this module so callers
can catch them at the right level of granularity.

Hierarchy::

    GeocoderError                        ← catch-all base
    ├── InvalidArgument                  ← bad construction parameter (ValueError)
    │   ├── AdminLevelCapacityError      ← more than five admin levels
    │   └── ColumnNotFoundError          ← CSV column missing (batch tool)
    ├── OutOfBounds                      ← index access past the extent (IndexError)
    ├── EmptyCollection                  ← first() on an empty collection
    ├── UnsupportedOperation             ← provider cannot perform the query
    ├── InvalidServerResponse            ← upstream payload could not be parsed
    ├── InvalidCredentials               ← API key rejected by the provider
    ├── QuotaExceeded                    ← provider quota / rate limit reached
    ├── TransportError                   ← network failure below the provider
    ├── ProviderNotRegistered            ← unknown provider name
    └── OutputWriteError                 ← cannot write to output path

"No results" is never an error: providers return an empty
:class:`~provider_geocoder.collection.AddressCollection` instead.

Usage::

    from shared.python.exceptions import UnsupportedOperation

    raise UnsupportedOperation("The geoips provider does not support street addresses.")
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class GeocoderError(Exception):
    """Base exception for the whole geocoder package.

    Catch this to handle any geocoder failure without caring about the
    exact subtype.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Construction / input validation
# ---------------------------------------------------------------------------


class InvalidArgument(GeocoderError, ValueError):
    """Raised when a caller-supplied parameter violates an invariant.

    Examples are a latitude outside ``[-90, 90]``, a bounds whose south
    edge lies north of its north edge, or an admin level outside ``1..5``.
    """


class AdminLevelCapacityError(InvalidArgument):
    """Raised when an admin level collection would exceed its capacity.

    Args:
        capacity: Maximum number of levels a collection can hold.

    Example::

        raise AdminLevelCapacityError(5)
    """

    def __init__(self, capacity: int) -> None:
        super().__init__(
            f"Administrative level collection is full: at most {capacity} levels are allowed."
        )
        self.capacity: int = capacity


class ColumnNotFoundError(InvalidArgument):
    """Raised when an expected column is absent from a tabular dataset.

    Args:
        column: The name of the missing column.
        available: List of column names that ARE present, used to
                   generate a helpful error message.

    Example::

        raise ColumnNotFoundError("address", df.columns.tolist())
    """

    def __init__(self, column: str, available: list[str]) -> None:
        available_str = ", ".join(f"'{c}'" for c in available)
        super().__init__(
            f"Column '{column}' not found. Available columns: {available_str}"
        )
        self.column: str = column
        self.available: list[str] = available


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


class OutOfBounds(GeocoderError, IndexError):
    """Raised when an index or level is not present in a collection."""


class EmptyCollection(GeocoderError):
    """Raised when :meth:`first` is called on a collection with no items."""


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class UnsupportedOperation(GeocoderError):
    """Raised when a provider structurally cannot perform a query.

    IP-only providers raise this for street addresses and for reverse
    queries; street-address providers raise it for IP addresses.  It is
    always raised before any network call is attempted.
    """


class InvalidServerResponse(GeocoderError):
    """Raised when an upstream payload cannot be parsed into the expected shape."""

    @classmethod
    def create(cls, url: str, status_code: int | None = None) -> "InvalidServerResponse":
        """Build the standard message for a failed query against *url*."""
        if status_code is None:
            return cls(f"The geocoder server returned an invalid response for query \"{url}\".")
        return cls(
            f"The geocoder server returned an invalid response ({status_code}) "
            f"for query \"{url}\". We could not parse it."
        )

    @classmethod
    def empty_response(cls, url: str) -> "InvalidServerResponse":
        """Build the standard message for an empty body returned by *url*."""
        return cls(f"The geocoder server returned an empty response for query \"{url}\".")


class InvalidCredentials(GeocoderError):
    """Raised when the provider rejects the configured API key."""


class QuotaExceeded(GeocoderError):
    """Raised when the provider reports that its usage quota is exhausted.

    Args:
        provider: Name of the geocoding service (e.g. ``"nominatim"``).
        retry_after: Suggested seconds to wait before retrying, if
                     provided by the API.  ``None`` if unknown.

    Example::

        raise QuotaExceeded("nominatim", retry_after=60)
    """

    def __init__(self, provider: str, retry_after: int | None = None) -> None:
        hint = f" Retry after {retry_after}s." if retry_after else ""
        super().__init__(f"Quota exceeded for provider '{provider}'.{hint}")
        self.provider: str = provider
        self.retry_after: int | None = retry_after


class TransportError(GeocoderError):
    """Raised when the HTTP transport fails below the provider (DNS, timeout, reset)."""


class ProviderNotRegistered(GeocoderError):
    """Raised when a provider name is not known to an aggregator.

    Args:
        name: The requested provider name.
        registered: Names that ARE registered.
    """

    def __init__(self, name: str, registered: list[str] | None = None) -> None:
        if registered:
            hint = f" Registered providers: {', '.join(registered)}."
        else:
            hint = " No provider is registered."
        super().__init__(f"Provider '{name}' is not registered.{hint}")
        self.name: str = name
        self.registered: list[str] = list(registered or [])


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputWriteError(GeocoderError):
    """Raised when a tool cannot write its output file.

    Args:
        output_path: String representation of the path that failed.
        reason: Underlying OS or library error message.

    Example::

        raise OutputWriteError("/read-only/dir/out.geojson", "Permission denied")
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write output to '{output_path}': {reason}"
        )
        self.output_path: str = output_path
        self.reason: str = reason
