"""
Provider Geocoder — Shared Python Package
==========================================
Re-exports the tool base class, exception hierarchy, and validator
utilities so the geocoder modules can import from a single location::

    from shared.python import GeoTool, Validators
    from shared.python.exceptions import UnsupportedOperation
"""

from shared.python.base_tool import GeoTool
from shared.python.exceptions import (
    AdminLevelCapacityError,
    ColumnNotFoundError,
    EmptyCollection,
    GeocoderError,
    InvalidArgument,
    InvalidCredentials,
    InvalidServerResponse,
    OutOfBounds,
    OutputWriteError,
    ProviderNotRegistered,
    QuotaExceeded,
    TransportError,
    UnsupportedOperation,
)
from shared.python.validators import Validators

__all__ = [
    "GeoTool",
    "Validators",
    "GeocoderError",
    "InvalidArgument",
    "AdminLevelCapacityError",
    "ColumnNotFoundError",
    "OutOfBounds",
    "EmptyCollection",
    "UnsupportedOperation",
    "InvalidServerResponse",
    "InvalidCredentials",
    "QuotaExceeded",
    "TransportError",
    "ProviderNotRegistered",
    "OutputWriteError",
]
