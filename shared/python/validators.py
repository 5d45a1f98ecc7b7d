"""
Provider Geocoder — Shared Input Validators
============================================
Static utility methods used by the value types, the providers and the
batch tool to validate common preconditions.

All ``assert_*`` methods raise an appropriate exception from
:mod:`shared.python.exceptions` rather than returning booleans — this
keeps ``__post_init__`` hooks and ``validate_inputs`` implementations
simple and readable::

    @dataclass(frozen=True)
    class Coordinates:
        latitude: float
        longitude: float

        def __post_init__(self) -> None:
            Validators.assert_latitude(self.latitude)
            Validators.assert_longitude(self.longitude)
"""

from __future__ import annotations

import ipaddress
import math
from pathlib import Path
from typing import Sequence

# pandas is only needed by assert_columns_exist and is never imported here;
# the DataFrame is duck-typed.

from shared.python.exceptions import (
    ColumnNotFoundError,
    InvalidArgument,
    OutputWriteError,
)

#: Highest administrative level a location can carry (1 = highest tier).
MAX_ADMIN_LEVEL = 5


class Validators:
    """Collection of static precondition checks shared across the package.

    All methods are ``@staticmethod`` — this class is never instantiated.
    It exists purely as a logical namespace.
    """

    # ------------------------------------------------------------------
    # Geographic checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_latitude(latitude: float) -> None:
        """Assert that *latitude* is a finite number in ``[-90, 90]``.

        Args:
            latitude: Latitude in decimal degrees (WGS84).

        Raises:
            InvalidArgument: If the value is NaN, infinite or out of range.
        """
        if math.isnan(latitude) or not -90.0 <= latitude <= 90.0:
            raise InvalidArgument(
                f"Latitude must be between -90 and 90, got {latitude!r}."
            )

    @staticmethod
    def assert_longitude(longitude: float) -> None:
        """Assert that *longitude* is a finite number in ``[-180, 180]``.

        Args:
            longitude: Longitude in decimal degrees (WGS84).

        Raises:
            InvalidArgument: If the value is NaN, infinite or out of range.
        """
        if math.isnan(longitude) or not -180.0 <= longitude <= 180.0:
            raise InvalidArgument(
                f"Longitude must be between -180 and 180, got {longitude!r}."
            )

    @staticmethod
    def assert_bounds_ordered(south: float, west: float, north: float, east: float) -> None:
        """Assert that a bounding rectangle is well-formed.

        Each edge must be a valid latitude/longitude and the rectangle must
        satisfy ``south <= north`` and ``west <= east``.

        Args:
            south: Southern latitude edge.
            west: Western longitude edge.
            north: Northern latitude edge.
            east: Eastern longitude edge.

        Raises:
            InvalidArgument: If any edge is out of range or the edges are
                inverted.

        Example::

            Validators.assert_bounds_ordered(48.81, 2.22, 48.90, 2.47)
        """
        Validators.assert_latitude(south)
        Validators.assert_latitude(north)
        Validators.assert_longitude(west)
        Validators.assert_longitude(east)
        if south > north:
            raise InvalidArgument(
                f"Invalid latitude range: south={south} is greater than north={north}."
            )
        if west > east:
            raise InvalidArgument(
                f"Invalid longitude range: west={west} is greater than east={east}."
            )

    @staticmethod
    def assert_admin_level(level: int) -> None:
        """Assert that *level* is an integer administrative tier in ``1..5``.

        Raises:
            InvalidArgument: If *level* is not an int or is out of range.
        """
        if isinstance(level, bool) or not isinstance(level, int):
            raise InvalidArgument(
                f"Administrative level must be an integer, got {level!r}."
            )
        if not 1 <= level <= MAX_ADMIN_LEVEL:
            raise InvalidArgument(
                f"Administrative level should be an integer in [1,{MAX_ADMIN_LEVEL}], "
                f"{level} given."
            )

    # ------------------------------------------------------------------
    # Query checks
    # ------------------------------------------------------------------

    @staticmethod
    def is_ip_address(text: str) -> bool:
        """Return ``True`` if *text* is an IPv4 or IPv6 address literal."""
        try:
            ipaddress.ip_address(text.strip())
        except ValueError:
            return False
        return True

    @staticmethod
    def is_ipv6_address(text: str) -> bool:
        """Return ``True`` if *text* is an IPv6 address literal."""
        try:
            return ipaddress.ip_address(text.strip()).version == 6
        except ValueError:
            return False

    # ------------------------------------------------------------------
    # File-system checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_file_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Args:
            path: Path object to check.

        Raises:
            InvalidArgument: If *path* does not exist or is a directory
                rather than a file.

        Example::

            Validators.assert_file_exists(Path("data/addresses.csv"))
        """
        path = Path(path)
        if not path.exists():
            raise InvalidArgument(
                f"Input file not found: '{path}'. "
                "Check that the path is correct and the file exists."
            )
        if path.is_dir():
            raise InvalidArgument(
                f"Expected a file but got a directory: '{path}'."
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Assert that the parent directory of *output_path* is writable.

        Creates the parent directory (and any missing parents) if it does
        not yet exist, so callers never have to pre-create output dirs.

        Args:
            output_path: Intended output file path.

        Raises:
            OutputWriteError: If the parent directory cannot be created.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Args:
            path: File path to check.
            extensions: Sequence of allowed extensions, each starting with
                        a dot (e.g. ``[".csv"]``).

        Raises:
            InvalidArgument: If the file extension is not in *extensions*.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise InvalidArgument(
                f"Unsupported file extension '{suffix}' for '{path.name}'. "
                f"Accepted extensions: {', '.join(allowed)}"
            )

    # ------------------------------------------------------------------
    # Tabular data checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_columns_exist(
        df: object,  # pandas DataFrame
        required_columns: Sequence[str],
    ) -> None:
        """Assert that all *required_columns* are present in *df*.

        Args:
            df: A ``pandas.DataFrame`` (typed as ``object`` here to avoid
                importing pandas at module load time).
            required_columns: List of column names that must be present.

        Raises:
            ColumnNotFoundError: On the first missing column found.
        """
        available = list(df.columns)  # type: ignore[attr-defined]
        for col in required_columns:
            if col not in available:
                raise ColumnNotFoundError(col, available)
