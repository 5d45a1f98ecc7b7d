"""
Provider Geocoder — Batch Tool
===============================
Converts a CSV of queries to a GeoJSON FeatureCollection by geocoding each
row through any :class:`~provider_geocoder.providers.base.Provider`.

Classes:
    GeocodeRow      Immutable outcome for one CSV row.
    BatchGeocoder   Primary tool class (inherits GeoTool).

Failure policy:
    * No result for a row → ``null`` geometry and ``geocode_success: false``.
    * :class:`TransportError` / :class:`InvalidServerResponse` for a row →
      logged and recorded on the row; the run continues.
    * :class:`QuotaExceeded`, :class:`InvalidCredentials` and
      :class:`UnsupportedOperation` abort the run, since every following
      row would fail the same way.

Usage::

    from pathlib import Path
    from provider_geocoder.batch import BatchGeocoder
    from provider_geocoder.providers import Nominatim

    tool = BatchGeocoder(
        input_path=Path("data/addresses.csv"),
        output_path=Path("output/addresses.geojson"),
        query_col="full_address",
        provider=Nominatim.with_openstreetmap_server("my-project/1.0"),
    )
    tool.run()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from shared.python.base_tool import GeoTool
from shared.python.exceptions import (
    InvalidServerResponse,
    OutputWriteError,
    TransportError,
)
from shared.python.validators import Validators
from provider_geocoder.dumpers import GeoJson
from provider_geocoder.models import Address
from provider_geocoder.providers.base import Provider
from provider_geocoder.query import GeocodeQuery

logger = logging.getLogger("provider_geocoder.batch")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeocodeRow:
    """Immutable outcome of geocoding one input row.

    Attributes:
        query: The query string read from the CSV.
        location: Best match, or ``None`` when nothing was found or the
                  row failed.
        error: Error message for a failed row, ``None`` otherwise.
    """

    query: str
    location: Address | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.location is not None

    def to_geojson_feature(self, extra_props: dict[str, Any] | None = None) -> dict[str, Any]:
        """Convert this row to a GeoJSON Feature dict.

        Rows without a location keep a ``null`` geometry so no input row is
        silently dropped from the output.
        """
        props: dict[str, Any] = {"query": self.query, "geocode_success": self.success}
        if self.error:
            props["error"] = self.error
        if extra_props:
            props.update(extra_props)

        if self.location is None:
            return {"type": "Feature", "geometry": None, "properties": props}

        feature = GeoJson().feature(self.location)
        feature["properties"].update(props)
        return feature


# ---------------------------------------------------------------------------
# Main tool class
# ---------------------------------------------------------------------------


class BatchGeocoder(GeoTool):
    """Geocode every row of a CSV file and write a GeoJSON output.

    Args:
        input_path: Path to the input CSV file.
        output_path: Path for the output GeoJSON file.
        provider: Provider used for every row.
        query_col: Name of the CSV column containing the queries.
        extra_cols: Additional CSV columns carried through as feature
                    properties.
        locale: Preferred response language passed to the provider.
        verbose: Enable DEBUG-level logging.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        provider: Provider,
        query_col: str = "address",
        extra_cols: list[str] | None = None,
        locale: str | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, verbose=verbose)
        self.provider = provider
        self.query_col = query_col
        self.extra_cols: list[str] = extra_cols or []
        self.locale = locale

        self._rows: list[GeocodeRow] = []

    # ------------------------------------------------------------------
    # GeoTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Validate the CSV and output location before geocoding begins.

        Raises:
            InvalidArgument: If the file is missing or not a CSV.
            ColumnNotFoundError: If the query or an extra column is absent.
            OutputWriteError: If the output directory cannot be created.
        """
        Validators.assert_file_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, [".csv"])
        Validators.assert_output_dir_writable(self.output_path)

        df_peek = pd.read_csv(self.input_path, nrows=0)
        Validators.assert_columns_exist(df_peek, [self.query_col] + self.extra_cols)
        logger.debug("Inputs validated successfully.")

    def process(self) -> None:
        """Geocode every row and write the GeoJSON output."""
        df = pd.read_csv(self.input_path, dtype=str, keep_default_na=False)
        total = len(df)
        logger.info("Starting geocoding of %d queries via %s...", total, self.provider.name)

        rows: list[GeocodeRow] = []
        for position, (_, record) in enumerate(df.iterrows(), start=1):
            text = str(record[self.query_col]).strip()
            logger.debug("[%d/%d] Geocoding: %s", position, total, text)
            row = self._geocode_row(text)
            rows.append(row)

            if row.success:
                logger.debug("  ✓ %s → (%s, %s)", text, row.location.latitude, row.location.longitude)  # type: ignore[union-attr]
            else:
                logger.warning("  ✗ Failed: %s — %s", text, row.error or "no result")

        self._rows = rows
        self._write_geojson(df, rows)

    def summary(self) -> str:
        """Return ``"<succeeded>/<total> queries geocoded"`` for the last run."""
        succeeded = sum(1 for r in self._rows if r.success)
        return f"{succeeded}/{len(self._rows)} queries geocoded"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _geocode_row(self, text: str) -> GeocodeRow:
        if not text:
            return GeocodeRow(query=text, error="Empty query.")

        query = GeocodeQuery(text, limit=1, locale=self.locale)
        try:
            results = self.provider.geocode_query(query)
        except (TransportError, InvalidServerResponse) as exc:
            return GeocodeRow(query=text, error=exc.message)

        if results.is_empty():
            return GeocodeRow(query=text)
        return GeocodeRow(query=text, location=results.first())

    def _write_geojson(self, df: pd.DataFrame, rows: list[GeocodeRow]) -> None:
        features = []
        for row, (_, record) in zip(rows, df.iterrows()):
            extra = {col: record[col] for col in self.extra_cols if col in record.index}
            features.append(row.to_geojson_feature(extra_props=extra))

        geojson: dict[str, Any] = {"type": "FeatureCollection", "features": features}
        try:
            with open(self.output_path, "w", encoding="utf-8") as fh:
                json.dump(geojson, fh, indent=2, ensure_ascii=False, default=str)
        except OSError as exc:
            raise OutputWriteError(str(self.output_path), str(exc)) from exc

    @property
    def rows(self) -> list[GeocodeRow]:
        """All :class:`GeocodeRow` outcomes from the last run, or ``[]``."""
        return self._rows
