"""
Provider Geocoder — Shared Base Tool
=====================================
Abstract base class for file-to-file tools built on top of the geocoder
(currently the batch geocoder behind the ``provider-geocode`` command).

Design Pattern:
    Template Method — the public ``run()`` method defines a fixed
    pipeline (validate → process → summarise) that subclasses fill in
    by implementing ``validate_inputs``, ``process`` and ``summary``.

Usage::

    from shared.python.base_tool import GeoTool

    class MyTool(GeoTool):
        def validate_inputs(self) -> None:
            ...
        def process(self) -> None:
            ...
        def summary(self) -> str:
            return "3/4 queries geocoded"
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

# ---------------------------------------------------------------------------
# Package root logger; every module gets its own child logger via
#   logging.getLogger("provider_geocoder.<module>").
# ---------------------------------------------------------------------------
logger = logging.getLogger("provider_geocoder")


class GeoTool(ABC):
    """Abstract base class for file-driven geocoding tools.

    Attributes:
        input_path: Path to the input file.
        output_path: Path where output will be written.
        verbose: When ``True`` the package logger runs at DEBUG level.
        elapsed: Duration of the last successful :meth:`run` in seconds,
            ``None`` before the first run.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        *,
        verbose: bool = False,
    ) -> None:
        self.input_path: Path = Path(input_path)
        self.output_path: Path = Path(output_path)
        self.verbose: bool = verbose
        self.elapsed: float | None = None

        self._configure_logging()

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @abstractmethod
    def validate_inputs(self) -> None:
        """Check every precondition before any query is sent.

        Raises:
            InvalidArgument: If an input file or column is unusable.
            OutputWriteError: If the output location cannot be prepared.
        """

    @abstractmethod
    def process(self) -> None:
        """Geocode the input and write the output."""

    @abstractmethod
    def summary(self) -> str:
        """One-line outcome of the last run, e.g. ``"3/4 queries geocoded"``."""

    # ------------------------------------------------------------------
    # Template method
    # ------------------------------------------------------------------

    def run(self) -> str:
        """Validate, process, then log and return the run summary.

        Raises:
            Any exception raised by ``validate_inputs`` or ``process``
            propagates unchanged; no summary is logged in that case.
        """
        logger.info("Starting %s", self.__class__.__name__)
        start = time.perf_counter()

        self.validate_inputs()
        self.process()

        self.elapsed = time.perf_counter() - start
        summary = self.summary()
        logger.info(
            "%s completed in %.2fs → %s (%s)",
            self.__class__.__name__,
            self.elapsed,
            self.output_path,
            summary,
        )
        return summary

    # ------------------------------------------------------------------
    # Protected helpers
    # ------------------------------------------------------------------

    def _configure_logging(self) -> None:
        """Attach a console handler to the package logger once.

        Uses DEBUG level when ``self.verbose`` is ``True``, otherwise INFO.
        """
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                fmt="[%(asctime)s] %(levelname)-8s %(name)s — %(message)s",
                datefmt="%H:%M:%S",
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)
