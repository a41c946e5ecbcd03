"""Chart packages for many crane models, keyed ``"Manufacturer:Model"``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..errors import ChartFormatError, NoMatchingChart, PackageNotFound, UnitError
from .chart import LoadChart
from .package import LoadChartPackage
from .types import ChartConfiguration

_LOG = logging.getLogger(__name__)


def _key(manufacturer: str, model: str) -> str:
    return f"{manufacturer}:{model}"


# ── Validation ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ChartError:
    chart_id: str
    error: str


@dataclass
class ValidationReport:
    """Every problem found across the library, grouped by package key."""

    errors: dict[str, list[ChartError]] = field(default_factory=dict)

    def add_errors(self, package_key: str, chart_id: str, errors: list[str]) -> None:
        if not errors:
            return
        entry = self.errors.setdefault(package_key, [])
        entry.extend(ChartError(chart_id, e) for e in errors)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return sum(len(v) for v in self.errors.values())

    def format_report(self) -> str:
        if self.is_valid:
            return "All charts valid"
        lines = ["Validation errors found:"]
        for package, errors in sorted(self.errors.items()):
            lines.append("")
            lines.append(package)
            lines.extend(f" - [{e.chart_id}] {e.error}" for e in errors)
        return "\n".join(lines)

    def print_report(self) -> None:
        print(self.format_report())


def validate_chart(chart: LoadChart) -> list[str]:
    """Lint one chart; returns every problem found, empty when clean."""
    errors: list[str] = []
    cd = chart.capacity_data

    for i, boom in enumerate(cd.boom_lengths):
        try:
            boom.to_length()
        except UnitError as e:
            errors.append(f"Boom length {i}: {e}")

    for boom_idx, row in enumerate(cd.data):
        if not row:
            errors.append(f"Boom {boom_idx}: no capacity points")
        for point_idx, (radius, capacity) in enumerate(row):
            try:
                radius.to_length()
            except UnitError as e:
                errors.append(f"Boom {boom_idx} point {point_idx}: invalid radius unit - {e}")
            try:
                capacity.to_mass()
            except UnitError as e:
                errors.append(
                    f"Boom {boom_idx} point {point_idx}: invalid capacity unit - {e}"
                )

    try:
        chart.configuration.boom.length_distance()
    except UnitError as e:
        errors.append(f"Boom configuration: {e}")

    if chart.configuration.counterweight is not None:
        try:
            chart.configuration.counterweight.to_mass()
        except UnitError as e:
            errors.append(f"Counterweight configuration: {e}")

    if len(cd.boom_lengths) != len(cd.data):
        errors.append(
            f"Mismatch: {len(cd.boom_lengths)} boom lengths but {len(cd.data)} data rows"
        )

    return errors


# ── Library ──────────────────────────────────────────────────────


class ChartLibrary:
    """Read-mostly map of chart packages.

    Usage:
        lib = ChartLibrary.from_directory("backend/data/charts")
        chart = lib.find_chart("Grove", "GMK5250L", config)
        chart.capacity_interpolated(length(150), length(35))
    """

    def __init__(self) -> None:
        self._packages: dict[str, LoadChartPackage] = {}
        self.base_path: Optional[Path] = None

    @classmethod
    def from_directory(cls, path: str | Path) -> ChartLibrary:
        library = cls()
        library.base_path = Path(path)
        library.load_all_from_directory(path)
        return library

    def load_all_from_directory(self, path: str | Path) -> int:
        """Load every ``*.json`` package in ``path``; bad files are logged and skipped.

        Returns the number of packages loaded.
        """
        loaded = 0
        for file in sorted(Path(path).glob("*.json")):
            try:
                self.load_package_from_file(file)
            except (ChartFormatError, UnicodeDecodeError, OSError) as e:
                _LOG.warning("Skipped %s: %s", file, e)
                continue
            _LOG.info("Loaded: %s", file)
            loaded += 1
        return loaded

    def load_package_from_file(self, path: str | Path) -> LoadChartPackage:
        package = LoadChartPackage.from_json_file(path)
        self.add_package(package)
        return package

    def add_package(self, package: LoadChartPackage) -> None:
        if package.key in self._packages:
            _LOG.debug("Replacing package %s", package.key)
        self._packages[package.key] = package

    def get_package(self, manufacturer: str, model: str) -> Optional[LoadChartPackage]:
        return self._packages.get(_key(manufacturer, model))

    def find_chart(
        self, manufacturer: str, model: str, config: ChartConfiguration
    ) -> LoadChart:
        package = self.get_package(manufacturer, model)
        if package is None:
            raise PackageNotFound(manufacturer, model)
        chart = package.find_chart(config)
        if chart is None:
            raise NoMatchingChart()
        return chart

    def manufacturers(self) -> list[str]:
        return sorted({p.crane_info.manufacturer for p in self._packages.values()})

    def models(self, manufacturer: str) -> list[str]:
        return sorted(
            p.crane_info.model
            for p in self._packages.values()
            if p.crane_info.manufacturer == manufacturer
        )

    def packages(self) -> Iterator[LoadChartPackage]:
        return iter(self._packages.values())

    def total_charts(self) -> int:
        return sum(len(p.charts) for p in self._packages.values())

    def validate_all(self) -> ValidationReport:
        report = ValidationReport()
        for key, package in self._packages.items():
            for chart in package.charts:
                report.add_errors(key, chart.id, validate_chart(chart))
        if not report.is_valid:
            _LOG.warning("Chart validation found %d error(s)", report.error_count)
        return report

    def remove_package(self, manufacturer: str, model: str) -> Optional[LoadChartPackage]:
        return self._packages.pop(_key(manufacturer, model), None)

    def clear(self) -> None:
        self._packages.clear()

    def is_empty(self) -> bool:
        return not self._packages

    def package_count(self) -> int:
        return len(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, key: object) -> bool:
        return key in self._packages


# ── Default library ──────────────────────────────────────────────

_default: Optional[ChartLibrary] = None


def default_library() -> ChartLibrary:
    """Library of the bundled charts, loaded on first call."""
    global _default
    if _default is None:
        from ..config import Settings

        charts_dir = Settings.from_env().charts_dir
        if charts_dir.is_dir():
            _default = ChartLibrary.from_directory(charts_dir)
        else:
            _LOG.warning("Charts directory %s not found; library is empty", charts_dir)
            _default = ChartLibrary()
    return _default


def reset_default_library() -> None:
    global _default
    _default = None
