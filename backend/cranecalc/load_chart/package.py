"""All load charts for one crane model."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .chart import LoadChart
from .matching import support_matches
from .schema import dump_package, parse_package
from .types import ChartConfiguration, CraneInfo, CraneType, SupportConfiguration


def _unknown_crane() -> CraneInfo:
    return CraneInfo(
        manufacturer="Unknown",
        model="Unknown",
        crane_type=CraneType.MOBILE_TELESCOPIC,
    )


@dataclass
class LoadChartPackage:
    """A crane's identity and its charts, in lookup order."""

    crane_info: CraneInfo = field(default_factory=_unknown_crane)
    charts: list[LoadChart] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.crane_info.key

    def add_chart(self, chart: LoadChart) -> None:
        self.charts.append(chart)

    def find_chart(self, config: ChartConfiguration) -> Optional[LoadChart]:
        """First chart, in package order, whose configuration matches ``config``."""
        for chart in self.charts:
            if chart.matches_configuration(config):
                return chart
        return None

    def charts_for_support(self, support: SupportConfiguration) -> list[LoadChart]:
        return [c for c in self.charts if support_matches(c.configuration.support, support)]

    # ── Persistence ──────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoadChartPackage:
        info, charts = parse_package(data)
        return cls(crane_info=info, charts=charts)

    def to_dict(self) -> dict[str, Any]:
        return dump_package(self.crane_info, self.charts)

    @classmethod
    def from_json_file(cls, path: str | Path) -> LoadChartPackage:
        info, charts = parse_package(Path(path).read_bytes())
        return cls(crane_info=info, charts=charts)

    def to_json_file(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
