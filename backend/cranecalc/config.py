"""Runtime settings and logging configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

_DATA_DIR = Path(__file__).parent.parent / "data"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _parse_origins(raw: str) -> list[str]:
    parsed = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if parsed == ["*"]:
        return ["*"]
    return [*DEFAULT_CORS_ORIGINS, *parsed]


@dataclass(slots=True)
class Settings:
    """Process-level settings, read from the environment."""

    charts_dir: Path = _DATA_DIR / "charts"
    log_level: str = "INFO"
    log_file: Path | None = None
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        charts_dir = env.get("CRANECALC_CHARTS_DIR")
        log_file = env.get("CRANECALC_LOG_FILE")
        return cls(
            charts_dir=Path(charts_dir) if charts_dir else _DATA_DIR / "charts",
            log_level=env.get("CRANECALC_LOG_LEVEL", "INFO").upper(),
            log_file=Path(log_file) if log_file else None,
            cors_origins=_parse_origins(env.get("CORS_ORIGINS", "")),
        )


def init_logging(settings: Settings) -> None:
    """Configure logging to console and optional file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )

    logging.getLogger(__name__).info(
        "Logging initialized. Charts at %s", settings.charts_dir
    )
