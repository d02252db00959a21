"""Runtime settings for dialogrules."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Settings resolved from the environment.

    Resolution:
    1. DIALOGRULES_LOG_LEVEL env var, default WARNING
    2. DIALOGRULES_LAYOUT env var, default layout file for CLI commands
    """

    log_level: str = "WARNING"
    layout_path: Path | None = None

    @classmethod
    def from_env(cls, log_level: str | None = None) -> Settings:
        """Build settings from the environment; an explicit ``log_level`` wins."""
        level = (log_level or os.environ.get("DIALOGRULES_LOG_LEVEL", "WARNING")).upper()
        if level not in _LEVELS:
            raise ValueError(
                f"Invalid DIALOGRULES_LOG_LEVEL '{level}'. Expected one of: {', '.join(_LEVELS)}"
            )

        layout = os.environ.get("DIALOGRULES_LAYOUT")
        return cls(log_level=level, layout_path=Path(layout) if layout else None)

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format="%(levelname)s %(name)s: %(message)s",
        )
