"""Environment driven settings for the CLI and workspace."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

LOGGER = logging.getLogger("pdf_assembler.config")

HOME_ENV = "PDF_ASSEMBLER_HOME"
MAX_SIZE_ENV = "PDF_ASSEMBLER_MAX_SIZE_MB"
LOG_LEVEL_ENV = "PDF_ASSEMBLER_LOG_LEVEL"

DEFAULT_HOME = "./pdf-assembler-data"
DEFAULT_MAX_SIZE_MB = 10.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""

    home: Path
    max_size_mb: float = DEFAULT_MAX_SIZE_MB
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        max_size_mb = DEFAULT_MAX_SIZE_MB
        raw_size = env.get(MAX_SIZE_ENV)
        if raw_size is not None and raw_size.strip():
            try:
                max_size_mb = float(raw_size)
            except ValueError:
                LOGGER.warning(
                    "Ignoring invalid %s=%r; using %s MB", MAX_SIZE_ENV, raw_size, DEFAULT_MAX_SIZE_MB
                )
            else:
                if not math.isfinite(max_size_mb) or max_size_mb <= 0:
                    LOGGER.warning(
                        "Ignoring non-positive or non-finite %s=%r; using %s MB", MAX_SIZE_ENV, raw_size, DEFAULT_MAX_SIZE_MB
                    )
                    max_size_mb = DEFAULT_MAX_SIZE_MB

        log_level = (env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            LOGGER.warning("Ignoring unknown %s=%r", LOG_LEVEL_ENV, log_level)
            log_level = DEFAULT_LOG_LEVEL

        return cls(
            home=Path(env.get(HOME_ENV) or DEFAULT_HOME).expanduser(),
            max_size_mb=max_size_mb,
            log_level=log_level,
        )


__all__ = ["Settings", "HOME_ENV", "MAX_SIZE_ENV", "LOG_LEVEL_ENV"]
