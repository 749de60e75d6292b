"""
Runtime configuration.

Settings come from the environment (optionally seeded from a .env file in
the working directory). Every value has a default, so an empty environment
reproduces the stock 40/30/20/10 weight table.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .env import load_env
from .logger import get_logger
from .scoring import Weights

logger = get_logger()

ENV_PREFIX = "DEALMATCH_"


@dataclass(frozen=True)
class Settings:
    weights: Weights = field(default_factory=Weights)
    max_workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    log_level: str = "INFO"
    log_dir: Optional[Path] = None


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring malformed numeric setting", setting=ENV_PREFIX + name, value=raw)
        return default


def load_settings(env: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
    """
    Read settings from `env` (defaults to os.environ).

    Raises:
        InvalidWeightConfiguration: if the configured weights break the
            scoring constraints
    """
    if env is None:
        if use_dotenv:
            load_env()
        env = os.environ

    defaults = Weights()
    weights = Weights(
        sector=_float(env, "WEIGHT_SECTOR", defaults.sector),
        stage=_float(env, "WEIGHT_STAGE", defaults.stage),
        location=_float(env, "WEIGHT_LOCATION", defaults.location),
        amount=_float(env, "WEIGHT_AMOUNT", defaults.amount),
        stage_adjacent_factor=_float(env, "STAGE_ADJACENT_FACTOR", defaults.stage_adjacent_factor),
        amount_near_factor=_float(env, "AMOUNT_NEAR_FACTOR", defaults.amount_near_factor),
    )

    max_workers = int(_float(env, "MAX_WORKERS", float(os.cpu_count() or 1)))
    level = (env.get(ENV_PREFIX + "LOG_LEVEL") or "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        logger.warning("Ignoring unknown log level", value=level)
        level = "INFO"
    log_dir = env.get(ENV_PREFIX + "LOG_DIR")

    return Settings(
        weights=weights,
        max_workers=max(1, max_workers),
        log_level=level,
        log_dir=Path(log_dir) if log_dir else None,
    )


def configure_logging(settings: Settings) -> None:
    """Point the shared logger at the configured level and log directory."""
    get_logger().configure(level=settings.log_level, log_dir=settings.log_dir)
