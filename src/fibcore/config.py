"""Centralized fibcore configuration.

Defaults live in the frozen config dataclasses next to the code that uses
them (PoolConfig, RendererConfig). This module applies environment overrides.

Environment variables:
   - FIBCORE_MAX_WORKERS: worker pool size (default: os.cpu_count())
   - FIBCORE_PARALLEL_THRESHOLD_LIMBS: min operand size for parallel multiply
   - FIBCORE_EXECUTOR: "process" or "thread"
   - FIBCORE_FRACTION_DIGITS: mantissa fraction digits in scientific notation
"""

import logging
import os
from typing import Optional

from fibcore.core.math.parallel_mul import PoolConfig
from fibcore.render.renderer import RendererConfig

logger = logging.getLogger(__name__)


def _get_env(key: str) -> Optional[str]:
    """Get environment variable, treating empty strings as unset."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_env_int(key: str) -> Optional[int]:
    """Get integer environment variable.

    Raises:
        ValueError: if the variable is set but not an integer
    """
    value = _get_env(key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def load_pool_config() -> PoolConfig:
    """PoolConfig with FIBCORE_* overrides applied."""
    overrides = {}

    max_workers = _get_env_int("FIBCORE_MAX_WORKERS")
    if max_workers is not None:
        overrides["max_workers"] = max_workers

    threshold = _get_env_int("FIBCORE_PARALLEL_THRESHOLD_LIMBS")
    if threshold is not None:
        overrides["parallel_threshold_limbs"] = threshold

    executor_kind = _get_env("FIBCORE_EXECUTOR")
    if executor_kind is not None:
        overrides["executor_kind"] = executor_kind.lower()

    if overrides:
        logger.debug("Pool config overrides from environment: %s", overrides)
    return PoolConfig(**overrides)


def load_renderer_config() -> RendererConfig:
    """RendererConfig with FIBCORE_* overrides applied."""
    fraction_digits = _get_env_int("FIBCORE_FRACTION_DIGITS")
    if fraction_digits is None:
        return RendererConfig()
    logger.debug("Renderer fraction_digits from environment: %d", fraction_digits)
    return RendererConfig(fraction_digits=fraction_digits)
