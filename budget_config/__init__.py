"""
budget_config -- single public entrypoint for runtime settings.

Responsibility:
    Provides the ONLY way to obtain settings at runtime through
    ``get_active_config()``.  No other component reads the settings file
    or the ``BUDGET_KERNEL_CONFIG`` environment variable directly.

Architecture position:
    Configuration -- YAML-driven settings.  This package sits above
    ``budget_kernel`` and below ``budget_services``.  The engines MUST
    NEVER import from ``budget_config``: they take everything they need as
    parameters.

Invariants enforced:
    - Single entrypoint: all runtime settings flow through
      ``get_active_config()``.
    - Resolution order: explicit path, then ``BUDGET_KERNEL_CONFIG``, then
      the packaged ``defaults.yaml``.
    - Deterministic parsing: the same YAML document always produces the
      same ``KernelSettings`` and checksum.

Failure modes:
    - ``FileNotFoundError`` -- an explicit or environment-provided path
      does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ConfigurationError`` -- the document has the wrong shape.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``BUDGET_CONFIG_TRACE`` log entry with the source path and checksum.
"""

from __future__ import annotations

import os
from pathlib import Path

from budget_config.loader import load_settings, parse_settings
from budget_config.schema import (
    CurrencySettings,
    DatabaseSettings,
    KernelSettings,
    LoggingSettings,
)
from budget_kernel.logging_config import get_logger

_logger = get_logger("config")

CONFIG_ENV_VAR = "BUDGET_KERNEL_CONFIG"

# Packaged defaults
_DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def resolve_config_path(config_path: Path | str | None = None) -> Path:
    """Path that ``get_active_config`` would load, without loading it."""
    if config_path is not None:
        return Path(config_path)
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return _DEFAULT_CONFIG_PATH


def get_active_config(config_path: Path | str | None = None) -> KernelSettings:
    """The ONLY public settings entrypoint.

    Args:
        config_path: Explicit settings file.  When omitted the
            ``BUDGET_KERNEL_CONFIG`` environment variable is consulted,
            then the packaged defaults.

    Returns:
        KernelSettings -- frozen, checksummed settings.

    Raises:
        FileNotFoundError: If the resolved file does not exist.
        ConfigurationError: If the file has the wrong shape.
    """
    path = resolve_config_path(config_path)
    settings = load_settings(path)

    _logger.info(
        "BUDGET_CONFIG_TRACE",
        extra={
            "trace_type": "BUDGET_CONFIG_TRACE",
            "source": settings.source,
            "checksum": settings.checksum,
            "currency": settings.currency.code,
            "log_level": settings.logging.level,
        },
    )
    return settings


__all__ = [
    "CONFIG_ENV_VAR",
    "CurrencySettings",
    "DatabaseSettings",
    "KernelSettings",
    "LoggingSettings",
    "get_active_config",
    "parse_settings",
    "resolve_config_path",
]
