"""
Configuration Loader (``budget_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into the typed
``budget_config.schema`` dataclasses.  Runtime callers go through
``budget_config.get_active_config()``; this module is its implementation.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends only on the schema,
``budget_kernel.exceptions`` and PyYAML.  The engines never import it.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Omitted sections and keys take the schema defaults; present keys are
  type-checked and rejected with ``ConfigurationError`` rather than
  coerced.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the parsed
  document for configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong shape or value  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any

import yaml

from budget_config.schema import (
    CurrencySettings,
    DatabaseSettings,
    KernelSettings,
    LoggingSettings,
)
from budget_kernel.exceptions import ConfigurationError

_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")
_LEVEL_NAMES = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Preconditions:
        - ``path`` must point to an existing, readable YAML file.
    Postconditions:
        - Returns a ``dict`` (possibly empty if the YAML is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def _section(data: dict[str, Any], name: str, source: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(source, f"'{name}' must be a mapping")
    return value


def parse_database(data: dict[str, Any], source: str) -> DatabaseSettings:
    defaults = DatabaseSettings()
    url = data.get("url", defaults.url)
    echo = data.get("echo", defaults.echo)
    if not isinstance(url, str) or not url.strip():
        raise ConfigurationError(source, "database.url must be a non-empty string")
    if not isinstance(echo, bool):
        raise ConfigurationError(source, "database.echo must be a boolean")
    return DatabaseSettings(url=url.strip(), echo=echo)


def parse_logging(data: dict[str, Any], source: str) -> LoggingSettings:
    level = data.get("level", LoggingSettings().level)
    if not isinstance(level, str) or level.strip().upper() not in _LEVEL_NAMES:
        raise ConfigurationError(
            source, f"logging.level must be one of {sorted(_LEVEL_NAMES)}, got {level!r}"
        )
    return LoggingSettings(level=level.strip().upper())


def parse_currency(data: dict[str, Any], source: str) -> CurrencySettings:
    """
    Parse the currency section.

    Raises:
        ConfigurationError: if the code is not three upper-case letters or
            the exponent is not an integer between 0 and 4.
    """
    defaults = CurrencySettings()
    code = data.get("code", defaults.code)
    exponent = data.get("minor_unit_exponent", defaults.minor_unit_exponent)
    if not isinstance(code, str) or not _CURRENCY_CODE.fullmatch(code.strip().upper()):
        raise ConfigurationError(source, f"currency.code must be an ISO 4217 code, got {code!r}")
    # bool is an int subclass; reject it explicitly
    if isinstance(exponent, bool) or not isinstance(exponent, int) or not 0 <= exponent <= 4:
        raise ConfigurationError(
            source, f"currency.minor_unit_exponent must be an integer 0-4, got {exponent!r}"
        )
    return CurrencySettings(code=code.strip().upper(), minor_unit_exponent=exponent)


def parse_settings(data: dict[str, Any], source: str = "<memory>") -> KernelSettings:
    """
    Parse a full settings document.

    Preconditions:
        - ``data`` is the mapping returned by ``load_yaml_file``.
    Postconditions:
        - Returns a ``KernelSettings`` whose ``checksum`` identifies
          ``data``.
    Raises:
        ConfigurationError: on any structural or value error.
    """
    unknown = set(data) - {"database", "logging", "currency"}
    if unknown:
        raise ConfigurationError(source, f"unknown section(s): {sorted(unknown)}")

    return KernelSettings(
        database=parse_database(_section(data, "database", source), source),
        logging=parse_logging(_section(data, "logging", source), source),
        currency=parse_currency(_section(data, "currency", source), source),
        source=source,
        checksum=compute_checksum(data),
    )


def load_settings(path: Path) -> KernelSettings:
    """Load and parse one settings file."""
    return parse_settings(load_yaml_file(path), source=str(path))

