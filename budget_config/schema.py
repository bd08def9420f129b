"""
KernelSettings schema.

Defines the runtime settings of the budget kernel as frozen dataclasses.
YAML files are parsed into these types by the loader; nothing else in the
system reads the settings file or its environment override directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from budget_kernel.domain.values import DEFAULT_MINOR_UNIT_EXPONENT

# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseSettings:
    """Where the snapshot selector reads from."""

    url: str = "sqlite:///budget.db"
    echo: bool = False


@dataclass(frozen=True)
class LoggingSettings:
    """Root level for the ``budget_kernel`` logger hierarchy."""

    level: str = "INFO"


@dataclass(frozen=True)
class CurrencySettings:
    """Display currency and how many minor units make one major unit."""

    code: str = "UAH"
    minor_unit_exponent: int = DEFAULT_MINOR_UNIT_EXPONENT


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KernelSettings:
    """
    Complete runtime settings.

    ``checksum`` is the SHA-256 of the canonical JSON form of the parsed
    YAML, so two processes can confirm they run with the same settings.
    """

    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    currency: CurrencySettings = field(default_factory=CurrencySettings)
    source: str = "<defaults>"
    checksum: str = ""
