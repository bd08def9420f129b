"""
Kernel bootstrap -- turn a settings file into a running kernel.

Responsibility:
    Load settings through ``get_active_config``, install JSON logging at
    the configured level, and initialize the database engine from the
    configured URL.  Callers then open sessions with ``session_scope`` and
    hand the returned settings to the services.

Architecture position:
    Services -- imperative shell, process start-up only.

Invariants enforced:
    - ``logging.level`` and ``database.url``/``database.echo`` reach
      ``configure_logging`` and ``init_engine_from_url`` unchanged.
    - Logging is configured before the engine, so ``engine_initialized``
      is emitted through the kernel handler.

Failure modes:
    - Everything ``get_active_config`` raises, before any side effect.
    - SQLAlchemy errors from an unusable database URL.

Usage:
    settings = bootstrap()
    with session_scope() as session:
        view = MonthlyOverviewService(session, settings).get_monthly_overview("2026-02")
"""

from __future__ import annotations

import logging
from pathlib import Path

from budget_config import get_active_config
from budget_config.schema import KernelSettings
from budget_kernel.db.engine import create_tables, init_engine_from_url
from budget_kernel.logging_config import configure_logging, get_logger

logger = get_logger("services.bootstrap")


def bootstrap(
    config_path: Path | str | None = None,
    *,
    create_schema: bool = False,
    handler: logging.Handler | None = None,
) -> KernelSettings:
    """Configure logging and the database engine from the active settings.

    Args:
        config_path: Explicit settings file; see ``get_active_config`` for
            the fallback order.
        create_schema: Create the budget tables if they do not exist.
        handler: Log handler to install instead of the stderr stream.

    Returns:
        The settings the kernel was started with.
    """
    settings = get_active_config(config_path)
    configure_logging(level=settings.logging.level, handler=handler)
    engine = init_engine_from_url(settings.database.url, echo=settings.database.echo)
    if create_schema:
        create_tables()

    logger.info(
        "kernel_bootstrapped",
        extra={
            "source": settings.source,
            "checksum": settings.checksum,
            "dialect": engine.dialect.name,
            "log_level": settings.logging.level,
            "currency": settings.currency.code,
        },
    )
    return settings
