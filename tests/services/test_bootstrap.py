"""Tests for kernel start-up from a settings file (budget_services/bootstrap.py)."""

import logging
from decimal import Decimal
from io import StringIO
from pathlib import Path

import pytest
import yaml

from budget_config import CONFIG_ENV_VAR
from budget_kernel.db.engine import get_engine, reset_engine, session_scope
from budget_kernel.exceptions import ConfigurationError
from budget_services.bootstrap import bootstrap
from budget_services.monthly_overview import MonthlyOverviewService
from tests.support import records_with_message


def _write(tmp_path: Path, data) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture(autouse=True)
def _reset_engine():
    yield
    reset_engine()


@pytest.fixture
def settings_file(tmp_path) -> Path:
    return _write(tmp_path, {
        "database": {"url": "sqlite:///:memory:", "echo": False},
        "logging": {"level": "DEBUG"},
        "currency": {"code": "EUR", "minor_unit_exponent": 2},
    })


def _capture() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    return logging.StreamHandler(stream), stream


class TestBootstrap:

    def test_database_url_drives_engine(self, settings_file):
        bootstrap(settings_file)
        engine = get_engine()
        assert engine.dialect.name == "sqlite"
        assert engine.url.database == ":memory:"
        assert engine.echo is False

    def test_file_database_url(self, tmp_path):
        db_path = tmp_path / "household.db"
        bootstrap(_write(tmp_path, {"database": {"url": f"sqlite:///{db_path}"}}))
        assert get_engine().url.database == str(db_path)

    def test_logging_level_applied(self, settings_file):
        handler, _ = _capture()
        bootstrap(settings_file, handler=handler)
        root = logging.getLogger("budget_kernel")
        assert root.level == logging.DEBUG
        assert root.handlers == [handler]

    def test_events_go_through_kernel_handler(self, settings_file):
        handler, stream = _capture()
        settings = bootstrap(settings_file, handler=handler)

        (initialized,) = records_with_message(stream, "engine_initialized")
        assert initialized["dialect"] == "sqlite"
        (booted,) = records_with_message(stream, "kernel_bootstrapped")
        assert booted["source"] == str(settings_file)
        assert booted["checksum"] == settings.checksum
        assert booted["log_level"] == "DEBUG"
        assert booted["currency"] == "EUR"

    def test_warning_level_filters_info(self, tmp_path):
        handler, stream = _capture()
        bootstrap(
            _write(tmp_path, {
                "database": {"url": "sqlite:///:memory:"},
                "logging": {"level": "WARNING"},
            }),
            handler=handler,
        )
        assert stream.getvalue() == ""

    def test_env_var_resolution(self, settings_file, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(settings_file))
        settings = bootstrap()
        assert settings.currency.code == "EUR"
        assert get_engine().url.database == ":memory:"

    def test_bad_settings_leave_engine_untouched(self, tmp_path):
        with pytest.raises(ConfigurationError):
            bootstrap(_write(tmp_path, {"database": {"url": ""}}))
        with pytest.raises(RuntimeError):
            get_engine()

    def test_overview_served_after_bootstrap(self, settings_file):
        settings = bootstrap(settings_file, create_schema=True)
        with session_scope() as session:
            view = MonthlyOverviewService(session, settings).get_monthly_overview("2026-01")
        assert view.ready_to_assign == Decimal("0")
        assert view.budget_summaries == ()
