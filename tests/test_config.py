from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from paint_vault import main
from paint_vault.config import Settings
from paint_vault.logging_setup import LOGGER_NAME, setup_logging


def test_settings_reject_relative_sqlite_url_without_path() -> None:
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite+aiosqlite:paint.db")

    assert Settings(database_url="sqlite+aiosqlite:///:memory:").database_url.endswith(":memory:")


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAINT_VAULT_ENVIRONMENT", "staging")
    monkeypatch.setenv("PAINT_VAULT_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.environment == "staging"
    assert settings.log_level == "DEBUG"


def test_setup_logging_is_idempotent() -> None:
    settings = Settings(log_level="warning")

    logger = setup_logging(settings)
    handler_count = len(logger.handlers)
    setup_logging(settings)

    assert logger is logging.getLogger(LOGGER_NAME)
    assert len(logger.handlers) == handler_count
    assert logger.level == logging.WARNING


def test_run_serves_api_app(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[tuple, dict]] = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main.run()

    assert calls[0][0] == ("paint_vault.api:app",)
    assert calls[0][1]["port"] == 8000
