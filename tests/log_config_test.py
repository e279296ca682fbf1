"""Tests for logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from dirauth import log_config
from dirauth.env_settings import get_env


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_setup_logging(tmp_path: Path) -> None:
    log_config.setup_logging(level="debug", log_dir=str(tmp_path / "logs"), retention_days=7)
    logging.getLogger("dirauth.test").debug("hello")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("ldap3").level == logging.WARNING
    log_file = tmp_path / "logs" / "dirauth.log"
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "dirauth.test: hello" in log_file.read_text()


def test_reconfigure_replaces_handlers(tmp_path: Path) -> None:
    root = logging.getLogger()
    before = len(root.handlers)
    log_config.setup_logging(level="INFO", log_dir=str(tmp_path))
    log_config.setup_logging(level="bogus", log_dir=None)
    assert len(root.handlers) == before + 1
    assert root.level == logging.INFO


def test_setup_logging_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "env-logs"))
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_RETENTION_DAYS", "3")
    get_env.cache_clear()

    log_config.setup_logging_from_env()
    logging.getLogger("dirauth.test").info("dropped")
    logging.getLogger("dirauth.test").warning("kept")

    assert logging.getLogger().level == logging.WARNING
    for handler in logging.getLogger().handlers:
        handler.flush()
    text = (tmp_path / "env-logs" / "dirauth.log").read_text()
    assert "dirauth.test: kept" in text
    assert "dropped" not in text
