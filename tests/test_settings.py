from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from footvolley.db.database import get_app_data_dir, get_default_database_path
from footvolley.logging_setup import LOG_FILENAME, configure_logging
from footvolley.settings import (
    DEFAULT_DRAW_DELAY_MS,
    DRAW_DELAY_ENV,
    get_draw_delay_ms,
    get_logs_dir,
    set_draw_delay_ms,
)

pytestmark = pytest.mark.skipif(os.name == "nt", reason="XDG paths are POSIX only")


@pytest.fixture
def app_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv(DRAW_DELAY_ENV, raising=False)
    return get_app_data_dir()


def test_app_paths_live_under_xdg_data_home(app_home: Path, tmp_path: Path) -> None:
    assert app_home == tmp_path / "xdg" / "Footvolley"
    assert get_default_database_path() == app_home / "app.db"
    assert get_logs_dir() == app_home / "logs"
    assert get_logs_dir().is_dir()


def test_draw_delay_defaults_and_persists(app_home: Path) -> None:
    assert get_draw_delay_ms() == DEFAULT_DRAW_DELAY_MS

    set_draw_delay_ms(300)

    assert get_draw_delay_ms() == 300
    assert (app_home / "settings.json").exists()


def test_draw_delay_env_override(app_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_draw_delay_ms(300)

    monkeypatch.setenv(DRAW_DELAY_ENV, "50")
    assert get_draw_delay_ms() == 50

    monkeypatch.setenv(DRAW_DELAY_ENV, "rápido")
    assert get_draw_delay_ms() == 300


def test_corrupted_settings_file_uses_default(app_home: Path) -> None:
    (app_home / "settings.json").write_text("{broken", encoding="utf-8")

    assert get_draw_delay_ms() == DEFAULT_DRAW_DELAY_MS


def test_negative_delay_is_rejected(app_home: Path) -> None:
    with pytest.raises(ValueError):
        set_draw_delay_ms(-1)


def test_configure_logging_writes_file_without_duplicate_handlers(tmp_path: Path) -> None:
    logger = configure_logging(tmp_path / "logs")
    configure_logging(tmp_path / "logs")
    try:
        assert len(logger.handlers) == 2
        logging.getLogger("footvolley.services.roster_store").warning("teste de log")
        for handler in logger.handlers:
            handler.flush()
        content = (tmp_path / "logs" / LOG_FILENAME).read_text(encoding="utf-8")
        assert "teste de log" in content
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
