from __future__ import annotations

import json
import os
from pathlib import Path

from footvolley.db.database import get_app_data_dir

ROSTER_STORAGE_KEY = "footvolleyPlayers"
DEFAULT_DRAW_DELAY_MS = 800
DRAW_DELAY_ENV = "FOOTVOLLEY_DRAW_DELAY_MS"


def _get_app_settings_path() -> Path:
    return get_app_data_dir() / "settings.json"


def _read_settings() -> dict[str, object]:
    path = _get_app_settings_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    if isinstance(data, dict):
        return data
    return {}


def _write_settings(data: dict[str, object]) -> None:
    path = _get_app_settings_path()
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def _coerce_delay(value: object) -> int | None:
    try:
        delay = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return delay if delay >= 0 else None


def get_draw_delay_ms() -> int:
    env_value = os.environ.get(DRAW_DELAY_ENV)
    if env_value:
        delay = _coerce_delay(env_value)
        if delay is not None:
            return delay
    stored = _read_settings().get("draw_delay_ms")
    if stored is not None:
        delay = _coerce_delay(stored)
        if delay is not None:
            return delay
    return DEFAULT_DRAW_DELAY_MS


def set_draw_delay_ms(delay_ms: int) -> None:
    if delay_ms < 0:
        raise ValueError("O atraso do sorteio não pode ser negativo.")
    settings = _read_settings()
    settings["draw_delay_ms"] = int(delay_ms)
    _write_settings(settings)


def get_logs_dir() -> Path:
    logs_dir = get_app_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
