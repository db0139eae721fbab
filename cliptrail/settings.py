from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass

log = logging.getLogger(__name__)


MAX_ENTRIES_LIMIT: int = 1000
MIN_POLL_INTERVAL_MS: int = 50
MAX_POLL_INTERVAL_MS: int = 10000


@dataclass(frozen=True, slots=True)
class AppSettings:
    max_entries: int = 10
    poll_interval_ms: int = 500
    capture_on_start: bool = False

    @property
    def poll_interval_s(self) -> float:
        return self.poll_interval_ms / 1000.0


def default_app_dir() -> str:
    base = os.environ.get("APPDATA") or os.path.expanduser("~")
    return os.path.join(base, "ClipTrail")


def default_config_path() -> str:
    return os.path.join(default_app_dir(), "config.json")


def _int_setting(data: dict, key: str, default: int, lo: int, hi: int) -> int:
    raw = data.get(key, default)
    try:
        if isinstance(raw, bool):
            raise TypeError(key)
        value = int(raw)
    except (TypeError, ValueError):
        log.warning("配置项 %s 无效，使用默认值 %s", key, default)
        return default
    if value <= 0:
        return default
    return max(lo, min(value, hi))


def _bool_setting(data: dict, key: str, default: bool) -> bool:
    raw = data.get(key, default)
    if not isinstance(raw, bool):
        log.warning("配置项 %s 无效，使用默认值 %s", key, default)
        return default
    return raw


def settings_from_dict(data: dict) -> AppSettings:
    defaults = AppSettings()
    return AppSettings(
        max_entries=_int_setting(data, "max_entries", defaults.max_entries, 1, MAX_ENTRIES_LIMIT),
        poll_interval_ms=_int_setting(
            data, "poll_interval_ms", defaults.poll_interval_ms, MIN_POLL_INTERVAL_MS, MAX_POLL_INTERVAL_MS
        ),
        capture_on_start=_bool_setting(data, "capture_on_start", defaults.capture_on_start),
    )


def load_settings(path: str | None = None) -> AppSettings:
    path = path or default_config_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        data = {}
    except (OSError, ValueError):
        log.warning("读取配置失败，使用默认配置: %s", path, exc_info=True)
        data = {}
    if not isinstance(data, dict):
        data = {}
    return settings_from_dict(data)


def with_overrides(settings: AppSettings, **overrides: object) -> AppSettings:
    """Apply non-``None`` overrides, sanitised the same way as the config file."""
    data = asdict(settings)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return settings_from_dict(data)


def save_settings(settings: AppSettings, path: str | None = None) -> None:
    path = path or default_config_path()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    data = asdict(settings)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
