"""Application configuration loaded from ``config.json``."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from prayer_times import PrayerSchedule, build_schedule
from state_store import DEFAULT_STATE_PATH

LOGGER = logging.getLogger(__name__)

APP_ROOT = Path(__file__).parent
CONFIG_PATH = APP_ROOT / "config.json"
CONFIG_ENV_VAR = "QURANCONNECT_CONFIG"

DEFAULT_PRAYER_TIMES = {
    "fajr": "05:30",
    "dhuhr": "13:00",
    "asr": "16:30",
    "maghrib": "19:15",
    "isha": "21:00",
}
DEFAULT_COUNTDOWN_INTERVAL = 30


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or config_path()
    if not path.exists():
        LOGGER.debug("No config file at %s; using defaults", path)
        return {}
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    LOGGER.debug("Loaded config keys: %s", list(payload.keys()))
    return payload


def state_path_from_config(config: Dict[str, Any]) -> Path:
    raw = config.get("state_path")
    if not raw:
        return DEFAULT_STATE_PATH
    return Path(str(raw)).expanduser()


def schedule_from_config(config: Dict[str, Any]) -> PrayerSchedule:
    timings = config.get("prayer_times") or DEFAULT_PRAYER_TIMES
    if not isinstance(timings, dict):
        raise ValueError("'prayer_times' must be an object mapping prayer names to HH:MM")
    return build_schedule(timings)


def timezone_from_config(config: Dict[str, Any]) -> Optional[str]:
    value = config.get("timezone")
    return str(value) if value else None


def countdown_interval_from_config(config: Dict[str, Any]) -> int:
    try:
        interval = int(config.get("countdown_interval_seconds", DEFAULT_COUNTDOWN_INTERVAL))
    except (TypeError, ValueError):
        LOGGER.warning("Invalid countdown interval %r; using default", config.get("countdown_interval_seconds"))
        return DEFAULT_COUNTDOWN_INTERVAL
    return max(1, interval)
