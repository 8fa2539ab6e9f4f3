from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_CALIBRATION_ENV = "UV_CALIBRATION_CONSTANT"
_THRESHOLD_ENV = "UV_PROTECTION_THRESHOLD"
_STORE_PATH_ENV = "UV_STORE_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    calibration_constant: float
    protection_threshold: float
    store_path: Optional[str]
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_float_env(name: str, default: float, allow_zero: bool = False) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if parsed > 0 or (allow_zero and parsed == 0):
        return parsed
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        calibration_constant=_read_float_env(_CALIBRATION_ENV, 1.0),
        protection_threshold=_read_float_env(_THRESHOLD_ENV, 3.0, allow_zero=True),
        store_path=_read_optional_env(_STORE_PATH_ENV, "./tmp/uv_store.json"),
        log_level=_read_log_level("INFO"),
    )
