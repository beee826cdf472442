"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtSummit"
    LOG_FILENAME = "debtsummit.log"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTSUMMIT_DEV_MODE", default=True)
        # Simulation limits
        self.MAX_MONTHS = _env_int("DEBTSUMMIT_MAX_MONTHS", 360)
        self.BASELINE_MAX_MONTHS = _env_int("DEBTSUMMIT_BASELINE_MAX_MONTHS", 600)
        self.BALANCE_EPSILON = _env_float("DEBTSUMMIT_BALANCE_EPSILON", 0.01)
        # Presentation
        self.CHART_SAMPLE_EVERY = _env_int("DEBTSUMMIT_CHART_SAMPLE_EVERY", 3)
        self.ADVICE_MODEL = os.getenv("DEBTSUMMIT_ADVICE_MODEL", "gpt-4.1-mini")
        if self.MAX_MONTHS < 1 or self.BASELINE_MAX_MONTHS < 1:
            raise ValueError("Simulation month caps must be at least 1.")
        if self.BALANCE_EPSILON < 0:
            raise ValueError("DEBTSUMMIT_BALANCE_EPSILON must not be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and rendered artifacts live."""

        data_root = os.getenv("DEBTSUMMIT_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()
