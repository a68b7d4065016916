import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from tiers import DEFAULT_DIFFICULTY, TIERS


class SettingsError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    default_difficulty: str = DEFAULT_DIFFICULTY
    mismatch_delay: float = 1.0  # seconds
    tick_seconds: float = 1.0
    log_level: int = logging.INFO


def _positive_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise SettingsError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise SettingsError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(environ=None, dotenv_path=None) -> Settings:
    """Read settings from the environment, after loading a .env file.

    Pass ``environ`` to read from a plain mapping instead (the .env file is
    skipped in that case).
    """
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    difficulty = environ.get("MEMORY_DEFAULT_DIFFICULTY", DEFAULT_DIFFICULTY).strip().lower()
    if difficulty not in TIERS:
        raise SettingsError(f"MEMORY_DEFAULT_DIFFICULTY must be one of {sorted(TIERS)}, got {difficulty!r}")

    delay_ms = _positive_float("MEMORY_MISMATCH_DELAY_MS", environ.get("MEMORY_MISMATCH_DELAY_MS", "1000"))
    tick = _positive_float("MEMORY_TICK_SECONDS", environ.get("MEMORY_TICK_SECONDS", "1.0"))

    level_name = environ.get("MEMORY_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise SettingsError(f"MEMORY_LOG_LEVEL is not a logging level: {level_name!r}")

    return Settings(
        default_difficulty=difficulty,
        mismatch_delay=delay_ms / 1000.0,
        tick_seconds=tick,
        log_level=level,
    )
