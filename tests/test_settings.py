import logging
import os

import pytest

from settings import Settings, SettingsError, load_settings


def test_defaults():
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.mismatch_delay == 1.0
    assert settings.default_difficulty == "easy"


def test_overrides():
    settings = load_settings(environ={
        "MEMORY_DEFAULT_DIFFICULTY": " Hard ",
        "MEMORY_MISMATCH_DELAY_MS": "750",
        "MEMORY_TICK_SECONDS": "0.5",
        "MEMORY_LOG_LEVEL": "debug",
    })
    assert settings.default_difficulty == "hard"
    assert settings.mismatch_delay == 0.75
    assert settings.tick_seconds == 0.5
    assert settings.log_level == logging.DEBUG


@pytest.mark.parametrize("env", [
    {"MEMORY_DEFAULT_DIFFICULTY": "extreme"},
    {"MEMORY_MISMATCH_DELAY_MS": "0"},
    {"MEMORY_MISMATCH_DELAY_MS": "soon"},
    {"MEMORY_TICK_SECONDS": "-1"},
    {"MEMORY_LOG_LEVEL": "LOUD"},
])
def test_invalid_values(env):
    with pytest.raises(SettingsError):
        load_settings(environ=env)


def test_reads_dotenv(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("MEMORY_DEFAULT_DIFFICULTY=medium\nMEMORY_MISMATCH_DELAY_MS=1500\n")
    # load_dotenv writes into os.environ; give it a throwaway copy
    environ = {k: v for k, v in os.environ.items() if not k.startswith("MEMORY_")}
    monkeypatch.setattr(os, "environ", environ)

    settings = load_settings(dotenv_path=env_file)

    assert settings.default_difficulty == "medium"
    assert settings.mismatch_delay == 1.5
