"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest

from putrecord.config import REQUIRED_VARIABLES

PDS_URL = "https://pds.test"


@pytest.fixture(scope="function")
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Ensure tests run with a clean environment (no leftover vars)."""
    for var in [*REQUIRED_VARIABLES, "RKEY", "FORCE_FIELDS"]:
        monkeypatch.delenv(var, raising=False)
    yield monkeypatch


@pytest.fixture(scope="function")
def env_vars(tmp_path):
    """A complete environment for create mode, pointing at a temp file."""
    note = tmp_path / "note.txt"
    note.write_text("Hello world")
    return {
        "PDS_URL": PDS_URL,
        "IDENTIFIER": "alice.test",
        "APP_PASSWORD": "app-pass",
        "COLLECTION": "com.example.note",
        "FILE_PATH": str(note),
    }


@pytest.fixture(scope="function")
def set_env(clean_env, env_vars):
    """Apply env_vars to the process environment; returns a setter for extras."""
    for key, value in env_vars.items():
        clean_env.setenv(key, value)

    def setter(**extra: str) -> None:
        for key, value in extra.items():
            clean_env.setenv(key, value)

    return setter
