"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables for each test.

    This prevents test pollution where one test's environment
    changes affect other tests, and keeps user config files out.
    """
    original_env = os.environ.copy()
    for name in ("BIBQUERY_FILE_DIRS", "BIBQUERY_EXTENSIONS", "BIBQUERY_EXACT_KEY_ONLY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))

    yield

    os.environ.clear()
    os.environ.update(original_env)
