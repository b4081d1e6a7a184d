"""Pytest configuration and fixtures for ttsproxy tests."""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

ENV_VARS = [
    "PORT",
    "TTSPROXY_HOST",
    "TTSPROXY_ALLOWED_ORIGIN",
    "TTSPROXY_PROVIDER_TIMEOUT",
    "TTSPROXY_BASE_URL",
    "TTSPROXY_CACHE_DIR",
]


@pytest.fixture(autouse=True)
def isolate_user_dirs(monkeypatch, tmp_path: Path) -> Generator[Path]:
    """Point config and cache locations at a per-test home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))

    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    config_dir = home / ".config" / "ttsproxy"
    monkeypatch.setattr("ttsproxy.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("ttsproxy.config.CONFIG_PATH", config_dir / "config.toml")
    # The CLI imports the path directly for its existence check
    monkeypatch.setattr("ttsproxy.cli.CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.setattr("ttsproxy.config._cached_config", None)

    yield home
