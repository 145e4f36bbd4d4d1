"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from gemctl.config.models import ConfigFile
from gemctl.config.resolver import ResolvedConfig, resolve_config


@pytest.fixture(autouse=True)
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``~`` at a temp dir and clear credential/config variables."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for var in ("GEMINI_API_KEY", "OPENAI_API_KEY", "GEMCTL_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    return home_dir


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write YAML text to ``tmp_path/config.yaml`` and return the path."""

    def _write(text: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_settings() -> Callable[..., ResolvedConfig]:
    """Resolve settings from an empty config file plus *env* and flag overrides."""

    def _make(env: dict[str, str] | None = None, **overrides: object) -> ResolvedConfig:
        env = {"GEMINI_API_KEY": "test-key"} if env is None else env
        return resolve_config(ConfigFile(), env, **overrides)  # type: ignore[arg-type]

    return _make
