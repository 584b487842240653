from __future__ import annotations

from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolate_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the config file at temp paths so tests don't touch user state."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("CHANGEDIR_CONFIG", str(tmp_path / "config.toml"))
    for key in ("CHANGEDIR_OUTPUT__MODE", "CHANGEDIR_OUTPUT__LOG_LEVEL", "CHANGEDIR_STORAGE__DATA_DIR"):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def data_dir(isolate_home: Path) -> Path:
    return isolate_home / ".local"


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fresh working directory, already chdir'ed into."""
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path.resolve()


@pytest.fixture(autouse=True)
def plain_consoles(monkeypatch: pytest.MonkeyPatch) -> tuple[Console, Console]:
    """Use colorless Rich consoles so output assertions see plain text."""
    out = Console(color_system=None, highlight=False)
    err = Console(stderr=True, color_system=None, highlight=False)

    import changedir.commands.nav as nav_cmd
    import changedir.core.console as core_console
    import changedir.core.decorators as decorators
    import changedir.main as main_module

    monkeypatch.setattr(core_console, "console", out)
    monkeypatch.setattr(core_console, "stderr_console", err)
    monkeypatch.setattr(nav_cmd, "console", out)
    monkeypatch.setattr(nav_cmd, "stderr_console", err)
    monkeypatch.setattr(decorators, "stderr_console", err)
    monkeypatch.setattr(main_module, "stderr_console", err)
    return out, err
