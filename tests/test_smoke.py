from __future__ import annotations

from typer.testing import CliRunner

from changedir import __version__
from changedir.main import app

runner = CliRunner()


def test_app_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help_lists_every_flag() -> None:
    """
    Smoke test: the single command accepts --help and documents each flag.
    This catches import errors and broken option declarations.
    """
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Usage:" in result.stdout
    for flag in ("--list", "--bookmark", "--forget", "--choose", "--back", "--up", "--down"):
        assert flag in result.stdout


def test_module_entry_point_imports() -> None:
    from changedir.__main__ import main

    assert callable(main)


def test_installed_distribution_exposes_console_script() -> None:
    from importlib.metadata import entry_points

    scripts = {ep.name: ep.value for ep in entry_points(group="console_scripts")}
    assert scripts.get("changedir") == "changedir.main:cli"
