from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass

import typer
from rich.panel import Panel

from . import __version__
from .commands import nav as nav_cmd
from .core.config import load_config
from .core.console import setup_logging, stderr_console
from .core.decorators import handle_exceptions
from .core.error_middleware import format_error, format_for_cli
from .core.nav import Navigator
from .core.result import ChangeDirError
from .core.sink import create_sink

app = typer.Typer(
    help="changedir: directory bookmarks and history for the shell.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
HELP_ALIAS = "-?"
CHOOSE_FLAGS = {"-c", "--choose"}
# Short flags that take no value and may be bundled before -c (e.g. -vc).
_BARE_SHORT_FLAGS = set("lfFbudv")


@dataclass
class AppState:
    logger: logging.Logger
    navigator: Navigator


def _is_bare_choose(token: str, following: str | None) -> bool:
    """True when `token` requests --choose without attaching a character."""
    if following is not None and not following.startswith("-"):
        return False
    if token in CHOOSE_FLAGS:
        return True
    letters = token[1:]
    return (
        token.startswith("-")
        and not token.startswith("--")
        and letters.endswith("c")
        and set(letters[:-1]) <= _BARE_SHORT_FLAGS
    )


def prepare_args(argv: Sequence[str]) -> list[str]:
    """Rewrite raw argv before click sees it.

    `-?` anywhere means help. A bare `-c`/`--choose` becomes `--choose=` so the
    option can be given without a value; an empty value selects the
    interactive chooser.
    """
    args = list(argv)
    if HELP_ALIAS in args:
        return ["--help"]

    prepared: list[str] = []
    for index, token in enumerate(args):
        if token == "--":
            prepared.extend(args[index:])
            break
        following = args[index + 1] if index + 1 < len(args) else None
        if _is_bare_choose(token, following):
            if token not in CHOOSE_FLAGS:
                prepared.append(token[:-1])
            prepared.append("--choose=")
        else:
            prepared.append(token)
    return prepared


def _bootstrap(verbose: bool) -> AppState:
    loaded_config, meta = load_config()

    log = setup_logging(level=loaded_config.output.log_level, verbose=verbose)

    sink = create_sink(loaded_config)
    # cli() already cleared the target; `app` can also be driven directly.
    sink.reset()

    if meta.error:
        stderr_console.print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {meta.path}:\n{meta.error}\n\n"
                f"[yellow]Using default settings.[/yellow]",
                border_style="red",
            )
        )
    elif meta.file_loaded:
        log.debug("Loaded configuration from %s", meta.path)
    else:
        log.debug("No configuration file at %s, using defaults", meta.path)
    if meta.env_overrides:
        log.debug("Environment overrides: %s", ", ".join(sorted(meta.env_overrides)))
    if verbose:
        log.debug("Verbose mode enabled")

    return AppState(logger=log, navigator=Navigator.from_config(loaded_config, sink))


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
@handle_exceptions
def main(
    directory: str | None = typer.Argument(
        None, help="Directory name to change to (bookmarks, then children, then ancestors)."
    ),
    list_: bool = typer.Option(
        False, "--list", "-l", help="List bookmarked and recent directories."
    ),
    bookmark: bool = typer.Option(False, "--bookmark", help="Bookmark the current directory."),
    forget: bool = typer.Option(
        False, "--forget", "-f", help="Forget the current directory if bookmarked."
    ),
    forget_all: bool = typer.Option(
        False, "--forget-all", "-F", help="Forget all bookmarked directories."
    ),
    choose: str | None = typer.Option(
        None,
        "--choose",
        "-c",
        metavar="[CHAR]",
        help="Choose a directory from the list (with optional character).",
    ),
    back: bool = typer.Option(False, "--back", "-b", help="Change to the previous directory."),
    up: bool = typer.Option(False, "--up", "-u", help="Change up one directory level."),
    down: bool = typer.Option(False, "--down", "-d", help="List and select a subdirectory."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    _version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Print the version."
    ),
) -> None:
    """Intelligent directory bookmarking and navigation.

    Navigation results are handed to the calling shell, which performs the cd.
    """
    state = _bootstrap(verbose)
    state.logger.debug("Command arguments: %s", sys.argv[1:])
    nav = state.navigator

    if list_:
        nav_cmd.list_entries(nav)
    elif bookmark:
        nav_cmd.bookmark(nav)
    elif forget:
        nav_cmd.forget(nav)
    elif forget_all:
        nav_cmd.forget_all(nav)
    elif choose is not None:
        nav_cmd.choose(nav, choose or None)
    elif back:
        nav_cmd.back(nav)
    elif up:
        nav_cmd.up(nav)
    elif down:
        nav_cmd.down(nav)
    elif directory is not None:
        nav_cmd.find(nav, directory)
    else:
        nav_cmd.show_current(nav)


def clear_stale_target() -> None:
    """Remove the side-channel target left by an earlier run.

    Runs before any argument parsing, so help, version and usage errors also
    leave no target for the shell wrapper to act on.
    """
    try:
        loaded_config, _ = load_config()
        create_sink(loaded_config).reset()
    except ChangeDirError as exc:
        stderr_console.print(format_for_cli(format_error(exc)), soft_wrap=True)
        raise SystemExit(1) from exc


def cli(argv: Sequence[str] | None = None) -> None:
    clear_stale_target()
    args = prepare_args(sys.argv[1:] if argv is None else argv)
    app(args=args, prog_name="changedir")


__all__ = ["app", "clear_stale_target", "cli", "main", "prepare_args"]
