"""Command handlers behind each changedir flag.

Each handler drives one Navigator action and renders its outcome:
    - Listings go to stdout
    - Menus, prompts, warnings and errors go to stderr, so a shell wrapper
      capturing stdout of a navigation command sees only the target path
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from changedir.core import selector
from changedir.core.console import console, stderr_console
from changedir.core.decorators import unwrap_or_exit
from changedir.core.nav import Navigator

PROMPT = "[bright_yellow]Select directory (0-9, a-z)[/bright_yellow]"


def _row(char: str, label: str) -> Text:
    return Text.assemble((f"[{char}]", "bold bright_cyan"), " ", (label, "bright_white"))


def render_entries(entries: Sequence[selector.Entry], out: Console) -> None:
    for row in selector.addressable(entries):
        if row is None:
            out.print()
            continue
        out.print(_row(row.char, str(row.entry.path)), soft_wrap=True)


def render_subdirectories(subdirs: Sequence[Path], out: Console) -> None:
    for index, subdir in enumerate(subdirs[: selector.MAX_ADDRESSABLE]):
        out.print(_row(selector.index_to_char(index), subdir.name or "?"), soft_wrap=True)


def read_selection() -> str:
    """Read one line from stdin and return its first character ("" if none)."""
    try:
        answer = Prompt.ask(PROMPT, console=stderr_console, default="", show_default=False)
    except EOFError:
        stderr_console.print()
        return ""
    return answer.strip()[:1]


def list_entries(nav: Navigator) -> None:
    entries = nav.entries()
    if not entries:
        console.print("[yellow]No bookmarked directories.[/yellow]")
        return
    render_entries(entries, console)


def bookmark(nav: Navigator) -> None:
    added = unwrap_or_exit(nav.bookmark_current())
    if added is not None:
        console.print(Text(f"Bookmarked: {added}", style="green"), soft_wrap=True)


def forget(nav: Navigator) -> None:
    outcome = unwrap_or_exit(nav.forget_current())
    if outcome is None:
        return
    if outcome.removed:
        console.print(Text(f"Removed bookmark: {outcome.directory}", style="green"), soft_wrap=True)
    else:
        stderr_console.print("[yellow]Current directory is not bookmarked.[/yellow]")


def forget_all(nav: Navigator) -> None:
    if unwrap_or_exit(nav.forget_all()):
        console.print("[green]All bookmarks removed.[/green]")
    else:
        console.print("[yellow]No bookmarks to remove.[/yellow]")


def choose(nav: Navigator, char: str | None) -> None:
    """Choose from the unified list, by `char` or interactively when it is None."""
    entries = nav.entries()
    if char is None and entries:
        render_entries(entries, stderr_console)
        char = read_selection()
    unwrap_or_exit(nav.choose((char or "")[:1], entries))


def back(nav: Navigator) -> None:
    unwrap_or_exit(nav.back())


def up(nav: Navigator) -> None:
    unwrap_or_exit(nav.up())


def down(nav: Navigator) -> None:
    subdirs = unwrap_or_exit(nav.subdirectories())
    if subdirs is None:
        return
    render_subdirectories(subdirs, stderr_console)
    unwrap_or_exit(nav.choose_subdirectory(read_selection(), subdirs))


def find(nav: Navigator, name: str) -> None:
    unwrap_or_exit(nav.find(name))


def show_current(nav: Navigator) -> None:
    current = unwrap_or_exit(nav.current())
    if current is not None:
        console.print(Text(str(current), style="bright_white"), soft_wrap=True)
