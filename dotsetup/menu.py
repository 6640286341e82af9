from __future__ import annotations

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.table import Table

from . import console as ui
from .context import SetupContext
from .errors import InvalidChoiceError
from .pipeline import run_steps

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "quit", "exit"})

MENU_ITEMS: tuple[tuple[str, str, str], ...] = (
    ("1", "Run Full Installation (All Steps)", "all"),
    ("2", "Update System Packages Only", "update"),
    ("3", "Install Core Tools Only", "core"),
    ("4", "Setup Zsh & Oh My Zsh", "zsh"),
    ("5", "Install Neovim & NvChad", "neovim"),
    ("6", "Install Nerd Fonts Only", "fonts"),
    ("7", "Copy Dotfiles Only", "dotfiles"),
    ("8", "Install Rust & Cargo Packages", "rust"),
    ("9", "Install OpenVPN", "openvpn"),
    ("10", "Install Snap Packages", "snap"),
    ("11", "Clone Git Repositories", "git-repos"),
)


def resolve_choice(choice: str) -> Optional[str]:
    """Map a menu answer to a step name; None means quit."""

    key = choice.strip().lower()
    if key in QUIT_KEYS:
        return None
    for item_key, _label, step in MENU_ITEMS:
        if key == item_key:
            return step
    raise InvalidChoiceError(choice)


def render_menu(out: Console) -> None:
    table = Table(title="Setup Menu", title_style="bold green", show_header=False, box=None)
    table.add_column(justify="right", style="bold")
    table.add_column()
    for key, label, _step in MENU_ITEMS:
        table.add_row(f"{key}.", label)
    table.add_row("q.", "Quit")
    out.print()
    out.print(table)


def run_menu(
    ctx: SetupContext,
    *,
    read: Optional[Callable[[str], str]] = None,
    out: Optional[Console] = None,
) -> int:
    """Loop until the user quits. Step failures propagate to the caller."""

    out = out or ui.console
    read = read or out.input

    while True:
        render_menu(out)
        try:
            answer = read("[yellow]Choose an option: [/]")
        except EOFError:
            out.print()
            answer = "q"

        try:
            step = resolve_choice(answer)
        except InvalidChoiceError:
            logger.debug("Invalid menu choice %r", answer)
            ui.error("Invalid option. Please try again.", out=out)
            continue

        if step is None:
            out.print("Exiting.")
            return 0

        run_steps(ctx, [step])
        if step == "all":
            ui.success("Full installation complete!", out=out)
        ui.success("Operation complete. Returning to menu...", out=out)
