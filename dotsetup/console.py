"""Terminal output for headers, notices and the interactive menu.

Log records go through `logging`; this module is only for what the person
at the keyboard should see.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.rule import Rule

console = Console(highlight=False)


def header(title: str, *, out: Optional[Console] = None) -> None:
    (out or console).print(Rule(f"[bold blue]{title}[/]", style="blue"))


def success(message: str, *, out: Optional[Console] = None) -> None:
    (out or console).print(f"[green]{message}[/]")


def notice(message: str, *, out: Optional[Console] = None) -> None:
    (out or console).print(f"[yellow]{message}[/]")


def error(message: str, *, out: Optional[Console] = None) -> None:
    (out or console).print(f"[red]{message}[/]")
