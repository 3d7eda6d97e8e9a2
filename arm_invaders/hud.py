"""
Terminal HUD for the simulator, drawn with rich.

Reads only BankSnapshot / CommandResult values; never touches the bank.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .commands import HELP_LINES
from .config import BAR_RED_MAX, BAR_SCALE, BAR_WIDTH, BAR_YELLOW_MAX
from .interpreter import CommandResult, Outcome
from .regs import BankSnapshot

FLAG_STYLES = {
    'N': "red",
    'Z': "green",
    'C': "yellow",
    'V': "magenta",
}


def health_bar(value: int) -> Text:
    """Bar of BAR_WIDTH cells; anything >= BAR_SCALE is a full bar."""
    v = min(value, BAR_SCALE)
    filled = v * BAR_WIDTH // BAR_SCALE
    if v <= BAR_RED_MAX:
        style = "red"
    elif v <= BAR_YELLOW_MAX:
        style = "yellow"
    else:
        style = "green"
    bar = Text("█" * filled, style=style)
    bar.append("░" * (BAR_WIDTH - filled), style="dim")
    return bar


def flags_text(flags: dict) -> Text:
    text = Text("Flags: ")
    for name, style in FLAG_STYLES.items():
        value = flags[name]
        text.append(f"{name}=")
        text.append(str(value), style=style if value else "dim")
        text.append(" ")
    text.rstrip()
    return text


class Hud:
    """Draws register state, flags, traces and explosions to a Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def draw(self, snap: BankSnapshot):
        table = Table(title=f"ARM Invaders (Sim) — Turn {snap.turns}",
                      box=box.SIMPLE_HEAD, title_style="bold")
        table.add_column("Reg")
        table.add_column("Value", justify="right")
        table.add_column("Health")
        table.add_column("")
        for i, value in enumerate(snap.registers):
            status = Text("*EXPLODED*", style="bold red") if value == 0 else Text("")
            table.add_row(f"r{i}", str(value), health_bar(value), status)
        self.console.print(table)
        self.console.print(flags_text(snap.flags))

    def explosion(self, index: int):
        self.console.print(Panel(Text(f"BOOM! Register r{index} hit!", justify="center"),
                                 style="bold red", expand=False))

    def help(self):
        table = Table(title="Commands", box=box.SIMPLE, show_header=False)
        table.add_column("Command", style="bold")
        table.add_column("Effect")
        table.add_column("Example", style="dim")
        for row in HELP_LINES:
            table.add_row(*row)
        self.console.print(table)

    def trace(self, lines: Iterable[str]):
        for line in lines:
            self.console.print(Text(f"[ASM] {line}", style="cyan"))

    def message(self, text: str, error: bool = False):
        self.console.print(Text(text, style="yellow" if error else ""))

    def report(self, result: CommandResult, snap: BankSnapshot):
        """Show everything one executed line produced."""
        error = result.outcome in (Outcome.USAGE, Outcome.IO_ERROR, Outcome.UNKNOWN)
        for msg in result.messages:
            self.message(msg, error=error)
        self.trace(result.trace)
        if result.render:
            self.draw(snap)
        for index in result.zeroed:
            self.explosion(index)
        if result.show_help:
            self.help()
