"""Reusable UI helpers for sphp terminal output."""

from __future__ import annotations

from typing import Dict, Optional

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from sphp_cli.switcher.orchestrator import SwitchResult


class ConsoleReporter:
    """Severity-tagged messages: info/success/warning on stdout, errors on stderr.

    Rich drops the color codes by itself when output is not a terminal or
    NO_COLOR is set, leaving the plain tag symbol and text.
    """

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]✗[/red] {escape(message)}")


class StepTracker:
    """Track and render switch steps with Rich trees."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[dict[str, str]] = []  # {key, label, status, detail}

    @classmethod
    def from_result(cls, result: SwitchResult) -> "StepTracker":
        tracker = cls(f"Switch to PHP {result.requested}")
        for outcome in result.outcomes:
            tracker.add(outcome.key, outcome.label)
            tracker._update(outcome.key, outcome.status, outcome.detail)
        return tracker

    def add(self, key: str, label: str) -> None:
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def _update(self, key: str, status: str, detail: str) -> None:
        for s in self.steps:
            if s["key"] == key:
                s["status"] = status
                if detail:
                    s["detail"] = detail
                return
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{escape(self.title)}[/cyan]", guide_style="grey50")
        symbols = {
            "done": "[green]●[/green]",
            "pending": "[green dim]○[/green dim]",
            "error": "[red]●[/red]",
            "skipped": "[yellow]○[/yellow]",
        }
        for step in self.steps:
            symbol = symbols.get(step["status"], " ")
            label = escape(step["label"])
            detail_text = escape(step["detail"].strip()) if step["detail"] else ""
            if detail_text:
                line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
            else:
                line = f"{symbol} [white]{label}[/white]"
            tree.add(line)
        return tree


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER:
        return "enter"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select an option",
    default_key: Optional[str] = None,
    console: Console | None = None,
) -> str:
    """Interactive selection using arrow keys with Rich Live display."""
    console = console or Console()
    option_keys = list(options.keys())
    if not option_keys:
        raise typer.Exit(1)
    selected_index = option_keys.index(default_key) if default_key in option_keys else 0

    def create_selection_panel() -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, key in enumerate(option_keys):
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, f"[cyan]{key}[/cyan] [dim]({escape(options[key])})[/dim]")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()
    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)

            if key == "up":
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == "down":
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == "enter":
                return option_keys[selected_index]
            elif key == "escape":
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)

            live.update(create_selection_panel(), refresh=True)


__all__ = [
    "ConsoleReporter",
    "StepTracker",
    "get_key",
    "select_with_arrows",
]
