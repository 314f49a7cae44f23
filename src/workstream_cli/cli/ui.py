"""Reusable UI helpers for workstream CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

_SYMBOLS = {
    "done": "[green]●[/green]",
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
    "warning": "[yellow]●[/yellow]",
}


class StepTracker:
    """Track and render workstream steps with Rich trees."""

    def __init__(self, title: str):
        self.title = title
        self.steps = []  # list of dicts: {key, label, status, detail}

    def add(self, key: str, label: str):
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def start(self, key: str, detail: str = ""):
        self._update(key, status="running", detail=detail)

    def complete(self, key: str, detail: str = ""):
        self._update(key, status="done", detail=detail)

    def error(self, key: str, detail: str = ""):
        self._update(key, status="error", detail=detail)

    def skip(self, key: str, detail: str = ""):
        self._update(key, status="skipped", detail=detail)

    def warn(self, key: str, detail: str = ""):
        self._update(key, status="warning", detail=detail)

    def status_of(self, key: str) -> str | None:
        for s in self.steps:
            if s["key"] == key:
                return s["status"]
        return None

    def _update(self, key: str, status: str, detail: str):
        for s in self.steps:
            if s["key"] == key:
                s["status"] = status
                if detail:
                    s["detail"] = detail
                return
        # If not present, add it
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            label = step["label"]
            detail_text = step["detail"].strip() if step["detail"] else ""
            status = step["status"]
            symbol = _SYMBOLS.get(status, " ")

            if status == "pending":
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            else:
                if detail_text:
                    line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [white]{label}[/white]"

            tree.add(line)
        return tree


def info(console: Console, message: str) -> None:
    console.print(f"[cyan]\\[info][/cyan]  {message}")


def ok(console: Console, message: str) -> None:
    console.print(f"[green]\\[ok][/green]    {message}")


def warn(console: Console, message: str) -> None:
    console.print(f"[yellow]\\[warn][/yellow]  {message}")


def fail(console: Console, message: str, hint: str | None = None) -> None:
    console.print(f"[red]\\[FAIL][/red]  {message}")
    if hint:
        console.print(f"        {hint}")


def key_value_panel(title: str, rows: list[tuple[str, str]], border_style: str = "cyan") -> Panel:
    """Render ``label: value`` rows inside a titled panel."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold", justify="left")
    table.add_column(justify="left")
    for label, value in rows:
        table.add_row(f"{label}:", value)
    return Panel(table, title=f"[bold]{title}[/bold]", border_style=border_style, expand=False)


__all__ = [
    "StepTracker",
    "info",
    "ok",
    "warn",
    "fail",
    "key_value_panel",
]
