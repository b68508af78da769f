"""Componentes de UI para CLI (Rich).

Separa los detalles visuales (banner, spinners, tablas, paneles de error)
de la lógica de los comandos.
"""

from __future__ import annotations

from typing import Callable, Mapping

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from core.domain.errors import CreateProjectError
from core.domain.models import PromptResult, TemplateSelection
from core.services.project_initializer import InitializerHooks, NextSteps


def print_banner(console: Console, title: str = "RedwoodSDK Starter") -> None:
    console.print(Text(f"\n🌲 {title} 🌲\n", style="bold red"))


def build_templates_table(templates: Mapping[str, TemplateSelection]) -> Table:
    table = Table(title="Templates")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Source", style="magenta")
    for key, template in templates.items():
        table.add_row(key, template.title, template.remote_locator)
    return table


def print_error(console: Console, exc: CreateProjectError) -> None:
    """Mensaje principal + payload de diagnóstico si existe."""

    console.print(f"[red]Error: {escape(exc.message)}[/red]")
    if exc.details is None:
        return
    if isinstance(exc.details, str):
        body = Text(exc.details)
    else:
        body = JSON.from_data(exc.details)
    console.print(Panel(body, title="Details", border_style="red"))


def print_next_steps(console: Console, steps: NextSteps) -> None:
    console.print("\n[bold]Next steps:[/bold]")
    for command in steps.commands():
        console.print(f"  {escape(command)}", highlight=False)
    console.print("\nHappy coding! 🚀\n")


class RichReporter:
    """Implementa `InitializerHooks` con spinners de Rich."""

    def __init__(self, console: Console, err_console: Console | None = None) -> None:
        self._console = console
        self._err_console = err_console or console
        self._status: Status | None = None

    def start(self, message: str) -> None:
        self._stop()
        self._status = self._console.status(escape(message))
        self._status.start()

    def succeed(self, message: str) -> None:
        self._stop()
        self._console.print(f"[green]✔ {escape(message)}[/green]")

    def fail(self, message: str) -> None:
        self._stop()
        self._err_console.print(f"[red]✖ {escape(message)}[/red]")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]{escape(message)}[/cyan]")

    def warning(self, message: str) -> None:
        self._stop()
        self._console.print(f"[yellow]{escape(message)}[/yellow]")

    def cancelled(self, message: str) -> None:
        self._stop()
        self._console.print(f"\n[yellow]{escape(message)}[/yellow]")

    def error(self, exc: CreateProjectError) -> None:
        self._stop()
        print_error(self._err_console, exc)

    def next_steps(self, steps: NextSteps) -> None:
        print_next_steps(self._console, steps)

    def hooks(self, ask_project_name: Callable[[], PromptResult[str]] | None = None) -> InitializerHooks:
        return InitializerHooks(
            step_start=self.start,
            step_succeed=self.succeed,
            step_fail=self.fail,
            info=self.info,
            warning=self.warning,
            error=self.error,
            cancelled=self.cancelled,
            next_steps=self.next_steps,
            ask_project_name=ask_project_name,
        )

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
