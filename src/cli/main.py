"""CLI entry point (Typer).

`create` is the default command: `create-rwsdk my-app` and
`create-rwsdk create my-app` are equivalent.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from typer.core import TyperGroup

from adapters.archive_extractor import TarballExtractor
from adapters.archive_fetcher import ReleaseArchiveFetcher
from adapters.github_releases import GitHubReleaseResolver
from cli.doctor import doctor
from cli.logging_config import configure_logging
from cli.prompts import ask_project_name, ask_template
from cli.ui_components import RichReporter, build_templates_table, print_banner
from core.config import AppSettings
from core.domain.models import Cancelled, ExitCode, VersionSelection
from core.domain.templates import DEFAULT_TEMPLATE, TEMPLATES
from core.services.project_initializer import CreateOptions, InitializerHooks, ProjectInitializer

__version__ = "3.0.0"

_GROUP_OPTIONS = {"--help", "--version", "--verbose", "-v"}


class DefaultCommandGroup(TyperGroup):
    """Routes to `create` when the first non-option argument is not a command."""

    default_command = "create"

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        index = 0
        while index < len(args) and args[index] in _GROUP_OPTIONS:
            index += 1
        if "--help" not in args[:index] and (index == len(args) or args[index] not in self.commands):
            args = [*args[:index], self.default_command, *args[index:]]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="create-rwsdk",
    help="A wrapper for creating RedwoodSDK starter projects",
    cls=DefaultCommandGroup,
    add_completion=False,
)

app.command(name="doctor")(doctor)

_console = Console()
_err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        _console.print(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging(logging.DEBUG if verbose else settings.log_level.upper())


def _build_initializer(settings: AppSettings, hooks: InitializerHooks) -> ProjectInitializer:
    return ProjectInitializer(
        resolver=GitHubReleaseResolver(settings),
        fetcher=ReleaseArchiveFetcher(settings),
        extractor=TarballExtractor(),
        hooks=hooks,
    )


def _run(project_name: str | None, options: CreateOptions) -> ExitCode:
    settings = AppSettings()
    reporter = RichReporter(_console, _err_console)
    initializer = _build_initializer(settings, reporter.hooks(ask_project_name))
    return asyncio.run(initializer.create(project_name, options))


@app.command(name="create")
def create(
    project_name: Optional[str] = typer.Argument(None, help="Name of the project directory to create"),
    force: bool = typer.Option(False, "--force", "-f", help="Force overwrite if directory exists"),
    template: str = typer.Option(
        DEFAULT_TEMPLATE,
        "--template",
        "-t",
        help=f"Starter template to use ({', '.join(TEMPLATES)})",
    ),
    pre: bool = typer.Option(False, "--pre", help="Use the latest pre-release instead of the latest release"),
    release: Optional[str] = typer.Option(None, "--release", help="Use a specific release version (e.g. 1.2.3)"),
) -> None:
    """Create a new RedwoodSDK project."""

    print_banner(_console)

    if pre and release:
        _err_console.print("[red]Error: --pre and --release cannot be used together.[/red]")
        raise typer.Exit(int(ExitCode.FAILURE))

    if release is not None:
        if not release.strip():
            _err_console.print("[red]Error: --release requires a version.[/red]")
            raise typer.Exit(int(ExitCode.FAILURE))
        version = VersionSelection.pinned(release)
    elif pre:
        version = VersionSelection.prerelease()
    else:
        version = VersionSelection.latest()

    exit_code = _run(project_name, CreateOptions(template=template, force=force, version=version))
    raise typer.Exit(int(exit_code))


@app.command(name="list")
def list_templates() -> None:
    """List and select available templates."""

    print_banner(_console, "RedwoodSDK Templates")
    _console.print(build_templates_table(TEMPLATES))

    selected = ask_template(TEMPLATES)
    if isinstance(selected, Cancelled):
        _console.print("\n[yellow]Template selection cancelled.[/yellow]")
        raise typer.Exit(int(ExitCode.SUCCESS))

    name = ask_project_name()
    if isinstance(name, Cancelled):
        _console.print("\n[yellow]Template selection cancelled.[/yellow]")
        raise typer.Exit(int(ExitCode.SUCCESS))

    exit_code = _run(name.value, CreateOptions(template=selected.value.name, force=False))
    raise typer.Exit(int(exit_code))


def run() -> None:
    app()
