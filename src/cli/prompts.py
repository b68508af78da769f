"""Interactive prompts.

An aborted prompt (Ctrl+C / EOF) is returned as `Cancelled`, not raised, so
callers can exit with a neutral status.
"""

from __future__ import annotations

from typing import Mapping

import click
import typer

from core.domain.models import Cancelled, Completed, PromptResult, TemplateSelection


def _require_value(value: str) -> str:
    value = value.strip()
    if not value:
        raise typer.BadParameter("Project name is required")
    return value


def ask_project_name() -> PromptResult[str]:
    try:
        value = typer.prompt("What is the name of your project?", value_proc=_require_value)
    except typer.Abort:
        return Cancelled()
    return Completed(value)


def ask_template(templates: Mapping[str, TemplateSelection]) -> PromptResult[TemplateSelection]:
    keys = list(templates)
    try:
        key = typer.prompt(
            "Select a template to use",
            type=click.Choice(keys),
            default=keys[0],
            show_choices=True,
        )
    except typer.Abort:
        return Cancelled()
    return Completed(templates[key])
