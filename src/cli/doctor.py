"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import httpx
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.package_manager import detect_package_manager

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    url = f"{settings.api_base_url.rstrip('/')}/repos/{settings.release_repo}/releases/latest"
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc)
    detail = f"HTTP {response.status_code}"
    remaining = response.headers.get("x-ratelimit-remaining")
    if remaining is not None:
        detail += f" (rate limit remaining: {remaining})"
    return response.is_success, detail


def _check_temp_dir(path: Path) -> tuple[bool, str]:
    try:
        with tempfile.NamedTemporaryFile(dir=path):
            pass
    except OSError as exc:
        return False, str(exc)
    return True, str(path)


def doctor() -> None:
    """Run baseline diagnostics (GitHub API, token, temp storage, package manager)."""

    settings = AppSettings()

    table = Table(title="create-rwsdk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.token:
        table.add_row("GitHub token", "OK", "Authenticated API requests")
    else:
        table.add_row("GitHub token", "OPTIONAL", "No token set -> unauthenticated rate limit")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("Release API", "OK" if ok_api else "FAIL", detail_api)

    ok_tmp, detail_tmp = _check_temp_dir(settings.download_dir)
    table.add_row("Temp storage", "OK" if ok_tmp else "FAIL", detail_tmp)

    manager = detect_package_manager()
    table.add_row("Package manager", "OK", f"{manager.value} ({manager.commands.install})")

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Set GITHUB_TOKEN to raise the GitHub API rate limit."
        )
