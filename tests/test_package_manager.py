from __future__ import annotations

import pytest

from core.domain.package_manager import PackageManager, detect_package_manager


@pytest.mark.parametrize(
    ("environ", "expected"),
    [
        ({}, PackageManager.NPM),
        ({"npm_execpath": "/usr/lib/node_modules/pnpm/bin/pnpm.cjs"}, PackageManager.PNPM),
        ({"npm_execpath": "/home/u/.yarn/bin/yarn.js"}, PackageManager.YARN),
        ({"npm_execpath": "/usr/lib/node_modules/npm/bin/npm-cli.js"}, PackageManager.NPM),
        ({"npm_config_user_agent": "yarn/1.22.19 npm/? node/v20.11.0"}, PackageManager.YARN),
        ({"npm_config_user_agent": "pnpm/9.0.0 npm/? node/v20.11.0"}, PackageManager.PNPM),
        ({"npm_config_user_agent": "npm/10.2.4 node/v20.11.0"}, PackageManager.NPM),
        ({"npm_execpath": "/opt/bun/bin/bun"}, PackageManager.NPM),
    ],
)
def test_detect_package_manager(environ: dict[str, str], expected: PackageManager) -> None:
    assert detect_package_manager(environ) is expected


def test_exec_path_wins_over_user_agent() -> None:
    environ = {
        "npm_execpath": "/usr/lib/node_modules/pnpm/bin/pnpm.cjs",
        "npm_config_user_agent": "yarn/1.22.19 npm/? node/v20.11.0",
    }

    assert detect_package_manager(environ) is PackageManager.PNPM


@pytest.mark.parametrize(
    ("manager", "install", "dev"),
    [
        (PackageManager.NPM, "npm install", "npm run dev"),
        (PackageManager.YARN, "yarn install", "yarn dev"),
        (PackageManager.PNPM, "pnpm install", "pnpm dev"),
    ],
)
def test_commands(manager: PackageManager, install: str, dev: str) -> None:
    assert manager.commands.install == install
    assert manager.commands.dev == dev


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("npm_config_user_agent", "yarn/1.22.19")

    assert detect_package_manager() is PackageManager.YARN
