"""Detección del package manager que lanzó el proceso.

Heurística best-effort sobre variables de entorno que npm, pnpm y yarn
exportan al ejecutar binarios. El orden de chequeo importa.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping


@dataclass(frozen=True)
class PackageManagerCommands:
    install: str
    dev: str


class PackageManager(str, Enum):
    """Package managers soportados para los next steps."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @classmethod
    def default(cls) -> "PackageManager":
        return cls.NPM

    @property
    def commands(self) -> PackageManagerCommands:
        return _COMMANDS.get(self, _COMMANDS[PackageManager.NPM])


_COMMANDS: dict[PackageManager, PackageManagerCommands] = {
    PackageManager.NPM: PackageManagerCommands(install="npm install", dev="npm run dev"),
    PackageManager.YARN: PackageManagerCommands(install="yarn install", dev="yarn dev"),
    PackageManager.PNPM: PackageManagerCommands(install="pnpm install", dev="pnpm dev"),
}

# (variable, orden de búsqueda de substrings). `npm_execpath` es la señal más
# fiable; el user agent queda como fallback.
_DETECTION_ORDER: tuple[tuple[str, tuple[PackageManager, ...]], ...] = (
    ("npm_execpath", (PackageManager.PNPM, PackageManager.YARN, PackageManager.NPM)),
    ("npm_config_user_agent", (PackageManager.YARN, PackageManager.PNPM, PackageManager.NPM)),
)


def detect_package_manager(environ: Mapping[str, str] | None = None) -> PackageManager:
    env = os.environ if environ is None else environ
    for variable, candidates in _DETECTION_ORDER:
        value = env.get(variable)
        if not value:
            continue
        for candidate in candidates:
            if candidate.value in value:
                return candidate
    return PackageManager.default()
