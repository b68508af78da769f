"""Shared fixtures: settings in tmp dirs, a fake GitHub and tarball builders."""

from __future__ import annotations

import io
import json
import tarfile
from pathlib import Path
from typing import Any

import httpx
import pytest

from core.config import AppSettings

REPO = "redwoodjs/sdk"
LATEST_PATH = f"/repos/{REPO}/releases/latest"
RELEASES_PATH = f"/repos/{REPO}/releases"

STARTER_FILES = {
    "package.json": '{"name": "starter"}\n',
    "src/worker.tsx": "export default {};\n",
}


def release_payload(tag: str = "v3.0.0", **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "url": f"https://api.github.com/repos/{REPO}/releases/1",
        "html_url": f"https://github.com/{REPO}/releases/tag/{tag}",
        "tag_name": tag,
        "name": tag,
        "published_at": "2025-05-01T12:00:00Z",
        "prerelease": False,
    }
    payload.update(overrides)
    return payload


def asset_path(template: str, tag: str) -> str:
    return f"/{REPO}/releases/download/{tag}/{template}-{tag}.tar.gz"


def tarball_bytes(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def write_tarball(path: Path, files: dict[str, str]) -> Path:
    path.write_bytes(tarball_bytes(files))
    return path


class FakeGitHub:
    """Routes requests by URL path; unknown paths answer 404 JSON."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes, dict[str, str]]] = {}
        self.requests: list[httpx.Request] = []

    def add_json(self, path: str, payload: Any, status: int = 200) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.routes[path] = (status, body, {"content-type": "application/json"})

    def add_bytes(self, path: str, content: bytes, status: int = 200) -> None:
        self.routes[path] = (status, content, {"content-type": "application/octet-stream"})

    def add_release(self, tag: str = "v3.0.0", templates: tuple[str, ...] = ("standard", "minimal")) -> None:
        self.add_json(LATEST_PATH, release_payload(tag))
        for template in templates:
            self.add_bytes(asset_path(template, tag), tarball_bytes(STARTER_FILES))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, content, headers = route
        return httpx.Response(status, content=content, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "CREATE_RWSDK_GITHUB_TOKEN",
        "CREATE_RWSDK_TEMP_DIR",
        "npm_execpath",
        "npm_config_user_agent",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    path = tmp_path / "downloads"
    path.mkdir()
    return path


@pytest.fixture
def settings(download_dir: Path) -> AppSettings:
    return AppSettings(temp_dir=download_dir, _env_file=None)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()
