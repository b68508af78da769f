"""Resolución de versiones contra la API de releases de GitHub.

- latest: `GET /repos/{repo}/releases/latest`
- prerelease: `GET /repos/{repo}/releases`, descartando tags de test
- pinned: sin red; el descriptor se sintetiza desde el tag normalizado
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client, decode_error_body, describe_status
from core.config import AppSettings
from core.domain.errors import NoPreReleaseFoundError, ReleaseLookupError
from core.domain.models import ReleaseDescriptor, VersionMode, VersionSelection
from core.interfaces.pipeline import ReleaseResolver

logger = logging.getLogger(__name__)

TEST_TAG_MARKER = "test"

_ACCEPT = {"Accept": "application/vnd.github+json"}


def is_test_tag(tag: str) -> bool:
    return TEST_TAG_MARKER in tag.lower()


class GitHubReleaseResolver(ReleaseResolver):
    """Resuelve `VersionSelection` -> `ReleaseDescriptor`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def _releases_url(self) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/repos/{self._settings.release_repo}/releases"

    async def resolve(self, selection: VersionSelection) -> ReleaseDescriptor:
        if selection.mode is VersionMode.PINNED:
            return self.pinned(selection.tag or "")
        if selection.mode is VersionMode.PRERELEASE:
            return await self.latest_prerelease()
        return await self.latest()

    def pinned(self, tag: str) -> ReleaseDescriptor:
        base = self._settings.download_base_url.rstrip("/")
        return ReleaseDescriptor(
            tag=tag,
            display_name=tag,
            url=f"{base}/{self._settings.release_repo}/releases/tag/{tag}",
        )

    async def latest(self) -> ReleaseDescriptor:
        payload = await self._get_json(f"{self._releases_url}/latest")
        return self._parse(payload)

    async def latest_prerelease(self) -> ReleaseDescriptor:
        payload = await self._get_json(self._releases_url)
        if not isinstance(payload, list):
            raise ReleaseLookupError("Unexpected release listing payload (expected a JSON array).")

        skipped = 0
        for entry in payload:
            if not isinstance(entry, dict):
                continue
            tag = entry.get("tag_name")
            if not isinstance(tag, str) or not tag:
                continue
            if is_test_tag(tag):
                skipped += 1
                continue
            return self._parse(entry)
        raise NoPreReleaseFoundError(skipped)

    async def _get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            async with build_async_client(
                self._settings, extra_headers=_ACCEPT, transport=self._transport
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise ReleaseLookupError(f"Failed to fetch release information: {exc}") from exc

        if not response.is_success:
            raise ReleaseLookupError(
                f"Error fetching release info: {describe_status(response)}",
                status_code=response.status_code,
                details=decode_error_body(response.content),
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ReleaseLookupError(
                "Failed to parse release JSON.",
                status_code=response.status_code,
                details=response.text[:400],
            ) from exc

    @staticmethod
    def _parse(payload: Any) -> ReleaseDescriptor:
        if not isinstance(payload, dict):
            raise ReleaseLookupError("Unexpected release payload (expected a JSON object).")
        try:
            return ReleaseDescriptor.model_validate(payload)
        except ValidationError as exc:
            raise ReleaseLookupError("Release payload is missing required fields.", details=payload) from exc
