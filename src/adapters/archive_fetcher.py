"""Descarga del archivo `.tar.gz` de un template.

El cuerpo se copia en streaming de la respuesta al disco; nunca se carga el
archivo entero en memoria.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from adapters.http_client import build_async_client, decode_error_body, describe_status
from core.config import AppSettings
from core.domain.errors import DownloadError, TransferError
from core.domain.models import ReleaseDescriptor
from core.interfaces.pipeline import ArchiveFetcher

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def archive_name(template_name: str, tag: str) -> str:
    """Nombre del asset publicado en cada release."""

    return f"{template_name}-{tag}.tar.gz"


class ReleaseArchiveFetcher(ArchiveFetcher):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def download_url(self, release: ReleaseDescriptor, template_name: str) -> str:
        base = self._settings.download_base_url.rstrip("/")
        return (
            f"{base}/{self._settings.release_repo}/releases/download/"
            f"{release.tag}/{archive_name(template_name, release.tag)}"
        )

    def destination(self, release: ReleaseDescriptor, template_name: str) -> Path:
        filename = f"{self._settings.archive_prefix}-{release.tag}-{template_name}.tar.gz"
        return self._settings.download_dir / filename

    async def fetch(self, release: ReleaseDescriptor, template_name: str) -> Path:
        url = self.download_url(release, template_name)
        path = self.destination(release, template_name)
        logger.debug("Downloading %s -> %s", url, path)

        written = 0
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        body = await response.aread()
                        raise DownloadError(
                            response.status_code,
                            f"Error downloading template: {describe_status(response)}",
                            details=decode_error_body(body),
                        )
                    path.parent.mkdir(parents=True, exist_ok=True)
                    with path.open("wb") as fh:
                        async for chunk in response.aiter_bytes(CHUNK_SIZE):
                            fh.write(chunk)
                            written += len(chunk)
        except DownloadError:
            raise
        except (httpx.HTTPError, OSError) as exc:
            path.unlink(missing_ok=True)
            raise TransferError(f"Failed to download template: {exc}") from exc
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.debug("Wrote %d bytes to %s", written, path)
        return path
