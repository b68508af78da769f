"""Wrapper de httpx.

Estandariza headers (User-Agent, token), timeouts y la lectura best-effort
de cuerpos de error JSON para todas las llamadas a GitHub.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)


def github_auth_headers(settings: AppSettings) -> dict[str, str]:
    """Header Authorization solo si hay token no vacío."""

    token = settings.token
    return {"Authorization": f"Bearer {token}"} if token else {}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del proyecto.

    `transport` permite sustituir la red (p.ej. `httpx.MockTransport` en tests).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    headers.update(github_auth_headers(settings))
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def decode_error_body(content: bytes) -> Any | None:
    """Intenta decodificar diagnósticos JSON de una respuesta fallida.

    Si el cuerpo no es JSON devuelve None: el error principal nunca se
    reemplaza por un fallo de decodificación.
    """

    if not content:
        return None
    try:
        return json.loads(content)
    except (ValueError, UnicodeDecodeError):
        logger.debug("Error body is not JSON (%d bytes)", len(content))
        return None


def describe_status(response: httpx.Response) -> str:
    return f"{response.reason_phrase or 'HTTP error'} (Status: {response.status_code})"
