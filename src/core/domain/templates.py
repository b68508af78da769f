"""Registro estático de templates.

Se carga una vez al importar y no se muta en runtime.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from core.domain.errors import InvalidTemplateError
from core.domain.models import TemplateSelection

DEFAULT_TEMPLATE = "standard"

TEMPLATES: Mapping[str, TemplateSelection] = MappingProxyType(
    {
        "standard": TemplateSelection(name="standard", remote_locator="redwoodjs/sdk/starters/standard"),
        "minimal": TemplateSelection(name="minimal", remote_locator="redwoodjs/sdk/starters/minimal"),
    }
)


def resolve_template(
    name: str,
    registry: Mapping[str, TemplateSelection] = TEMPLATES,
) -> TemplateSelection:
    """Devuelve el template para `name` o lanza `InvalidTemplateError`."""

    try:
        return registry[name]
    except KeyError:
        raise InvalidTemplateError(name, registry.keys()) from None
