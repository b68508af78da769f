"""Interfaces/abstracciones del Core.

- Contratos (Protocol) que implementan los adaptadores concretos.
- El inicializador depende de estas abstracciones, no de httpx ni tarfile.
"""

from core.interfaces.pipeline import ArchiveExtractor, ArchiveFetcher, ReleaseResolver

__all__ = [
    "ArchiveExtractor",
    "ArchiveFetcher",
    "ReleaseResolver",
]
