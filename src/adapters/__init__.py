"""Adaptadores de I/O: API de GitHub (httpx), descarga en streaming y tarfile."""
