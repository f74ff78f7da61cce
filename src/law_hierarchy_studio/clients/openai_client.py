"""OpenAI-compatible client helpers."""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

import certifi
import httpx

if TYPE_CHECKING:
    from openai import OpenAI


def _existing_path(path: str | None) -> str | None:
    """Return the path when it exists on disk."""

    if path and Path(path).exists():
        return path
    return None


def _resolve_verify_path() -> str:
    """Pick a CA bundle from SSL_CERT_FILE, SSL_CERT_DIR or certifi.

    Returns:
        Path to a CA bundle file or directory.
    """
    for env_name in ("SSL_CERT_FILE", "SSL_CERT_DIR"):
        found = _existing_path(os.getenv(env_name))
        if found:
            return found
    return certifi.where()


@lru_cache(maxsize=1)
def _get_http_client(timeout: float) -> httpx.Client:
    """Create one shared HTTP client with a stable TLS configuration.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        Shared httpx.Client.
    """
    return httpx.Client(verify=_resolve_verify_path(), timeout=timeout)


def create_openai_client(api_key: str, base_url: str, timeout: float = 120.0) -> "OpenAI":
    """Create a client for an OpenAI-compatible endpoint such as DeepSeek.

    Args:
        api_key: API key.
        base_url: API base URL.
        timeout: Request timeout in seconds.

    Returns:
        Configured OpenAI client.
    """
    from openai import OpenAI

    return OpenAI(api_key=api_key, base_url=base_url, http_client=_get_http_client(timeout))


__all__ = ["create_openai_client"]
