"""Internal transport helpers for the easyfetch SDK.

This module holds the pieces that sit directly on top of httpx: timeout
configuration, query string handling, JSON payload encoding and
construction of the underlying ``httpx.AsyncClient``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

import httpx

from .exceptions import InvalidRequestError

logger = logging.getLogger(__name__)


@dataclass
class TimeoutConfig:
    """Configuration for HTTP request timeouts.

    ``None`` disables the corresponding timeout.
    """

    read: float | None = None
    connect: float | None = None
    write: float | None = None
    pool: float | None = None

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            read=self.read,
            connect=self.connect,
            write=self.write,
            pool=self.pool,
        )


def build_url(url: str, params: Mapping[str, Any] | None = None) -> str:
    """Append the encoded query string to ``url``.

    The separator is always appended, so a call without params yields a
    URL ending in a bare ``?``.
    """
    return f"{url}?{urlencode(params or {})}"


def parse_url(url: str) -> httpx.URL:
    """Parse ``url`` and require it to be absolute."""
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidRequestError(f"Invalid URL {url!r}: {exc}") from exc
    if not parsed.scheme or not parsed.host:
        raise InvalidRequestError(f"URL must be absolute: {url!r}")
    return parsed


def encode_body(body: Any) -> bytes:
    """Serialize ``body`` as compact UTF-8 JSON text."""
    try:
        text = json.dumps(body, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InvalidRequestError(f"Request body is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


def create_async_client(
    timeout_config: TimeoutConfig,
    *,
    follow_redirects: bool = False,
    verify: bool = True,
    headers: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the ``httpx.AsyncClient`` that carries every request."""
    logger.debug(
        "Creating async transport (timeout=%s, follow_redirects=%s, verify=%s)",
        timeout_config,
        follow_redirects,
        verify,
    )
    return httpx.AsyncClient(
        timeout=timeout_config.to_httpx(),
        follow_redirects=follow_redirects,
        verify=verify,
        headers=dict(headers or {}),
        transport=transport,
    )
