"""Shared HTTP plumbing for the REST-based vendor clients.

One `requests.request` call per operation; no sessions, retries or backoff.
Failures surface as `UpstreamAPIError` carrying the vendor's status and body.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import requests

from src.backend.integrations.errors import MissingCredentialsError, UpstreamAPIError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def require_env(vendor: str, name: str, message: str | None = None) -> str:
    value = os.environ.get(name)
    if not value:
        raise MissingCredentialsError(vendor, name, message)
    return value


def timeout_from_env(prefix: str) -> float:
    """Per-vendor timeout (`<PREFIX>_HTTP_TIMEOUT_SECONDS`), then the global one."""
    raw = (
        os.environ.get(f"{prefix}_HTTP_TIMEOUT_SECONDS")
        or os.environ.get("HTTP_TIMEOUT_SECONDS")
        or str(DEFAULT_TIMEOUT_SECONDS)
    )
    return float(raw)


def _error_detail(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or resp.reason


def request_json(
    method: str,
    url: str,
    *,
    vendor: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    json_body: Any = None,
    data: bytes | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    expect_json: bool = True,
) -> Any:
    """Issue one request and return the decoded JSON body.

    With `expect_json=False` the raw `requests.Response` is returned instead
    (binary downloads, raw file contents, pagination headers).
    """

    try:
        resp = requests.request(
            method,
            url,
            headers=headers,
            params=params,
            json=json_body,
            data=data,
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise UpstreamAPIError(vendor, None, str(e)) from e

    # Only URL and status; headers carry credentials.
    logger.debug(f"[{vendor}] {method} {url} -> {resp.status_code}")

    if resp.status_code >= 400:
        raise UpstreamAPIError(vendor, resp.status_code, _error_detail(resp))

    if not expect_json:
        return resp
    if resp.status_code == 204 or not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamAPIError(
            vendor, resp.status_code, f"Invalid JSON in response: {resp.text[:200]}"
        ) from e
