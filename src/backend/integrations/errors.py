"""Exceptions raised by the integration clients.

Routers never catch these; `app.py` registers handlers that turn them into
`{"error": ...}` JSON responses.
"""

from __future__ import annotations

from typing import Any


class IntegrationError(Exception):
    """Base exception for integration-level failures (config, connectivity, upstream)."""


class MissingCredentialsError(IntegrationError):
    """A credential environment variable required by a vendor client is unset."""

    def __init__(self, vendor: str, variable: str, message: str | None = None) -> None:
        self.vendor = vendor
        self.variable = variable
        super().__init__(message or f"{variable} environment variable is not set")


class UpstreamAPIError(IntegrationError):
    """A vendor API call failed.

    `status_code` is the vendor's HTTP status when one was received, or None
    for transport failures (DNS, timeouts, refused connections) and for
    vendor-level failures reported inside a 2xx body.
    """

    def __init__(self, vendor: str, status_code: int | None, detail: Any) -> None:
        self.vendor = vendor
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{vendor} HTTP {status_code}: {detail}")

    @property
    def http_status(self) -> int:
        """Status to answer the local caller with."""
        if self.status_code is not None and 400 <= self.status_code <= 599:
            return self.status_code
        return 500
