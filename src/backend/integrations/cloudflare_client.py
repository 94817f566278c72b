"""Cloudflare connector.

Thin wrapper over the Cloudflare v4 REST API: zones, DNS records, cache purge,
analytics and zone settings. Every call returns the `result` member of
Cloudflare's `{success, errors, messages, result}` envelope.

Auth: with CLOUDFLARE_EMAIL set, CLOUDFLARE_API_KEY is sent as a global API
key (X-Auth-Email / X-Auth-Key); otherwise it is sent as a bearer API token.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.http_client import request_json, require_env, timeout_from_env

logger = logging.getLogger(__name__)

VENDOR = "cloudflare"
DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"


class CloudflareClient:
    def __init__(
        self,
        *,
        api_key: str,
        email: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30,
    ) -> None:
        self._api_key = api_key
        self._email = email
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_env(cls) -> "CloudflareClient":
        api_key = require_env(VENDOR, "CLOUDFLARE_API_KEY")
        return cls(
            api_key=api_key,
            email=os.environ.get("CLOUDFLARE_EMAIL") or None,
            base_url=os.environ.get("CLOUDFLARE_API_URL", DEFAULT_BASE_URL),
            timeout_seconds=timeout_from_env("CLOUDFLARE"),
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._email:
            headers["X-Auth-Email"] = self._email
            headers["X-Auth-Key"] = self._api_key
        else:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _call(
        self,
        action: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        try:
            envelope = request_json(
                method,
                f"{self._base_url}{path}",
                vendor=VENDOR,
                headers=self._headers(),
                params=params,
                json_body=json_body,
                timeout=self._timeout_seconds,
            )
            if isinstance(envelope, dict) and envelope.get("success") is False:
                raise UpstreamAPIError(VENDOR, None, envelope.get("errors") or envelope)
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise

        if isinstance(envelope, dict):
            return envelope.get("result")
        return envelope

    # Zones

    def get_zones(self) -> list[dict[str, Any]]:
        return self._call("fetching zones", "GET", "/zones")

    def get_zone(self, zone_id: str) -> dict[str, Any]:
        return self._call("fetching zone", "GET", f"/zones/{zone_id}")

    # DNS records

    def get_dns_records(
        self,
        zone_id: str,
        *,
        record_type: str | None = None,
        name: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if record_type:
            params["type"] = record_type
        if name:
            params["name"] = name
        return self._call(
            "fetching DNS records",
            "GET",
            f"/zones/{zone_id}/dns_records",
            params=params or None,
        )

    def create_dns_record(self, zone_id: str, record: dict[str, Any]) -> dict[str, Any]:
        return self._call(
            "creating DNS record",
            "POST",
            f"/zones/{zone_id}/dns_records",
            json_body=record,
        )

    def update_dns_record(
        self, zone_id: str, record_id: str, record: dict[str, Any]
    ) -> dict[str, Any]:
        return self._call(
            "updating DNS record",
            "PUT",
            f"/zones/{zone_id}/dns_records/{record_id}",
            json_body=record,
        )

    def delete_dns_record(self, zone_id: str, record_id: str) -> dict[str, Any]:
        return self._call(
            "deleting DNS record",
            "DELETE",
            f"/zones/{zone_id}/dns_records/{record_id}",
        )

    # Cache + analytics

    def purge_cache(self, zone_id: str, files: list[str] | None = None) -> dict[str, Any]:
        """Purge the listed URLs, or everything when `files` is empty."""

        body: dict[str, Any] = {"files": files} if files else {"purge_everything": True}
        return self._call(
            "purging cache",
            "POST",
            f"/zones/{zone_id}/purge_cache",
            json_body=body,
        )

    def get_analytics(
        self,
        zone_id: str,
        *,
        since: str | None = None,
        until: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if since:
            params["since"] = since
        if until:
            params["until"] = until
        return self._call(
            "fetching analytics",
            "GET",
            f"/zones/{zone_id}/analytics/dashboard",
            params=params or None,
        )

    # Settings

    def get_security_settings(self, zone_id: str) -> list[dict[str, Any]]:
        return self._call("fetching security settings", "GET", f"/zones/{zone_id}/settings")

    def update_security_level(self, zone_id: str, level: str) -> dict[str, Any]:
        return self._call(
            "updating security level",
            "PATCH",
            f"/zones/{zone_id}/settings/security_level",
            json_body={"value": level},
        )

    def get_ssl_settings(self, zone_id: str) -> dict[str, Any]:
        return self._call("fetching SSL settings", "GET", f"/zones/{zone_id}/settings/ssl")

    def update_ssl_mode(self, zone_id: str, mode: str) -> dict[str, Any]:
        return self._call(
            "updating SSL mode",
            "PATCH",
            f"/zones/{zone_id}/settings/ssl",
            json_body={"value": mode},
        )
