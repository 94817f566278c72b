"""Cloudflare API Router.

Zones, DNS records, cache purge, analytics and zone settings. Record and
settings payloads are Cloudflare's own shapes and are forwarded untouched.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.backend.api.dependencies import get_cloudflare_client, success
from src.backend.integrations.cloudflare_client import CloudflareClient

logger = logging.getLogger(__name__)

cloudflare_router = APIRouter(prefix="/cloudflare", tags=["Cloudflare"])


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class PurgeCacheRequest(BaseModel):
    files: list[str] | None = None


class SettingValueRequest(BaseModel):
    value: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@cloudflare_router.get("/zones")
def list_zones(cf: CloudflareClient = Depends(get_cloudflare_client)):
    return success(cf.get_zones())


@cloudflare_router.get("/zones/{zone_id}")
def get_zone(zone_id: str, cf: CloudflareClient = Depends(get_cloudflare_client)):
    return success(cf.get_zone(zone_id))


@cloudflare_router.get("/zones/{zone_id}/dns_records")
def list_dns_records(
    zone_id: str,
    record_type: str | None = Query(None, alias="type"),
    name: str | None = None,
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.get_dns_records(zone_id, record_type=record_type, name=name))


@cloudflare_router.post("/zones/{zone_id}/dns_records")
def create_dns_record(
    zone_id: str,
    record: dict[str, Any],
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.create_dns_record(zone_id, record))


@cloudflare_router.put("/zones/{zone_id}/dns_records/{record_id}")
def update_dns_record(
    zone_id: str,
    record_id: str,
    record: dict[str, Any],
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.update_dns_record(zone_id, record_id, record))


@cloudflare_router.delete("/zones/{zone_id}/dns_records/{record_id}")
def delete_dns_record(
    zone_id: str,
    record_id: str,
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.delete_dns_record(zone_id, record_id))


@cloudflare_router.post("/zones/{zone_id}/purge_cache")
def purge_cache(
    zone_id: str,
    body: PurgeCacheRequest | None = None,
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    """Purge specific URLs, or the whole zone when no `files` are given."""
    files = body.files if body else None
    logger.info(f"Purging cache for zone {zone_id} ({len(files) if files else 'everything'})")
    return success(cf.purge_cache(zone_id, files))


@cloudflare_router.get("/zones/{zone_id}/analytics")
def get_analytics(
    zone_id: str,
    since: str | None = None,
    until: str | None = None,
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.get_analytics(zone_id, since=since, until=until))


@cloudflare_router.get("/zones/{zone_id}/settings")
def get_security_settings(zone_id: str, cf: CloudflareClient = Depends(get_cloudflare_client)):
    return success(cf.get_security_settings(zone_id))


@cloudflare_router.patch("/zones/{zone_id}/settings/security_level")
def update_security_level(
    zone_id: str,
    body: SettingValueRequest,
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.update_security_level(zone_id, body.value))


@cloudflare_router.get("/zones/{zone_id}/settings/ssl")
def get_ssl_settings(zone_id: str, cf: CloudflareClient = Depends(get_cloudflare_client)):
    return success(cf.get_ssl_settings(zone_id))


@cloudflare_router.patch("/zones/{zone_id}/settings/ssl")
def update_ssl_mode(
    zone_id: str,
    body: SettingValueRequest,
    cf: CloudflareClient = Depends(get_cloudflare_client),
):
    return success(cf.update_ssl_mode(zone_id, body.value))
