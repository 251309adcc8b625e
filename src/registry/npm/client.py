"""NPM registry client: package metadata (packument) retrieval."""

from __future__ import annotations

import logging
import urllib.parse
from http import HTTPStatus
from typing import Optional

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url
from errors import MetadataFetchError
from versioning.models import PackageMetadata

logger = logging.getLogger(__name__)

def _status_reason(status_code: int, text: str) -> str:
    """Standard reason phrase for an HTTP status; the transport error for status 0."""
    if not status_code:
        return text
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return f"HTTP {status_code}"


def package_url(package_name: str, registry: Optional[str] = None) -> str:
    """Build the packument URL; scoped names keep '@' but encode '/'."""
    base = (registry or Constants.REGISTRY_URL_NPM).rstrip("/") + "/"
    return base + urllib.parse.quote(package_name, safe="@")


def fetch_package_metadata(package_name: str, registry: Optional[str] = None) -> PackageMetadata:
    """Get the metadata of a package from the NPM registry.

    Args:
        package_name: Package name, optionally scoped.
        registry: Registry base URL; defaults to Constants.REGISTRY_URL_NPM.

    Returns:
        PackageMetadata parsed from the packument.

    Raises:
        MetadataFetchError: on any non-200 status, transport failure or
            undecodable body.
    """
    url = package_url(package_name, registry)
    headers = {"Accept": Constants.NPM_ACCEPT_HEADER}

    with Timer() as timer:
        status_code, _, data, text = get_json(url, headers=headers)

    if status_code != 200:
        reason = _status_reason(status_code, text)
        logger.warning(
            "Registry fetch failed for %s: %s %s",
            package_name,
            status_code,
            reason,
            extra=extra_context(
                event="http_response",
                component="npm_client",
                outcome="non_2xx",
                status_code=status_code,
                target=safe_url(url),
            ),
        )
        raise MetadataFetchError(package_name, status_code, reason)

    if not isinstance(data, dict):
        raise MetadataFetchError(package_name, status_code, "Invalid JSON in registry response")
    for key in ("versions", "dist-tags"):
        if data.get(key) is not None and not isinstance(data[key], dict):
            raise MetadataFetchError(package_name, status_code, f"Malformed packument: '{key}' is not an object")

    if is_debug_enabled(logger):
        logger.debug(
            "Fetched package metadata",
            extra=extra_context(
                event="fetch",
                component="npm_client",
                action="fetch_package_metadata",
                outcome="success",
                package=package_name,
                version_count=len(data.get("versions") or {}),
                duration_ms=timer.duration_ms(),
            ),
        )
    metadata = PackageMetadata.from_json(data)
    if not metadata.name:
        metadata = PackageMetadata(name=package_name, versions=metadata.versions,
                                   dist_tags=metadata.dist_tags)
    return metadata
