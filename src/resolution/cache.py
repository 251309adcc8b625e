"""Call-scoped memo of package metadata fetches."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from common.logging_utils import extra_context, is_debug_enabled
from errors import MetadataFetchError
from versioning.models import PackageMetadata

logger = logging.getLogger(__name__)

MetadataFetcher = Callable[[str, Optional[str]], PackageMetadata]


class MetadataCache:
    """Memoizes metadata per package name for one top-level operation.

    A fresh instance is built for every resolve/search call; registry state
    may change between calls so instances are never shared across them.
    Failed fetches are remembered too, so a failing package is requested at
    most once per call and the same error is re-raised on later lookups.
    """

    def __init__(self, fetcher: MetadataFetcher, registry: Optional[str] = None):
        self._fetcher = fetcher
        self._registry = registry
        self._entries: Dict[str, PackageMetadata] = {}
        self._failures: Dict[str, MetadataFetchError] = {}
        self.fetch_count = 0

    def get(self, package_name: str) -> PackageMetadata:
        """Return metadata for the package, fetching on first reference.

        Raises:
            MetadataFetchError: if the registry fetch failed (now or earlier
                in this call).
        """
        cached = self._entries.get(package_name)
        if cached is not None:
            return cached
        failure = self._failures.get(package_name)
        if failure is not None:
            raise failure

        self.fetch_count += 1
        if is_debug_enabled(logger):
            logger.debug(
                "Metadata cache miss",
                extra=extra_context(
                    event="cache_miss",
                    component="metadata_cache",
                    package=package_name,
                ),
            )
        try:
            metadata = self._fetcher(package_name, self._registry)
        except MetadataFetchError as exc:
            self._failures[package_name] = exc
            raise
        self._entries[package_name] = metadata
        return metadata

    def __contains__(self, package_name: str) -> bool:
        return package_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
