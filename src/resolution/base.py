"""Shared behavior of the greedy resolver and the exhaustive explorer."""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from errors import DependencyResolutionFailure, MetadataFetchError, VersionNotFoundError
from resolution.cache import MetadataCache
from versioning.models import PackageVersionRecord
from versioning.resolvers.npm import NpmVersionMatcher

logger = logging.getLogger(__name__)


class BaseResolver:
    """Metadata lookup and dependency-edge matching on top of a MetadataCache."""

    def __init__(self, cache: MetadataCache, matcher: Optional[NpmVersionMatcher] = None):
        self.cache = cache
        self.matcher = matcher or NpmVersionMatcher()
        self._reported: Set[Tuple[str, str]] = set()

    def version_record(self, name: str, version: str) -> PackageVersionRecord:
        """Look up one version of a package.

        Raises:
            MetadataFetchError: if the package metadata cannot be fetched.
            VersionNotFoundError: if the version is not published.
        """
        metadata = self.cache.get(name)
        record = metadata.versions.get(version)
        if record is None:
            raise VersionNotFoundError(name, version)
        return record

    def candidate_versions(self, dep_name: str, dep_range: str) -> List[str]:
        """Versions of ``dep_name`` satisfying ``dep_range``, highest first.

        Raises:
            DependencyResolutionFailure: if the metadata fetch fails or
                nothing matches.
        """
        try:
            metadata = self.cache.get(dep_name)
        except MetadataFetchError as exc:
            raise DependencyResolutionFailure(dep_name, dep_range, str(exc), exc) from exc
        versions = self.matcher.matching_versions(metadata, dep_range)
        if not versions:
            raise DependencyResolutionFailure(dep_name, dep_range, "no matching versions")
        return versions

    def report_failure(self, failure: DependencyResolutionFailure) -> None:
        """Log a skipped dependency, once per (name, range) per call."""
        marker = (failure.package, failure.version_range)
        if marker in self._reported:
            logger.debug("%s (already reported)", failure)
            return
        self._reported.add(marker)
        logger.warning("%s; skipping dependency", failure)
