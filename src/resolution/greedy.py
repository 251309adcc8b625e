"""Greedy resolver: one tree, highest matching version at every edge."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from common.logging_utils import extra_context, is_debug_enabled
from errors import DependencyResolutionFailure, HashLockError
from resolution.base import BaseResolver
from resolution.context import ResolutionContext
from versioning.models import DependencyNode

logger = logging.getLogger(__name__)


class GreedyResolver(BaseResolver):
    """Resolve a single dependency tree.

    Dependencies that cannot be resolved are logged and left out of the
    tree; only problems with the root package propagate.
    """

    def resolve(self, name: str, version: str,
                ctx: Optional[ResolutionContext] = None) -> DependencyNode:
        """Resolve ``name@version`` and its dependencies recursively.

        Raises:
            MetadataFetchError: if the package's own metadata cannot be fetched.
            VersionNotFoundError: if ``version`` is not published.
        """
        ctx = ctx or ResolutionContext()
        key = f"{name}@{version}"
        if ctx.depth == 0:
            # the root is checked even when the depth limit truncates it
            self.version_record(name, version)
        if ctx.blocks(key):
            if is_debug_enabled(logger):
                logger.debug(
                    "Truncated to placeholder",
                    extra=extra_context(
                        event="decision",
                        component="greedy_resolver",
                        action="resolve",
                        outcome="cycle" if key in ctx.path else "max_depth",
                        package=key,
                        depth=ctx.depth,
                    ),
                )
            return DependencyNode.placeholder(name, version)

        record = self.version_record(name, version)
        child_ctx = ctx.child(key)
        children: Dict[str, DependencyNode] = {}

        for dep_name, dep_range in record.dependencies.items():
            try:
                versions = self.candidate_versions(dep_name, dep_range)
                # Use the highest matching version
                children[dep_name] = self.resolve(dep_name, versions[0], child_ctx)
            except DependencyResolutionFailure as failure:
                self.report_failure(failure)
            except HashLockError as exc:
                self.report_failure(DependencyResolutionFailure(dep_name, dep_range, str(exc), exc))

        return DependencyNode(name=name, version=version, children=children)
