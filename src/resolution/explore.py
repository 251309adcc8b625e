"""Exhaustive search: lazily enumerate alternative dependency trees.

Every dependency edge contributes up to ``branching_factor`` candidate
versions (highest first). Each candidate version is explored recursively and
the node's children are the lazy cross-product of the per-dependency
alternatives. Nothing is materialized ahead of the consumer: a tree is built
only when the consumer pulls it.

Enumeration order is fixed for fixed registry metadata:

* dependencies are visited in declaration order,
* candidate versions are visited in descending order,
* the current dependency's alternatives form the outer loop and the
  combinations of the remaining dependencies the inner loop.

An ExplorationBudget shared by the whole invocation caps the number of
root-level trees; every level checks it before producing another
combination so work stops promptly once the cap is reached.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from errors import DependencyResolutionFailure, HashLockError
from resolution.base import BaseResolver
from resolution.cache import MetadataCache
from resolution.context import ExplorationBudget, ResolutionContext
from versioning.models import DependencyNode
from versioning.resolvers.npm import NpmVersionMatcher

logger = logging.getLogger(__name__)

Children = Dict[str, DependencyNode]


class TreeExplorer(BaseResolver):
    """Single-use generator of candidate trees for one root package."""

    def __init__(
        self,
        cache: MetadataCache,
        budget: ExplorationBudget,
        max_depth: Optional[int] = None,
        branching_factor: Optional[int] = None,
        matcher: Optional[NpmVersionMatcher] = None,
    ):
        super().__init__(cache, matcher)
        self.budget = budget
        self.max_depth = Constants.DEFAULT_MAX_DEPTH if max_depth is None else max_depth
        self.branching_factor = Constants.BRANCHING_FACTOR if branching_factor is None else branching_factor

    def generate(self, name: str, version: str) -> Iterator[DependencyNode]:
        """Yield candidate trees rooted at ``name@version``.

        The root is validated eagerly, before the first tree is requested.

        Raises:
            MetadataFetchError: if the root metadata cannot be fetched.
            VersionNotFoundError: if the root version is not published.
        """
        self.version_record(name, version)
        return self._generate_roots(name, version)

    def _generate_roots(self, name: str, version: str) -> Iterator[DependencyNode]:
        ctx = ResolutionContext(max_depth=self.max_depth)
        for tree in self._explore(name, version, ctx):
            if self.budget.exhausted:
                break
            self.budget.consume()
            if is_debug_enabled(logger):
                logger.debug(
                    "Candidate tree emitted",
                    extra=extra_context(
                        event="candidate",
                        component="tree_explorer",
                        package=tree.key,
                        trees_explored=self.budget.trees_explored,
                    ),
                )
            yield tree

    def _explore(self, name: str, version: str,
                 ctx: ResolutionContext) -> Iterator[DependencyNode]:
        """Yield one tree per admissible combination of child choices."""
        key = f"{name}@{version}"
        if ctx.blocks(key) or self.budget.exhausted:
            yield DependencyNode.placeholder(name, version)
            return

        try:
            record = self.version_record(name, version)
        except HashLockError:
            yield DependencyNode.placeholder(name, version)
            return

        deps = list(record.dependencies.items())
        if not deps:
            yield DependencyNode.placeholder(name, version)
            return

        for children in self._combinations(deps, ctx.child(key)):
            if self.budget.exhausted:
                break
            yield DependencyNode(name=name, version=version, children=children)

    def _combinations(self, deps: List[Tuple[str, str]],
                      ctx: ResolutionContext) -> Iterator[Children]:
        """Lazy cross-product of the alternatives of each dependency in ``deps``."""
        if not deps:
            yield {}
            return

        (dep_name, dep_range), remaining = deps[0], deps[1:]
        try:
            versions = self.candidate_versions(dep_name, dep_range)
        except DependencyResolutionFailure as failure:
            self.report_failure(failure)
            yield from self._combinations(remaining, ctx)
            return

        for dep_version in versions[:self.branching_factor]:
            if self.budget.exhausted:
                break
            for subtree in self._explore(dep_name, dep_version, ctx):
                for rest in self._combinations(remaining, ctx):
                    combined = {dep_name: subtree}
                    combined.update(rest)
                    yield combined
