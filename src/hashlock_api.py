"""Entry-point operations: resolve-and-hash and find-tree-by-hash.

Each call builds its own MetadataCache, so nothing fetched in one call is
reused by the next. Tests and embedders may pass ``fetcher`` to replace the
npm registry client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from constants import Constants
from registry.npm import fetch_package_metadata
from resolution.cache import MetadataCache, MetadataFetcher
from resolution.context import ExplorationBudget, ResolutionContext
from resolution.explore import TreeExplorer
from resolution.greedy import GreedyResolver
from resolution.hasher import hash_tree, serialize_tree, tree_to_flat_structure, validate_algorithm
from resolution.search import SearchResult, find_match
from versioning.models import DependencyNode

logger = logging.getLogger(__name__)

__all__ = [
    "DependencyNode",
    "ResolveResult",
    "SearchResult",
    "resolve_and_hash",
    "find_tree_by_hash",
    "generate_all_possible_trees",
    "hash_tree",
    "serialize_tree",
    "tree_to_flat_structure",
]


@dataclass
class ResolveResult:
    """A greedily resolved tree and its hash."""
    tree: DependencyNode
    hash: str


def _new_cache(registry: Optional[str], fetcher: Optional[MetadataFetcher]) -> MetadataCache:
    return MetadataCache(fetcher or fetch_package_metadata, registry or Constants.REGISTRY_URL_NPM)


def _max_depth(max_depth: Optional[int]) -> int:
    if max_depth is None:
        return Constants.DEFAULT_MAX_DEPTH
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    return max_depth


def resolve_and_hash(
    package_name: str,
    version: str,
    *,
    algorithm: Optional[str] = None,
    registry: Optional[str] = None,
    max_depth: Optional[int] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> ResolveResult:
    """Resolve a single tree (highest version wins) and hash it.

    Raises:
        UnsupportedAlgorithmError: for an algorithm other than sha256/sha512.
        ValueError: for a negative ``max_depth``.
        MetadataFetchError: if the root package cannot be fetched.
        VersionNotFoundError: if the root version is not published.
    """
    algorithm = validate_algorithm(algorithm or Constants.DEFAULT_ALGORITHM)
    resolver = GreedyResolver(_new_cache(registry, fetcher))
    tree = resolver.resolve(package_name, version,
                            ResolutionContext(max_depth=_max_depth(max_depth)))
    logger.info("Resolved %s@%s (%d packages)", package_name, version, tree.node_count())
    return ResolveResult(tree=tree, hash=hash_tree(tree, algorithm))


def generate_all_possible_trees(
    package_name: str,
    version: str,
    *,
    max_trees: Optional[int] = None,
    registry: Optional[str] = None,
    max_depth: Optional[int] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> Iterator[DependencyNode]:
    """Lazily enumerate candidate trees, at most ``max_trees`` of them.

    The root package is fetched and validated before this returns; the
    remaining work happens as the caller iterates.
    """
    budget = ExplorationBudget(Constants.DEFAULT_MAX_TREES if max_trees is None else max_trees)
    explorer = TreeExplorer(_new_cache(registry, fetcher), budget, max_depth=_max_depth(max_depth))
    return explorer.generate(package_name, version)


def find_tree_by_hash(
    package_name: str,
    version: str,
    target_hash: str,
    *,
    algorithm: Optional[str] = None,
    max_trees: Optional[int] = None,
    registry: Optional[str] = None,
    max_depth: Optional[int] = None,
    fetcher: Optional[MetadataFetcher] = None,
) -> Optional[SearchResult]:
    """Search candidate trees for one whose hash equals ``target_hash``.

    Returns:
        SearchResult for the first match, or None if the budget or search
        space is exhausted without a match.
    """
    algorithm = validate_algorithm(algorithm or Constants.DEFAULT_ALGORITHM)
    candidates = generate_all_possible_trees(
        package_name, version,
        max_trees=max_trees, registry=registry, max_depth=max_depth, fetcher=fetcher,
    )
    return find_match(candidates, target_hash, algorithm)
