"""Search driver: pull candidate trees until one hashes to the target."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from common.logging_utils import extra_context, is_debug_enabled, Timer
from resolution.hasher import hash_tree, validate_algorithm
from versioning.models import DependencyNode

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """A candidate tree whose hash matched the target."""
    tree: DependencyNode
    hash: str
    trees_explored: int


def find_match(candidates: Iterable[DependencyNode], target_hash: str,
               algorithm: str) -> Optional[SearchResult]:
    """Hash candidates in order and return the first exact match.

    Stops pulling from ``candidates`` as soon as a match is found. Returns
    None once the candidates are exhausted; that is a normal outcome.
    """
    validate_algorithm(algorithm)
    target = target_hash.strip().lower()
    trees_explored = 0

    with Timer() as timer:
        for tree in candidates:
            trees_explored += 1
            digest = hash_tree(tree, algorithm)
            if digest == target:
                logger.info("Found matching tree after %d candidates", trees_explored)
                return SearchResult(tree=tree, hash=digest, trees_explored=trees_explored)

    if is_debug_enabled(logger):
        logger.debug(
            "Search exhausted",
            extra=extra_context(
                event="search",
                component="search_driver",
                outcome="not_found",
                trees_explored=trees_explored,
                duration_ms=timer.duration_ms(),
            ),
        )
    logger.info("No matching tree found in %d candidates", trees_explored)
    return None
