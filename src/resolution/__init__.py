"""Dependency tree resolution, exhaustive search and canonical hashing."""

from .cache import MetadataCache
from .context import ExplorationBudget, ResolutionContext
from .explore import TreeExplorer
from .greedy import GreedyResolver
from .hasher import hash_tree, serialize_tree, tree_to_flat_structure
from .search import SearchResult, find_match

__all__ = [
    "MetadataCache",
    "ExplorationBudget",
    "ResolutionContext",
    "TreeExplorer",
    "GreedyResolver",
    "hash_tree",
    "serialize_tree",
    "tree_to_flat_structure",
    "SearchResult",
    "find_match",
]
