"""Per-branch resolution context and the shared exploration budget."""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from constants import Constants


@dataclass(frozen=True)
class ResolutionContext:
    """Immutable state for one node of the recursion.

    ``path`` holds the ``name@version`` keys open between the root and the
    current node. Each child receives a new context, so sibling branches never
    see each other's path markers.
    """
    depth: int = 0
    path: FrozenSet[str] = field(default_factory=frozenset)
    max_depth: Optional[int] = None

    def __post_init__(self):
        if self.max_depth is None:
            object.__setattr__(self, "max_depth", Constants.DEFAULT_MAX_DEPTH)

    def blocks(self, key: str) -> bool:
        """True when ``key`` must become a placeholder leaf (too deep or a cycle)."""
        return self.depth > self.max_depth or key in self.path

    def child(self, key: str) -> "ResolutionContext":
        """Context for the dependencies of the node identified by ``key``."""
        return replace(self, depth=self.depth + 1, path=self.path | {key})


@dataclass
class ExplorationBudget:
    """Counter of root-level trees emitted, shared by one generator invocation."""
    max_trees: int
    trees_explored: int = 0

    @property
    def exhausted(self) -> bool:
        return self.trees_explored >= self.max_trees

    def consume(self) -> None:
        self.trees_explored += 1
