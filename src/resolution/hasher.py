"""Canonical tree serialization, hashing and flattening."""

import hashlib
from typing import Dict, List, Optional

from constants import Constants
from errors import UnsupportedAlgorithmError
from versioning.models import DependencyNode


def validate_algorithm(algorithm: str) -> str:
    """Return the algorithm name if supported, else raise UnsupportedAlgorithmError."""
    if algorithm not in Constants.SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithmError(algorithm)
    return algorithm


def serialize_tree(node: DependencyNode) -> str:
    """Serialize a tree into its canonical text form.

    One ``name@version`` line per node in pre-order, indented by two spaces
    per level, children sorted by name. Lines are joined by newlines with no
    trailing newline.
    """
    parts: List[str] = []

    def _serialize(n: DependencyNode, indent: int) -> None:
        parts.append(f"{'  ' * indent}{n.name}@{n.version}")
        for dep_name in sorted(n.children):
            _serialize(n.children[dep_name], indent + 1)

    _serialize(node, 0)
    return "\n".join(parts)


def hash_tree(node: DependencyNode, algorithm: Optional[str] = None) -> str:
    """Lower-case hex digest of the tree's canonical serialization."""
    if algorithm is None:
        algorithm = Constants.DEFAULT_ALGORITHM
    digest = hashlib.new(validate_algorithm(algorithm))
    digest.update(serialize_tree(node).encode("utf-8"))
    return digest.hexdigest()


def tree_to_flat_structure(node: DependencyNode) -> Dict[str, str]:
    """Flatten a tree into a name -> version mapping.

    When a name appears at several versions, the one visited last in
    pre-order wins.
    """
    flat: Dict[str, str] = {}

    def _flatten(n: DependencyNode) -> None:
        flat[n.name] = n.version
        for child in n.children.values():
            _flatten(child)

    _flatten(node)
    return flat
