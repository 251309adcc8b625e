"""Data models for registry metadata and resolved dependency trees."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class PackageVersionRecord:
    """One entry of a packument's ``versions`` map.

    Dependency mappings keep the registry's declaration order; the resolvers
    rely on that order to decide what gets explored first.
    """
    name: str
    version: str
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)
    optional_dependencies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, name: str, version: str, data: Mapping[str, Any]) -> "PackageVersionRecord":
        """Build a record from the raw packument JSON for one version."""
        def _ranges(key: str) -> Dict[str, str]:
            raw = data.get(key) or {}
            if not isinstance(raw, dict):
                return {}
            return {str(k): str(v) for k, v in raw.items()}

        return cls(
            name=str(data.get("name") or name),
            version=str(data.get("version") or version),
            dependencies=_ranges("dependencies"),
            dev_dependencies=_ranges("devDependencies"),
            peer_dependencies=_ranges("peerDependencies"),
            optional_dependencies=_ranges("optionalDependencies"),
        )


@dataclass(frozen=True)
class PackageMetadata:
    """A package's registry document: all versions and dist-tags."""
    name: str
    versions: Dict[str, PackageVersionRecord]
    dist_tags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PackageMetadata":
        name = str(data.get("name", ""))
        raw_versions = data.get("versions") or {}
        versions = {
            str(v): PackageVersionRecord.from_json(name, str(v), record or {})
            for v, record in raw_versions.items()
            if isinstance(record, dict) or record is None
        }
        dist_tags = {str(k): str(v) for k, v in (data.get("dist-tags") or {}).items()}
        return cls(name=name, versions=versions, dist_tags=dist_tags)


@dataclass(frozen=True)
class DependencyNode:
    """One resolved package occurrence in a dependency tree.

    ``children`` has no inherent order; canonical order is imposed only when
    the tree is serialized. A node with no children is a placeholder leaf
    when resolution was truncated.
    """
    name: str
    version: str
    children: Dict[str, "DependencyNode"] = field(default_factory=dict)

    @classmethod
    def placeholder(cls, name: str, version: str) -> "DependencyNode":
        return cls(name=name, version=version)

    @property
    def key(self) -> str:
        return f"{self.name}@{self.version}"

    def node_count(self) -> int:
        return 1 + sum(child.node_count() for child in self.children.values())

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form with dependencies sorted by name."""
        return {
            "name": self.name,
            "version": self.version,
            "dependencies": {
                dep: self.children[dep].to_dict() for dep in sorted(self.children)
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DependencyNode":
        """Inverse of ``to_dict``.

        Raises:
            ValueError: if name or version is missing.
        """
        name = data.get("name")
        version = data.get("version")
        if not name or not version:
            raise ValueError("Tree node requires 'name' and 'version'")
        deps = data.get("dependencies") or {}
        return cls(
            name=str(name),
            version=str(version),
            children={str(k): cls.from_dict(v) for k, v in deps.items()},
        )
