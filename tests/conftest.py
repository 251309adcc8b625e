"""Shared fixtures: an in-memory npm registry injected as the metadata fetcher."""

import pytest

from errors import MetadataFetchError
from versioning.models import PackageMetadata


def packument(name, versions, dist_tags=None):
    """Build a minimal packument: versions maps version -> dependency ranges."""
    return {
        "name": name,
        "versions": {
            v: {"name": name, "version": v, "dependencies": dict(deps or {})}
            for v, deps in versions.items()
        },
        "dist-tags": dist_tags or {},
    }


class FakeRegistry:
    """Callable fetcher serving packuments from a dict, recording each request."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.requests = []

    def add(self, name, versions):
        self.documents[name] = packument(name, versions)
        return self

    def __call__(self, package_name, registry=None):
        self.requests.append(package_name)
        doc = self.documents.get(package_name)
        if doc is None:
            raise MetadataFetchError(package_name, 404, "Not Found")
        return PackageMetadata.from_json(doc)


@pytest.fixture
def fake_registry():
    """Empty fake registry for tests to populate."""
    return FakeRegistry()


@pytest.fixture
def ab_registry():
    """A@1.0.0 -> B ^1.0.0, with B@1.0.0 and B@1.1.0 as leaves."""
    return (
        FakeRegistry()
        .add("A", {"1.0.0": {"B": "^1.0.0"}})
        .add("B", {"1.0.0": {}, "1.1.0": {}})
    )


@pytest.fixture
def cycle_registry():
    """A depends on B and B depends on A."""
    return (
        FakeRegistry()
        .add("A", {"1.0.0": {"B": "^1.0.0"}})
        .add("B", {"1.0.0": {"A": "^1.0.0"}})
    )
