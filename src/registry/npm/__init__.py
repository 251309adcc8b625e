"""NPM registry package.

- client.py: packument retrieval from the npm registry

Public API is re-exported at registry.npm.
"""

from .client import fetch_package_metadata, package_url  # noqa: F401

__all__ = ["fetch_package_metadata", "package_url"]
