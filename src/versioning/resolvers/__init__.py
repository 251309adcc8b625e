"""Version range matchers for different ecosystems."""

from .npm import NpmVersionMatcher, matching_versions

__all__ = [
    "NpmVersionMatcher",
    "matching_versions",
]
