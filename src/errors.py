"""Exception classes raised by the resolver, registry client and hasher."""

from typing import Optional


class HashLockError(Exception):
    """Base class for all hashlock errors."""


class MetadataFetchError(HashLockError):
    """The registry did not return usable metadata for a package."""

    def __init__(self, package: str, status: int, message: str):
        super().__init__(f"Failed to fetch {package}: {status} {message}".rstrip())
        self.package = package
        self.status = status
        self.message = message


class VersionNotFoundError(HashLockError):
    """The requested version is absent from the package's metadata."""

    def __init__(self, package: str, version: str):
        super().__init__(f"Version {version} not found for package {package}")
        self.package = package
        self.version = version


class DependencyResolutionFailure(HashLockError):
    """A single dependency edge could not be resolved.

    Non-fatal: resolvers log it and leave the dependency out of the tree.
    """

    def __init__(self, package: str, version_range: str, reason: str,
                 cause: Optional[Exception] = None):
        super().__init__(f"Failed to resolve {package}@{version_range}: {reason}")
        self.package = package
        self.version_range = version_range
        self.reason = reason
        self.cause = cause


class UnsupportedAlgorithmError(HashLockError):
    """The requested digest algorithm is not one of the supported ones."""

    def __init__(self, algorithm: str):
        super().__init__(f"Unsupported hash algorithm: {algorithm}")
        self.algorithm = algorithm
