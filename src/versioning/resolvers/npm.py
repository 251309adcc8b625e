"""NPM version range matching using semantic versioning."""

import re
from typing import List, Optional, Union

import semantic_version

from versioning.models import PackageMetadata

Spec = Union[semantic_version.NpmSpec, semantic_version.SimpleSpec]


class NpmVersionMatcher:
    """Match npm range expressions against a packument's known versions."""

    def matching_versions(self, metadata: PackageMetadata, version_range: str) -> List[str]:
        """Return the versions satisfying the range, highest first.

        Unparsable ranges and non-semver version keys never match; this
        method does not raise for them.

        Args:
            metadata: Package metadata holding the known versions
            version_range: npm range expression, e.g. "^1.0.0"

        Returns:
            Registry version strings sorted descending
        """
        spec = self._parse_spec(version_range)
        if spec is None:
            return []

        matching = []
        for raw in metadata.versions:
            try:
                ver = semantic_version.Version(raw)
            except ValueError:
                continue  # Skip invalid versions
            if spec.match(ver):
                matching.append((ver, raw))

        matching.sort(key=lambda pair: pair[0], reverse=True)
        return [raw for _, raw in matching]

    def _parse_spec(self, spec_str: str) -> Optional[Spec]:
        """Prefer NpmSpec; fall back to a normalized SimpleSpec."""
        s = self._tighten_operators(spec_str or "")
        if not s:
            s = "*"
        try:
            return semantic_version.NpmSpec(s)
        except ValueError:
            pass
        try:
            return semantic_version.SimpleSpec(self._normalize_spec(s))
        except ValueError:
            return None

    def _tighten_operators(self, spec_str: str) -> str:
        """Rewrite "~>" as "~" and drop whitespace between a comparator and its version."""
        s = spec_str.strip().replace("~>", "~")
        return re.sub(r"(<=|>=|<|>|=|\^|~)\s+", r"\1", s)

    def _normalize_spec(self, spec_str: str) -> str:
        """Normalize npm range syntax (hyphen, x-ranges) into SimpleSpec-compatible form."""
        s = spec_str.strip()

        # Hyphen ranges: "1.2.3 - 1.4.5" => ">=1.2.3,<=1.4.5"
        m = re.match(r'^\s*([0-9A-Za-z\.\-\+]+)\s+-\s+([0-9A-Za-z\.\-\+]+)\s*$', s)
        if m:
            return f">={m.group(1)},<={m.group(2)}"

        # x-ranges: 1.2.x or 1.x or 1.* -> comparator pairs
        s2 = s.replace('*', 'x').lower()
        m = re.match(r'^\s*v?(\d+)\.(\d+)\.x\s*$', s2)
        if m:
            major, minor = int(m.group(1)), int(m.group(2))
            return f">={major}.{minor}.0,<{major}.{minor + 1}.0"

        m = re.match(r'^\s*v?(\d+)(?:\.x)?\s*$', s2)
        if m:
            major = int(m.group(1))
            return f">={major}.0.0,<{major + 1}.0.0"

        return s


def matching_versions(metadata: PackageMetadata, version_range: str) -> List[str]:
    """Module-level convenience wrapper around NpmVersionMatcher."""
    return NpmVersionMatcher().matching_versions(metadata, version_range)
