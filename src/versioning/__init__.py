"""Registry metadata models and version range matching."""
