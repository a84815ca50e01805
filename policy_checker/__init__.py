"""
policy_checker package bootstrap.

Checks insurance policy wording against per-program rule sets (required
phrases, a minimum medical limit and prohibited phrases).
"""

from importlib import metadata


def get_version() -> str:
    """Return the package version if installed, else '0.0.0'."""
    try:
        return metadata.version("policy-checker")
    except metadata.PackageNotFoundError:  # pragma: no cover - best effort only
        return "0.0.0"


__all__ = ["get_version"]
