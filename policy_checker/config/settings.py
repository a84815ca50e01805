"""
Runtime settings for the policy checker, resolved from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from policy_checker.rules.loader import DEFAULT_RULESET_PATH

DEFAULT_QUOTA_PATH = Path("project_bundle/quota.json")
DEFAULT_FREE_CHECKS = 2


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Settings:
    """Configuration entry for the API, CLI and quota store."""

    requirements_source: str = str(DEFAULT_RULESET_PATH)
    quota_path: Path = DEFAULT_QUOTA_PATH
    free_checks: int = DEFAULT_FREE_CHECKS
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_reload: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            requirements_source=os.getenv("POLICY_CHECKER_REQUIREMENTS", str(DEFAULT_RULESET_PATH)),
            quota_path=Path(os.getenv("POLICY_CHECKER_QUOTA_PATH", str(DEFAULT_QUOTA_PATH))),
            free_checks=int(os.getenv("POLICY_CHECKER_FREE_CHECKS", str(DEFAULT_FREE_CHECKS))),
            api_host=os.getenv("POLICY_CHECKER_API_HOST", "127.0.0.1"),
            api_port=int(os.getenv("POLICY_CHECKER_API_PORT", "8000")),
            api_reload=_env_bool(os.getenv("POLICY_CHECKER_API_RELOAD"), default=False),
            cors_origins=os.getenv("POLICY_CHECKER_CORS_ORIGINS", "*").split(","),
        )


__all__ = ["Settings", "DEFAULT_FREE_CHECKS", "DEFAULT_QUOTA_PATH"]
