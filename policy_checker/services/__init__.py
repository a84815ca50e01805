"""
Service layer around the policy evaluator: quota gating, display
formatting, report export and the check workflow.

Classes are exposed via lazy imports so importing a single service does not
pull in jinja2 or the quota store.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict

__all__ = [
    "CheckOutcome",
    "PolicyCheckService",
    "CheckRejected",
    "QuotaExhausted",
    "ProgramNotSelected",
    "EmptyDocument",
    "QuotaResult",
    "QuotaService",
    "VerdictDisplay",
    "build_display",
    "render_report",
]

_MODULE_ATTRS: Dict[str, str] = {
    "CheckOutcome": "policy_checker.services.checker",
    "PolicyCheckService": "policy_checker.services.checker",
    "CheckRejected": "policy_checker.services.checker",
    "QuotaExhausted": "policy_checker.services.checker",
    "ProgramNotSelected": "policy_checker.services.checker",
    "EmptyDocument": "policy_checker.services.checker",
    "QuotaResult": "policy_checker.services.quota",
    "QuotaService": "policy_checker.services.quota",
    "VerdictDisplay": "policy_checker.services.formatter",
    "build_display": "policy_checker.services.formatter",
    "render_report": "policy_checker.services.report",
}


def __getattr__(name: str) -> Any:
    module_path = _MODULE_ATTRS.get(name)
    if not module_path:
        raise AttributeError(f"module 'policy_checker.services' has no attribute '{name}'")  # pragma: no cover
    module = import_module(module_path)
    return getattr(module, name)


def __dir__() -> list[str]:  # pragma: no cover - convenience helper
    return sorted(__all__)
