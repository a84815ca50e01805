"""
JSON serialisation helpers for verdicts and their display layout.

Dataclasses are flattened to primitives and derived properties such as
`overall_pass` are written out explicitly so frontend consumers never have
to recompute them.
"""

from __future__ import annotations

from dataclasses import is_dataclass
from typing import Any, Dict

from policy_checker.rules.types import Program, Verdict
from policy_checker.services.formatter import VerdictDisplay


def _serialize(obj: Any) -> Any:
    """Recursively serialise dataclasses, tuples and dicts."""
    if is_dataclass(obj):
        return {key: _serialize(getattr(obj, key)) for key in obj.__dataclass_fields__}
    if isinstance(obj, dict):
        return {key: _serialize(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    return obj


def serialize_verdict(verdict: Verdict) -> Dict[str, Any]:
    payload = _serialize(verdict)
    payload["overall_pass"] = verdict.overall_pass
    return payload


def serialize_display(display: VerdictDisplay) -> Dict[str, Any]:
    payload = _serialize(display)
    for section, section_obj in zip(payload["sections"], display.sections):
        for item, item_obj in zip(section["items"], section_obj.items):
            item["icon"] = item_obj.icon
    return payload


def serialize_program(program: Program) -> Dict[str, Any]:
    payload = _serialize(program)
    payload["label"] = program.label
    medical = program.requirements.min_medical_limit
    payload["requirements"]["min_medical_limit"]["display"] = medical.display
    return payload


__all__ = ["serialize_verdict", "serialize_display", "serialize_program"]
