"""
Policy rule definitions, loading and evaluation.

The evaluator in `engine` is the only component with matching logic; the
loader turns ruleset JSON into immutable `Program` records for it.
"""

from .engine import InvalidDocumentError, PatternError, evaluate, evaluate_program
from .loader import ProgramRepository, RulesetError, load_ruleset, parse_ruleset
from .types import (
    MedicalLimitRequirement,
    MedicalLimitResult,
    PhraseResult,
    Program,
    Requirement,
    Requirements,
    Verdict,
)

__all__ = [
    "InvalidDocumentError",
    "PatternError",
    "evaluate",
    "evaluate_program",
    "ProgramRepository",
    "RulesetError",
    "load_ruleset",
    "parse_ruleset",
    "MedicalLimitRequirement",
    "MedicalLimitResult",
    "PhraseResult",
    "Program",
    "Requirement",
    "Requirements",
    "Verdict",
]
