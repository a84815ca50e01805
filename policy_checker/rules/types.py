"""
Dataclasses describing programs, requirements and evaluation verdicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

MATCH_PATTERN = "pattern"
MATCH_SUBSTRING = "substring"
MATCH_KINDS = (MATCH_PATTERN, MATCH_SUBSTRING)


@dataclass(frozen=True, slots=True)
class Requirement:
    """Single checkable phrase with its matching rule and rationale."""

    phrase: str
    pattern: str
    explanation: str = ""
    match: str = MATCH_PATTERN  # "pattern" (regex) or "substring"


@dataclass(frozen=True, slots=True)
class MedicalLimitRequirement(Requirement):
    """Minimum medical coverage threshold, detected by pattern presence."""

    currency: str = ""
    amount: float = 0

    @property
    def display(self) -> str:
        return f"{self.currency} {format_amount(self.amount)}".strip()


@dataclass(frozen=True, slots=True)
class Requirements:
    """Rule aggregate owned by a Program."""

    min_medical_limit: MedicalLimitRequirement
    required_phrases: Tuple[Requirement, ...] = ()
    prohibited_phrases: Tuple[Requirement, ...] = ()


@dataclass(frozen=True, slots=True)
class Program:
    """Named regulatory profile, e.g. a country's visa insurance rules."""

    id: str
    name: str
    country: str
    official_url: str
    requirements: Requirements

    @property
    def label(self) -> str:
        return f"{self.name} ({self.country})"


@dataclass(frozen=True, slots=True)
class PhraseResult:
    """Outcome for one required or prohibited phrase."""

    label: str
    found: bool
    explanation: str
    error: Optional[str] = None  # set when the pattern could not be compiled


@dataclass(frozen=True, slots=True)
class MedicalLimitResult:
    """Outcome for the minimum medical limit check."""

    required_display: str
    found: bool
    explanation: str
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Verdict:
    """Complete, ordered outcome of one evaluation."""

    program_name: str
    official_url: str
    medical_limit_result: MedicalLimitResult
    required_phrase_results: Tuple[PhraseResult, ...] = field(default_factory=tuple)
    prohibited_phrase_results: Tuple[PhraseResult, ...] = field(default_factory=tuple)

    @property
    def overall_pass(self) -> bool:
        return (
            all(result.found for result in self.required_phrase_results)
            and self.medical_limit_result.found
            and not any(result.found for result in self.prohibited_phrase_results)
        )

    @property
    def errors(self) -> Tuple[str, ...]:
        results = (
            *self.required_phrase_results,
            self.medical_limit_result,
            *self.prohibited_phrase_results,
        )
        return tuple(result.error for result in results if result.error)


def format_amount(amount: float) -> str:
    """Render an amount with thousands separators, dropping trailing fraction zeros."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.3f}".rstrip("0").rstrip(".")


__all__ = [
    "MATCH_KINDS",
    "MATCH_PATTERN",
    "MATCH_SUBSTRING",
    "Requirement",
    "MedicalLimitRequirement",
    "Requirements",
    "Program",
    "PhraseResult",
    "MedicalLimitResult",
    "Verdict",
    "format_amount",
]
