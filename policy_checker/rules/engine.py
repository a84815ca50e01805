"""
Pattern-based policy evaluator.

Checks a policy document against a `Requirements` aggregate and returns a
`Verdict`. Evaluation is pure: no logging, no I/O, no state between calls.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from policy_checker.rules.types import (
    MATCH_KINDS,
    MATCH_SUBSTRING,
    MedicalLimitResult,
    PhraseResult,
    Program,
    Requirement,
    Requirements,
    Verdict,
)


class InvalidDocumentError(ValueError):
    """Raised when the document text is empty or whitespace only."""


class PatternError(ValueError):
    """A requirement's pattern cannot be compiled."""

    def __init__(self, requirement: Requirement, reason: str):
        super().__init__(f"Invalid pattern for '{requirement.phrase}': {reason}")
        self.requirement = requirement
        self.reason = reason


def compile_requirement(requirement: Requirement) -> re.Pattern[str]:
    """Compile a requirement's matching rule into a case-insensitive regex."""
    if requirement.match not in MATCH_KINDS:
        raise PatternError(requirement, f"unknown match kind '{requirement.match}'")
    if requirement.match == MATCH_SUBSTRING:
        return re.compile(re.escape(requirement.pattern), re.IGNORECASE)
    try:
        return re.compile(requirement.pattern, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as exc:
        raise PatternError(requirement, str(exc)) from exc


def match_requirement(text: str, requirement: Requirement) -> Tuple[bool, Optional[str]]:
    """
    Return (found, error) for a single requirement.

    A malformed pattern fails closed: found is False and error holds the reason.
    """
    try:
        pattern = compile_requirement(requirement)
    except PatternError as exc:
        return False, str(exc)
    return pattern.search(text) is not None, None


def _phrase_results(text: str, requirements: Iterable[Requirement]) -> Tuple[PhraseResult, ...]:
    results = []
    for requirement in requirements:
        found, error = match_requirement(text, requirement)
        results.append(
            PhraseResult(
                label=requirement.phrase,
                found=found,
                explanation=requirement.explanation,
                error=error,
            )
        )
    return tuple(results)


def evaluate(
    document_text: str,
    requirements: Requirements,
    *,
    program_name: str = "",
    official_url: str = "",
) -> Verdict:
    """
    Evaluate document text against every requirement.

    Args:
        document_text: Raw policy wording; must contain non-whitespace text.
        requirements: Rule aggregate; never mutated.
        program_name: Copied through to the verdict for display.
        official_url: Copied through to the verdict for display.

    Returns:
        Verdict with one result per requirement, in input order.

    Raises:
        InvalidDocumentError: if `document_text` is empty.
    """

    if not document_text or not document_text.strip():
        raise InvalidDocumentError("Document text must not be empty.")

    medical = requirements.min_medical_limit
    medical_found, medical_error = match_requirement(document_text, medical)

    return Verdict(
        program_name=program_name,
        official_url=official_url,
        required_phrase_results=_phrase_results(document_text, requirements.required_phrases),
        medical_limit_result=MedicalLimitResult(
            required_display=medical.display,
            found=medical_found,
            explanation=medical.explanation,
            error=medical_error,
        ),
        prohibited_phrase_results=_phrase_results(document_text, requirements.prohibited_phrases),
    )


def evaluate_program(document_text: str, program: Program) -> Verdict:
    """Evaluate against a program, carrying its name and URL into the verdict."""
    return evaluate(
        document_text,
        program.requirements,
        program_name=program.name,
        official_url=program.official_url,
    )


__all__ = [
    "InvalidDocumentError",
    "PatternError",
    "compile_requirement",
    "match_requirement",
    "evaluate",
    "evaluate_program",
]
