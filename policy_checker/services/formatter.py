"""
Display helpers turning a `Verdict` into renderable check items.

Prohibited phrases are inverted here: a prohibited phrase that was found is
a failed item.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from policy_checker.rules.types import Verdict

PASS_HEADLINE = "✓ Policy Meets Requirements"
FAIL_HEADLINE = "✗ Policy Does Not Meet Requirements"

PASS_ANNOUNCEMENT = "Check complete. Policy meets all requirements."
FAIL_ANNOUNCEMENT = (
    "Check complete. Policy does not meet all requirements. "
    "Please review the items marked in red."
)


@dataclass(slots=True)
class CheckItem:
    """One rendered row: label, pass polarity, status text and tooltip."""

    label: str
    passed: bool
    status: str
    tooltip: str
    error: str | None = None

    @property
    def icon(self) -> str:
        return "✓" if self.passed else "✗"


@dataclass(slots=True)
class CheckSection:
    title: str
    items: List[CheckItem]


@dataclass(slots=True)
class VerdictDisplay:
    """Everything a page needs to show a verdict."""

    overall_pass: bool
    headline: str
    announcement: str
    program_name: str
    official_url: str
    sections: List[CheckSection]


def build_display(verdict: Verdict) -> VerdictDisplay:
    """Lay out a verdict as headed sections of check items."""

    required = CheckSection(
        title="Required Phrases",
        items=[
            CheckItem(
                label=result.label,
                passed=result.found,
                status="Found" if result.found else "Missing",
                tooltip=result.explanation,
                error=result.error,
            )
            for result in verdict.required_phrase_results
        ],
    )

    medical = verdict.medical_limit_result
    medical_section = CheckSection(
        title="Minimum Medical Coverage",
        items=[
            CheckItem(
                label=f"Minimum {medical.required_display}",
                passed=medical.found,
                status="Verified" if medical.found else "Not Found",
                tooltip=medical.explanation,
                error=medical.error,
            )
        ],
    )

    sections = [required, medical_section]

    # Section is omitted entirely when the program prohibits nothing.
    if verdict.prohibited_phrase_results:
        sections.append(
            CheckSection(
                title="Prohibited Phrases (must NOT appear)",
                items=[
                    CheckItem(
                        label=result.label,
                        passed=not result.found,
                        status="Found (Issue)" if result.found else "Not Found (Good)",
                        tooltip=result.explanation,
                        error=result.error,
                    )
                    for result in verdict.prohibited_phrase_results
                ],
            )
        )

    overall = verdict.overall_pass
    return VerdictDisplay(
        overall_pass=overall,
        headline=PASS_HEADLINE if overall else FAIL_HEADLINE,
        announcement=PASS_ANNOUNCEMENT if overall else FAIL_ANNOUNCEMENT,
        program_name=verdict.program_name,
        official_url=verdict.official_url,
        sections=sections,
    )


__all__ = ["CheckItem", "CheckSection", "VerdictDisplay", "build_display"]
