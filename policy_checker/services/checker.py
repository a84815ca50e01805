"""
Check-wording workflow tying the program repository, quota and evaluator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from policy_checker.rules.engine import evaluate_program
from policy_checker.rules.loader import ProgramRepository
from policy_checker.rules.types import Program, Verdict
from policy_checker.services.formatter import VerdictDisplay, build_display
from policy_checker.services.quota import QuotaService
from policy_checker.services.report import render_report

logger = logging.getLogger("policy_checker.services.checker")


class CheckRejected(Exception):
    """A check request was refused before evaluation."""

    message = "Check rejected."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class ProgramNotSelected(CheckRejected):
    message = "Please select a program first."


class EmptyDocument(CheckRejected):
    message = "Please paste your insurance policy text."


class QuotaExhausted(CheckRejected):
    message = "No free checks remaining. Upgrade to continue checking policies."


@dataclass(slots=True)
class CheckOutcome:
    """Verdict plus the presentation state derived from it."""

    program: Program
    verdict: Verdict
    display: VerdictDisplay
    remaining: int

    @property
    def show_paywall(self) -> bool:
        return self.remaining <= 0


@dataclass(slots=True)
class PolicyCheckService:
    """Facade handling a check request end-to-end."""

    repository: ProgramRepository
    quota: QuotaService

    def resolve(self, program_id: Optional[str], text: Optional[str]) -> tuple[Program, str]:
        program = self.repository.get(program_id)
        if program is None:
            raise ProgramNotSelected()
        policy_text = (text or "").strip()
        if not policy_text:
            raise EmptyDocument()
        return program, policy_text

    def check(self, program_id: Optional[str], text: Optional[str]) -> CheckOutcome:
        """
        Validate input, spend one free check and evaluate the policy.

        Raises:
            ProgramNotSelected: unknown or missing program id.
            EmptyDocument: text is empty after trimming.
            QuotaExhausted: no free checks remain.
        """

        program, policy_text = self.resolve(program_id, text)

        consumed = self.quota.consume()
        if not consumed.allowed:
            raise QuotaExhausted()

        verdict = evaluate_program(policy_text, program)
        logger.info(
            "Policy checked",
            extra={
                "program_id": program.id,
                "overall_pass": verdict.overall_pass,
                "document_chars": len(policy_text),
                "pattern_errors": len(verdict.errors),
                "remaining": consumed.remaining,
            },
        )
        if verdict.errors:
            logger.warning(
                "Ruleset patterns failed to compile",
                extra={"program_id": program.id, "errors": list(verdict.errors)},
            )
        return CheckOutcome(
            program=program,
            verdict=verdict,
            display=build_display(verdict),
            remaining=consumed.remaining,
        )

    def export(self, program_id: Optional[str], text: Optional[str]) -> str:
        """Render an HTML report; refused once the free checks are used up."""

        if self.quota.remaining() <= 0:
            raise QuotaExhausted()
        program, policy_text = self.resolve(program_id, text)
        verdict = evaluate_program(policy_text, program)
        logger.info("Report exported", extra={"program_id": program.id})
        return render_report(build_display(verdict))


__all__ = [
    "CheckOutcome",
    "CheckRejected",
    "EmptyDocument",
    "PolicyCheckService",
    "ProgramNotSelected",
    "QuotaExhausted",
]
