"""
FastAPI application exposing the insurance wording checker.

The service lists the configured programs, runs quota-gated checks and
renders HTML reports. All matching happens in the pure evaluator; this
module only maps requests and service errors onto HTTP.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

load_dotenv()

logger = logging.getLogger("policy_checker.ui.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=logging.INFO)

from policy_checker import get_version
from policy_checker.config.settings import Settings
from policy_checker.rules.loader import load_ruleset
from policy_checker.services.checker import (
    CheckRejected,
    PolicyCheckService,
    QuotaExhausted,
)
from policy_checker.services.quota import QuotaService
from policy_checker.storage.quota import JsonQuotaStore

from .schema import serialize_display, serialize_program, serialize_verdict


class CheckRequest(BaseModel):
    program_id: Optional[str] = None
    text: str = ""


class QuotaResponse(BaseModel):
    remaining: int
    limit: int


def _rejection_status(exc: CheckRejected) -> int:
    return 402 if isinstance(exc, QuotaExhausted) else 400


def build_service(settings: Settings) -> PolicyCheckService:
    """Load the ruleset and wire the quota store from settings."""

    repository = load_ruleset(settings.requirements_source)
    quota = QuotaService(JsonQuotaStore(settings.quota_path), limit=settings.free_checks)
    return PolicyCheckService(repository=repository, quota=quota)


def create_app(
    service: PolicyCheckService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build a FastAPI app exposing programs, checks, quota and export.

    Args:
        service: Optional pre-configured service (useful for tests).
        settings: Optional settings; read from the environment otherwise.

    Returns:
        FastAPI instance with routes registered.
    """

    settings = settings or Settings.from_env()
    service_instance = service or build_service(settings)

    app = FastAPI(title="Insurance Wording Checker API", version=get_version())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_service() -> PolicyCheckService:
        return service_instance

    @app.get("/")
    def root() -> dict:
        """Health endpoint for quick status checks."""

        return {"status": "ok"}

    @app.get("/programs")
    def list_programs(service_dep: PolicyCheckService = Depends(get_service)) -> List[dict]:
        return service_dep.repository.options()

    @app.get("/programs/{program_id}")
    def get_program(program_id: str, service_dep: PolicyCheckService = Depends(get_service)) -> dict:
        program = service_dep.repository.get(program_id)
        if program is None:
            raise HTTPException(status_code=404, detail=f"Unknown program '{program_id}'")
        return serialize_program(program)

    @app.get("/quota", response_model=QuotaResponse)
    def get_quota(service_dep: PolicyCheckService = Depends(get_service)) -> QuotaResponse:
        return QuotaResponse(remaining=service_dep.quota.remaining(), limit=service_dep.quota.limit)

    @app.post("/check", status_code=201)
    def check_policy(
        payload: CheckRequest,
        service_dep: PolicyCheckService = Depends(get_service),
    ) -> Dict[str, Any]:
        """
        Evaluate policy text against the selected program.

        Spends one free check; responds 402 once the allowance is used up.
        """

        try:
            outcome = service_dep.check(payload.program_id, payload.text)
        except CheckRejected as exc:
            logger.info(
                "Check rejected",
                extra={"program_id": payload.program_id, "reason": type(exc).__name__},
            )
            raise HTTPException(status_code=_rejection_status(exc), detail=str(exc)) from exc

        return {
            "status": "ok",
            "verdict": serialize_verdict(outcome.verdict),
            "display": serialize_display(outcome.display),
            "quota": {"remaining": outcome.remaining, "show_paywall": outcome.show_paywall},
        }

    @app.post("/export", response_class=HTMLResponse)
    def export_report(
        payload: CheckRequest,
        service_dep: PolicyCheckService = Depends(get_service),
    ) -> HTMLResponse:
        """Return the HTML report for a policy without spending a check."""

        try:
            html = service_dep.export(payload.program_id, payload.text)
        except CheckRejected as exc:
            raise HTTPException(status_code=_rejection_status(exc), detail=str(exc)) from exc
        return HTMLResponse(content=html)

    return app


app = create_app()


__all__ = ["create_app", "build_service", "app"]
