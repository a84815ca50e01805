"""
Command-line entry point for running the wording checker API.

Usage:
    python -m policy_checker.ui.server

Environment variables:
    POLICY_CHECKER_REQUIREMENTS  Ruleset JSON path or URL (defaults to the bundled sample).
    POLICY_CHECKER_QUOTA_PATH    File holding the free-check counter.
    POLICY_CHECKER_API_HOST      Host interface to bind (default: 127.0.0.1).
    POLICY_CHECKER_API_PORT      Port for the service (default: 8000).
    POLICY_CHECKER_API_RELOAD    Set to "1" to enable autoreload (development only).
"""

from __future__ import annotations

import uvicorn
from dotenv import load_dotenv

from policy_checker.config.settings import Settings


def main() -> None:
    """Boot the FastAPI application with configurable host/port."""

    load_dotenv()
    settings = Settings.from_env()

    uvicorn.run(
        "policy_checker.ui.api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        factory=False,
    )


if __name__ == "__main__":
    main()
