#!/usr/bin/env python3
"""
Command-line wording check.

Evaluates a policy document against one program from a ruleset and prints
the per-requirement results. Exit code is 0 when the policy passes, 1 when
it fails and 2 on input or ruleset errors.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

from policy_checker.config.settings import Settings
from policy_checker.rules import InvalidDocumentError, RulesetError, evaluate_program, load_ruleset
from policy_checker.services.formatter import build_display
from policy_checker.services.report import write_report
from policy_checker.ui.schema import serialize_verdict


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Check insurance policy wording against a program")
    parser.add_argument("document", type=Path, nargs="?", help="Policy text file ('-' reads stdin)")
    parser.add_argument("--program", help="Program id to check against")
    parser.add_argument(
        "--requirements",
        default=settings.requirements_source,
        help="Ruleset JSON path or URL (default: bundled sample or POLICY_CHECKER_REQUIREMENTS)",
    )
    parser.add_argument("--list-programs", action="store_true", help="List program ids and exit")
    parser.add_argument("--json", action="store_true", help="Print the verdict as JSON")
    parser.add_argument("--html-out", type=Path, default=None, help="Also write an HTML report")
    return parser.parse_args(argv)


def print_step(message: str) -> None:
    print(f"[check] {message}")


def _read_document(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def run_check(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        repository = load_ruleset(args.requirements)
    except RulesetError as exc:
        print_step(f"ERROR: {exc}")
        return 2

    if args.list_programs:
        for option in repository.options():
            print(f"{option['id']}\t{option['label']}")
        return 0

    if args.document is None:
        print_step("ERROR: a document path is required")
        return 2

    program = repository.get(args.program)
    if program is None:
        known = ", ".join(p.id for p in repository)
        print_step(f"ERROR: unknown program '{args.program}' (known: {known})")
        return 2

    try:
        text = _read_document(args.document)
    except (OSError, UnicodeDecodeError) as exc:
        print_step(f"ERROR: failed to read document: {exc}")
        return 2

    try:
        verdict = evaluate_program(text.strip(), program)
    except InvalidDocumentError as exc:
        print_step(f"ERROR: {exc}")
        return 2

    display = build_display(verdict)

    if args.json:
        print(json.dumps(serialize_verdict(verdict), ensure_ascii=False, indent=2))
    else:
        print(display.headline)
        print(f"Program: {display.program_name} <{display.official_url}>")
        for section in display.sections:
            print(f"\n{section.title}")
            for item in section.items:
                print(f"  {item.icon} {item.label}: {item.status}")
                if item.error:
                    print(f"      ! {item.error}")

    if args.html_out:
        write_report(display, args.html_out)
        if not args.json:
            print_step(f"Report written to {args.html_out}")

    return 0 if verdict.overall_pass else 1


if __name__ == "__main__":
    sys.exit(run_check())
