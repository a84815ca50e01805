from datetime import datetime, timezone

from policy_checker.rules.types import MedicalLimitResult, PhraseResult, Verdict
from policy_checker.services.formatter import build_display
from policy_checker.services.report import render_report, write_report


def make_display():
    verdict = Verdict(
        program_name="Sample <Visa>",
        official_url="https://example.org/visa",
        required_phrase_results=(PhraseResult("Trip Cancellation", True, "Needed."),),
        medical_limit_result=MedicalLimitResult("USD 50,000", False, "Floor.", error="Invalid pattern"),
    )
    return build_display(verdict)


def test_render_report_contains_items_and_escapes_text():
    html = render_report(make_display(), generated_at=datetime(2025, 1, 1, tzinfo=timezone.utc))

    assert "Policy Does Not Meet Requirements" in html
    assert "Trip Cancellation" in html
    assert "Minimum USD 50,000" in html
    assert "Invalid pattern" in html
    assert "2025-01-01 00:00 UTC" in html
    assert "Sample &lt;Visa&gt;" in html
    assert "Sample <Visa>" not in html


def test_write_report_creates_parent_dirs(tmp_path):
    path = write_report(make_display(), tmp_path / "out" / "report.html")
    assert path.exists()
    assert "Official Requirements" in path.read_text(encoding="utf-8")
