"""
HTML report rendering for a checked policy.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from jinja2 import Template

from policy_checker.services.formatter import VerdictDisplay

REPORT_TEMPLATE = Template(
    r"""
<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Insurance Wording Check — {{ display.program_name }}</title>
  <style>
    body { font-family: ui-sans-serif,system-ui,-apple-system,Segoe UI,Roboto; margin:24px; line-height:1.45; }
    h1 { margin-bottom: 0.5rem; }
    h2 { margin-top: 2rem; border-bottom: 1px solid #e5e7eb; padding-bottom: 0.25rem; }
    .meta { color: #475569; font-size: 12px; }
    .overall { padding: 16px; border-radius: 12px; }
    .overall.pass { background: #dcfce7; border: 1px solid #86efac; }
    .overall.fail { background: #fee2e2; border: 1px solid #fca5a5; }
    table { border-collapse: collapse; width: 100%; margin-top: 12px; font-size: 13px; }
    th, td { border: 1px solid #e2e8f0; padding: 6px 8px; text-align: left; vertical-align: top; }
    th { background: #f1f5f9; font-weight: 600; color: #1f2937; }
    .status-pass { color: #15803d; font-weight: 600; }
    .status-fail { color: #b91c1c; font-weight: 600; }
    .error { color: #b45309; font-size: 12px; }
  </style>
</head>
<body>
  <h1>Insurance Wording Check</h1>
  <p class="meta">Generated {{ generated_at }}</p>
  <div class="overall {{ 'pass' if display.overall_pass else 'fail' }}">
    <h2>{{ display.headline }}</h2>
    <p>Program: {{ display.program_name }}
      {% if display.official_url %}<a href="{{ display.official_url }}" target="_blank" rel="noopener">Official Requirements</a>{% endif %}
    </p>
  </div>

  {% for section in display.sections %}
    <h2>{{ section.title }}</h2>
    <table>
      <thead>
        <tr><th></th><th>Check</th><th>Status</th><th>Why it matters</th></tr>
      </thead>
      <tbody>
        {% for item in section.items %}
          {% set css = 'status-pass' if item.passed else 'status-fail' %}
          <tr>
            <td class="{{ css }}">{{ item.icon }}</td>
            <td>{{ item.label }}</td>
            <td class="{{ css }}">{{ item.status }}
              {% if item.error %}<div class="error">{{ item.error }}</div>{% endif %}
            </td>
            <td>{{ item.tooltip }}</td>
          </tr>
        {% endfor %}
      </tbody>
    </table>
  {% endfor %}
</body>
</html>
""",
    autoescape=True,
)


def render_report(display: VerdictDisplay, *, generated_at: Optional[datetime] = None) -> str:
    """Render a verdict display as a standalone HTML page."""
    stamp = (generated_at or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M UTC")
    return REPORT_TEMPLATE.render(display=display, generated_at=stamp)


def write_report(display: VerdictDisplay, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(display), encoding="utf-8")
    return path


__all__ = ["REPORT_TEMPLATE", "render_report", "write_report"]
