from __future__ import annotations

from typing import Any

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment


DEFAULT_REPORT_TEMPLATE = """
== {{ tab_label }} ==
{% if athlete_stats %}
Recent runs: {{ athlete_stats.recent_run_totals.count }} | {{ athlete_stats.recent_run_totals.distance }} | {{ athlete_stats.recent_run_totals.moving_time }}
All-time runs: {{ athlete_stats.all_run_totals.count }} | {{ athlete_stats.all_run_totals.distance }} | {{ athlete_stats.all_run_totals.moving_time }}
{% endif %}
{% if sections.run_highlights %}
Longest run: {{ best_efforts.run.longest.value }} ({{ best_efforts.run.longest.name }})
Fastest pace: {{ best_efforts.run.fastest_pace.value }} ({{ best_efforts.run.fastest_pace.name }})
{% endif %}
{% if sections.ride_highlights %}
Longest ride: {{ best_efforts.ride.longest.value }} ({{ best_efforts.ride.longest.name }})
Top speed: {{ best_efforts.ride.top_speed.value }} {{ units.speed }} ({{ best_efforts.ride.top_speed.name }})
{% endif %}
{% if sections.leaderboards %}
{% for board in leaderboards %}

{{ board.title }}
{% for entry in board.entries %}
  {{ entry.rank }}. {{ entry.name }} - {{ entry.average_speed }} {{ units.speed }} avg, {{ entry.max_speed }} {{ units.speed }} max, {{ entry.distance }}, {{ entry.moving_time }}
{% else %}
  {{ board.empty_message }}
{% endfor %}
{% endfor %}
{% endif %}

History
{% for activity in activities %}
  {{ activity.date }}  {{ activity.type_label }}  {{ activity.name }}  {{ activity.distance }}  {{ activity.moving_time }}
{% else %}
  {{ empty_message }}
{% endfor %}
"""


class ReportRenderError(RuntimeError):
    pass


def _template_environment() -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


def _normalize_template_text(template_text: str) -> str:
    return template_text.replace("\r\n", "\n").strip("\n")


def render_dashboard_text(payload: dict[str, Any], template_text: str | None = None) -> str:
    env = _template_environment()
    source = _normalize_template_text(template_text or DEFAULT_REPORT_TEMPLATE)
    try:
        rendered = env.from_string(source).render(payload)
    except TemplateError as exc:
        raise ReportRenderError(f"Dashboard report failed to render: {exc}") from exc
    return rendered.strip("\n") + "\n"
