"""
HTML and SVG rendering for Zone01 Profile Dashboard.

PURPOSE: Turn view models into markup. No data access, no HTTP.

PAGES:
- render_login_page: Login form with optional error
- render_profile_page: Summary cards, audit bars, XP chart, skills, logout

FRAGMENTS:
- render_audit_chart: Two horizontal SVG bars (done / received)
- render_xp_chart: Cumulative XP line chart (SVG)

All user-controlled text is HTML-escaped.
"""

from __future__ import annotations

from collections.abc import Sequence
from html import escape
from typing import TYPE_CHECKING

from ..config import Config

if TYPE_CHECKING:
    from ..models import ChartPoint, Skill
    from ..presenters import AuditViewModel, LoginViewModel, ProfileViewModel

__all__ = [
    "render_login_page",
    "render_profile_page",
    "render_audit_chart",
    "render_xp_chart",
    "render_skills_list",
]

# =============================================================================
# CSS Styles
# =============================================================================

_DASHBOARD_CSS = """
:root {
    --bg: #0f172a;
    --surface: #1e293b;
    --border: #334155;
    --text: #f1f5f9;
    --text-muted: #94a3b8;
    --primary: #3b82f6;
    --success: #22c55e;
    --warning: #f59e0b;
    --danger: #ef4444;
}
* { box-sizing: border-box; margin: 0; padding: 0; }
body {
    font-family: system-ui, -apple-system, sans-serif;
    background: var(--bg);
    color: var(--text);
    line-height: 1.6;
    padding: 1rem;
}
.container { max-width: 1100px; margin: 0 auto; }
header {
    display: flex;
    justify-content: space-between;
    align-items: center;
    margin-bottom: 1.5rem;
    padding-bottom: 1rem;
    border-bottom: 1px solid var(--border);
}
h1 { font-size: 1.5rem; font-weight: 600; }
.login-box {
    max-width: 360px;
    margin: 10vh auto;
    background: var(--surface);
    border: 1px solid var(--border);
    border-radius: 0.5rem;
    padding: 1.5rem;
    display: flex;
    flex-direction: column;
    gap: 0.75rem;
}
.login-box input {
    padding: 0.6rem;
    border-radius: 0.25rem;
    border: 1px solid var(--border);
    background: var(--bg);
    color: var(--text);
}
button {
    padding: 0.6rem 1rem;
    border: none;
    border-radius: 0.25rem;
    background: var(--primary);
    color: white;
    cursor: pointer;
}
.logout-btn { background: var(--danger); }
.error {
    color: var(--danger);
    border: 1px solid var(--danger);
    border-radius: 0.25rem;
    padding: 0.5rem;
}
.stats-grid {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(240px, 1fr));
    gap: 1rem;
    margin-bottom: 1.5rem;
}
.stat-card, .panel {
    background: var(--surface);
    border: 1px solid var(--border);
    border-radius: 0.5rem;
    padding: 1rem;
}
.stat-card h3, .panel h2 {
    font-size: 1rem;
    font-weight: 500;
    color: var(--text-muted);
    margin-bottom: 0.75rem;
}
.stat-value { font-size: 2rem; font-weight: 700; }
.panel { margin-bottom: 1rem; }
.audit-label, .audit-value, .month-label, .value-label {
    fill: var(--text-muted);
    font-size: 14px;
}
.month-label { text-anchor: middle; font-size: 12px; }
.value-label { text-anchor: middle; font-size: 11px; fill: var(--text); }
.audit-bar { fill: var(--success); }
.audit-bar.received { fill: var(--warning); }
.line-path { fill: none; stroke: var(--primary); stroke-width: 2; }
.data-point { fill: var(--primary); }
.no-data { color: var(--text-muted); text-align: center; padding: 2rem; }
.skills { list-style: none; display: flex; flex-wrap: wrap; gap: 0.5rem; }
.skills li {
    background: var(--border);
    border-radius: 9999px;
    padding: 0.25rem 0.75rem;
    font-size: 0.875rem;
}
footer {
    margin-top: 2rem;
    padding-top: 1rem;
    border-top: 1px solid var(--border);
    color: var(--text-muted);
    font-size: 0.875rem;
    text-align: center;
}
"""


def _render_document(title: str, body: str) -> str:
    """Wrap a body fragment in the shared HTML document shell."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>
        {_DASHBOARD_CSS}
    </style>
</head>
<body>
    <div class="container" id="app">
        {body}
    </div>
</body>
</html>"""


# =============================================================================
# Login View
# =============================================================================


def render_login_page(view: LoginViewModel) -> str:
    """
    Render the login form page.

    Args:
        view: LoginViewModel with an optional error message and the
            username to pre-fill.

    Returns:
        Complete HTML document posting username/password to /login.

    Example:
        >>> html = render_login_page(LoginViewModel(error="Invalid credentials"))
        >>> 'class="error"' in html
        True
    """
    error_html = f'<div class="error">{escape(view.error)}</div>' if view.error else ""
    body = f"""<form class="login-box" method="post" action="/login">
            <h2>Zone01 Login</h2>
            {error_html}
            <input type="text" id="username" name="username" placeholder="Login"
                   value="{escape(view.username)}" required>
            <input type="password" id="password" name="password" placeholder="Password" required>
            <button type="submit">Log in</button>
        </form>"""
    return _render_document("Zone01 Login", body)


# =============================================================================
# Profile View
# =============================================================================


def render_audit_chart(audit: AuditViewModel) -> str:
    """
    Render the audit ratio bar pair as inline SVG.

    Bar widths are proportional to each side's share of all audit points;
    each bar is followed by its compact value ('1.2K', '3.4M').

    Args:
        audit: AuditViewModel with up/down points.

    Returns:
        SVG element string.
    """
    return f"""<svg width="100%" height="120" viewBox="0 0 600 120" class="audit-svg-chart">
            <g transform="translate(100, 20)">
                <text x="-90" y="25" class="audit-label">Done</text>
                <rect width="{audit.up_width:.2f}" height="40" class="audit-bar" />
                <text x="{audit.up_width + 10:.2f}" y="25" class="audit-value">{audit.up_label}</text>
            </g>
            <g transform="translate(100, 70)">
                <text x="-90" y="25" class="audit-label">Received</text>
                <rect width="{audit.down_width:.2f}" height="40" class="audit-bar received" />
                <text x="{audit.down_width + 10:.2f}" y="25" class="audit-value">{audit.down_label}</text>
            </g>
        </svg>"""


def render_xp_chart(points: Sequence[ChartPoint]) -> str:
    """
    Render the cumulative XP line chart as inline SVG.

    Draws one path through all points, a circle per month, the month
    label below the plot and the cumulative value above each point.

    Args:
        points: Output of statistics.chart_points, chronological.

    Returns:
        SVG element string, or a "No data available" block when there
        are no points.
    """
    if not points:
        return '<div class="no-data">No data available</div>'

    width = Config.XP_CHART_WIDTH
    height = Config.XP_CHART_HEIGHT
    label_y = height - Config.XP_CHART_MARGIN_BOTTOM + 20

    path_data = " ".join(
        f"{'M' if i == 0 else 'L'} {p.x:.2f} {p.y:.2f}" for i, p in enumerate(points)
    )
    circles = "".join(
        f'<circle cx="{p.x:.2f}" cy="{p.y:.2f}" r="4" class="data-point" />' for p in points
    )
    month_labels = "".join(
        f'<text x="{p.x:.2f}" y="{label_y}" class="month-label">{escape(p.label)}</text>'
        for p in points
    )
    value_labels = "".join(
        f'<text x="{p.x:.2f}" y="{p.y - 10:.2f}" class="value-label">{p.value} XP</text>'
        for p in points
    )

    return f"""<svg width="100%" viewBox="0 0 {width} {height}" class="xp-svg-chart">
            <path d="{path_data}" class="line-path" />
            {circles}
            {value_labels}
            {month_labels}
        </svg>"""


def render_skills_list(skills: Sequence[Skill]) -> str:
    """Render completed skills as a list of badges."""
    if not skills:
        return '<div class="no-data">No skills completed yet</div>'
    items = "".join(
        f"<li>{escape(s.name)} <span>{s.grade:g}</span></li>" for s in skills
    )
    return f'<ul class="skills">{items}</ul>'


def render_profile_page(profile: ProfileViewModel) -> str:
    """
    Render the complete profile page.

    Business context: This is the page a signed-in student lands on:
    identity and level, total XP, audit ratio with the done/received
    split, XP progress over time and completed skills.

    Args:
        profile: ProfileViewModel from ProfilePresenter.load().

    Returns:
        Complete HTML document including a logout form posting to /logout.

    Example:
        >>> html = render_profile_page(profile)
        >>> 'Monthly Progress' in html
        True
    """
    summary = profile.summary
    body = f"""<div class="profile">
            <header>
                <h1>{escape(summary.login)}</h1>
                <form method="post" action="/logout">
                    <button type="submit" class="logout-btn">Logout</button>
                </form>
            </header>

            <div class="stats-grid">
                <div class="stat-card">
                    <h3>Profile</h3>
                    <h4>{escape(summary.display_name)}</h4>
                    <h4>Level: {summary.level}</h4>
                </div>
                <div class="stat-card">
                    <h3>Total XP</h3>
                    <p class="stat-value">{summary.total_xp}</p>
                </div>
                <div class="stat-card">
                    <h3>Audit Ratio</h3>
                    <p class="stat-value">{escape(summary.audit_ratio)}</p>
                    <p>Done {profile.audit.done_display} &bull;
                       Received {profile.audit.received_display}</p>
                </div>
            </div>

            <div class="panel">
                <h2>Audit Ratio</h2>
                {render_audit_chart(profile.audit)}
            </div>

            <div class="panel">
                <h2>Monthly Progress</h2>
                <div class="xp-chart-container">
                    {render_xp_chart(profile.points)}
                </div>
                <a href="/charts/xp.png">Download PNG</a>
            </div>

            <div class="panel">
                <h2>Skills</h2>
                {render_skills_list(profile.skills)}
            </div>

            <footer>Zone01 Profile &bull; Powered by FastAPI</footer>
        </div>"""
    return _render_document(f"{summary.login} - Zone01 Profile", body)
