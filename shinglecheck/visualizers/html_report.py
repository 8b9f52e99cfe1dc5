from __future__ import annotations
import html
import logging
from datetime import datetime
from pathlib import Path
from typing import List

import plotly.graph_objects as go

from ..analyzers.base import CheckReport
from ..checker import PAIR_THRESHOLDS

logger = logging.getLogger(__name__)

_METRIC_COLORS = {
    "Jaccard": "#2E86AB",
    "Cosine": "#A23B72",
    "Combined": "#F18F01",
}


def generate_html_report(report: CheckReport, output_dir: Path) -> Path:
    """Generate an interactive HTML report of one plagiarism check using Plotly."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / "report.html"

    figures_html = []
    score_chart = _create_score_chart(report)
    if score_chart is not None:
        figures_html.append(score_chart.to_html(full_html=False, include_plotlyjs=False))

    report_path.write_text(_wrap_html(figures_html, report), encoding="utf-8")
    logger.info(f"Generated HTML report: {report_path}")

    return report_path


def _create_score_chart(report: CheckReport):
    """Grouped bar chart of Jaccard, Cosine and Combined per reference."""
    if not report.comparisons:
        return None

    names = [Path(c.reference).name for c in report.comparisons]
    series = {
        "Jaccard": [c.jaccard_percent for c in report.comparisons],
        "Cosine": [c.cosine_percent for c in report.comparisons],
        "Combined": [c.combined_percent for c in report.comparisons],
    }

    fig = go.Figure(
        [
            go.Bar(name=metric, x=names, y=values, marker_color=_METRIC_COLORS[metric])
            for metric, values in series.items()
        ]
    )

    for lower, band in PAIR_THRESHOLDS:
        fig.add_hline(
            y=lower * 100,
            line_dash="dot",
            line_color="#999",
            annotation_text=band.value,
            annotation_position="top left",
        )

    fig.update_layout(
        title=f"Similarity of {Path(report.target).name} (k={report.k})",
        barmode="group",
        xaxis_title="Reference document",
        yaxis_title="Similarity (%)",
        yaxis_range=[0, 100],
        height=450,
    )

    return fig


def _result_rows(report: CheckReport) -> str:
    rows = []
    for c in report.comparisons:
        rows.append(
            "<tr>"
            f"<td>{html.escape(c.reference)}</td>"
            f"<td>{c.jaccard_percent:.2f}%</td>"
            f"<td>{c.cosine_percent:.2f}%</td>"
            f"<td>{c.combined_percent:.2f}%</td>"
            f"<td>{c.band.value}</td>"
            "</tr>"
        )
    return "\n".join(rows)


def _wrap_html(figures_html: List[str], report: CheckReport) -> str:
    """Wrap figure HTML in a complete HTML document."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    figures_section = "\n".join(
        f'<div class="figure-container">{fig}</div>' for fig in figures_html
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>ShingleCheck Plagiarism Report</title>
    <script src="https://cdn.plot.ly/plotly-2.27.0.min.js"></script>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
        }}
        h1 {{
            color: #2E86AB;
            border-bottom: 2px solid #2E86AB;
            padding-bottom: 10px;
        }}
        .summary, .figure-container {{
            background: white;
            padding: 20px;
            border-radius: 8px;
            margin-bottom: 20px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }}
        .summary-grid {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 15px;
        }}
        .stat-card {{
            background: #f8f9fa;
            padding: 15px;
            border-radius: 6px;
            text-align: center;
        }}
        .stat-value {{
            font-size: 2em;
            font-weight: bold;
            color: #2E86AB;
        }}
        .stat-label, .timestamp {{
            color: #666;
            font-size: 0.9em;
        }}
        table {{ border-collapse: collapse; width: 100%; }}
        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
        th {{ background: #2E86AB; color: white; }}
    </style>
</head>
<body>
    <h1>ShingleCheck Plagiarism Report</h1>
    <p class="timestamp">Generated: {timestamp}</p>

    <div class="summary">
        <h2>Target: {html.escape(report.target)}</h2>
        <div class="summary-grid">
            <div class="stat-card">
                <div class="stat-value">{report.reference_count}</div>
                <div class="stat-label">Reference Documents</div>
            </div>
            <div class="stat-card">
                <div class="stat-value">{report.k}</div>
                <div class="stat-label">K-value</div>
            </div>
            <div class="stat-card">
                <div class="stat-value">{report.overall_percent:.2f}%</div>
                <div class="stat-label">Overall Similarity</div>
            </div>
            <div class="stat-card">
                <div class="stat-value">{report.overall_band.value}</div>
                <div class="stat-label">Verdict</div>
            </div>
        </div>
        <p>{html.escape(report.verdict)}</p>
    </div>

    <div class="summary">
        <h2>Individual Comparisons</h2>
        <table>
            <tr><th>Reference</th><th>Jaccard</th><th>Cosine</th><th>Combined</th><th>Status</th></tr>
            {_result_rows(report)}
        </table>
    </div>

    {figures_section}
</body>
</html>"""
