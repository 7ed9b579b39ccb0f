"""CSV export of a (simulated) performance report."""

from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from content_assistant.models import PerformanceAnalysis

SECTIONS = ["Summary", "Key Metrics", "Traffic Sources", "Keyword Performance", "Action Plan"]


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def performance_report_csv(analysis: PerformanceAnalysis) -> str:
    """Render the report as CSV: five labeled sections separated by blank lines.

    Fields containing commas, quotes or newlines are quoted; embedded quotes
    are doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    metrics = analysis.key_metrics

    writer.writerow(["Summary"])
    writer.writerow([analysis.summary])
    writer.writerow([])

    writer.writerow(["Key Metrics"])
    writer.writerow(["Metric", "Value"])
    writer.writerow(["Monthly PV", metrics.monthly_pv])
    writer.writerow(["Users", metrics.users])
    writer.writerow(["Conversion Rate", metrics.cvr])
    writer.writerow(["Bounce Rate", metrics.bounce_rate])
    writer.writerow([])

    writer.writerow(["Traffic Sources"])
    writer.writerow(["Source", "Percentage"])
    for source in analysis.traffic_sources:
        writer.writerow([source.source, f"{_number(source.percentage)}%"])
    writer.writerow([])

    writer.writerow(["Keyword Performance"])
    writer.writerow(["Keyword", "Estimated PV"])
    for kw in analysis.keyword_performance:
        writer.writerow([kw.keyword, _number(kw.estimated_pv)])
    writer.writerow([])

    writer.writerow(["Action Plan"])
    writer.writerow(["Action", "Justification"])
    for item in analysis.action_plan:
        writer.writerow([item.action, item.justification])

    return buf.getvalue()


def report_filename(article_url: Optional[str]) -> str:
    """'https://www.example.com/post' -> 'performance_report_example.com.csv'."""
    if article_url:
        domain = urlparse(article_url).hostname or ""
        domain = re.sub(r"^www\.", "", domain)
        if domain:
            safe = re.sub(r"[^a-z0-9.-]", "_", domain, flags=re.IGNORECASE)
            return f"performance_report_{safe}.csv"
    return "performance_report.csv"


def save_performance_report(
    analysis: PerformanceAnalysis,
    output_dir: Path,
    article_url: Optional[str] = None,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_filename(article_url)
    path.write_text(performance_report_csv(analysis), encoding="utf-8")
    return path
