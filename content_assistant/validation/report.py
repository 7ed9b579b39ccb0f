"""Grading and human-readable report formatting for validation results."""

from content_assistant.config import ARTICLE_MAX_CHARS, ARTICLE_MIN_CHARS, HASHTAGS_MAX, HASHTAGS_MIN


def compute_grade(issues: list, warnings: list) -> str:
    """Compute a grade from issues and warnings.

    A+ = no issues, no warnings
    A  = no issues, some warnings
    A- = 1 issue
    B+ = 2 issues
    B  = 3 issues
    C  = 4-5 issues
    D  = 6+ issues
    """
    if len(issues) == 0 and len(warnings) == 0:
        return "A+"
    if len(issues) == 0:
        return "A"
    if len(issues) <= 1:
        return "A-"
    if len(issues) <= 2:
        return "B+"
    if len(issues) <= 3:
        return "B"
    if len(issues) <= 5:
        return "C"
    return "D"


def _status(ok: bool) -> str:
    return "PASS" if ok else "FAIL"


def format_validation_report(article_results: dict, title: str, post_results: dict | None = None) -> str:
    """Format article (and optionally social post) results as a CLI report."""
    cc = article_results["char_count"]
    hc = article_results["heading_count"]
    st = article_results["structure"]
    cov = article_results.get("outline_coverage", {})

    lines = [
        f"{'='*60}",
        f"VALIDATION REPORT: {title}",
        f"{'='*60}",
        f"Grade: {article_results['grade']}",
        "",
        f"  [{_status(cc['pass'])}] Characters:       {cc['count']}  (target: {ARTICLE_MIN_CHARS}-{ARTICLE_MAX_CHARS})",
        f"  [{_status(hc['pass'])}] Section headings: {hc['count']}  (need: 3+)",
        f"  [{_status(st['has_closing_section'])}] Closing section",
    ]

    if cov and cov.get("total", 0) > 0:
        lines.append(
            f"  [{_status(cov['coverage_pct'] >= 80)}] Outline coverage: {cov['found']}/{cov['total']} = {cov['coverage_pct']:.0f}%"
        )
        if cov.get("missing"):
            lines.append(f"    Missing: {', '.join(cov['missing'][:10])}")

    if post_results is not None:
        tags = post_results["hashtags"]
        xl = post_results["x_length"]
        lines.append(f"  [{_status(tags['pass'])}] Hashtags:         {tags['count']}  (target: {HASHTAGS_MIN}-{HASHTAGS_MAX})")
        lines.append(f"  [{_status(xl['pass'])}] X post length:    {xl['count']}")

    issues = list(article_results["issues"]) + list((post_results or {}).get("issues", []))
    warnings = list(article_results.get("warnings", [])) + list((post_results or {}).get("warnings", []))

    if issues:
        lines.append(f"\nISSUES ({len(issues)}):")
        for issue in issues:
            lines.append(f"  - {issue}")

    if warnings:
        lines.append(f"\nWARNINGS ({len(warnings)}):")
        for warning in warnings:
            lines.append(f"  ~ {warning}")

    if not issues and not warnings:
        lines.append("\nAll checks passed!")

    lines.append(f"{'='*60}")
    return "\n".join(lines)
