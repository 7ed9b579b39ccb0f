"""Individual quality checks and the validate_* entry points."""

import re
from typing import Optional

from content_assistant.config import (
    ARTICLE_MAX_CHARS,
    ARTICLE_MIN_CHARS,
    HASHTAGS_MAX,
    HASHTAGS_MIN,
    X_POST_MAX_CHARS,
)
from content_assistant.models import ArticleDraft, PerformanceAnalysis, SocialMediaPosts
from content_assistant.validation.report import compute_grade

CLOSING_HEADINGS = ("conclusion", "summary", "wrap", "final thoughts", "key takeaways", "takeaways")


# ── Main validation entry points ─────────────────────────────────────────


def validate_article(article: str, draft: Optional[ArticleDraft] = None) -> dict:
    """Run all checks on a generated article.

    Returns a dict with per-check results, issues, warnings, grade, and
    overall pass/fail.
    """
    headings = [s.heading for s in draft.outline.sections] if draft else []
    results = {
        "char_count": check_char_count(article),
        "heading_count": check_heading_count(article),
        "structure": check_structure(article),
        "outline_coverage": check_outline_coverage(article, headings),
    }

    issues, warnings = _collect_article_issues(results)
    return _finish(results, issues, warnings)


def validate_social_posts(posts: SocialMediaPosts) -> dict:
    results = {
        "hashtags": check_hashtags(posts.hashtags),
        "x_length": {"count": len(posts.x), "pass": len(posts.x) <= X_POST_MAX_CHARS},
        "empty_posts": [
            name for name, text in (("x", posts.x), ("facebook", posts.facebook), ("linkedin", posts.linkedin))
            if not text.strip()
        ],
    }

    issues, warnings = [], []
    tags = results["hashtags"]
    if not tags["pass"]:
        warnings.append(f"{tags['count']} hashtags (target {HASHTAGS_MIN}-{HASHTAGS_MAX})")
    if tags["duplicates"]:
        warnings.append(f"Duplicate hashtags: {', '.join(tags['duplicates'])}")
    if not results["x_length"]["pass"]:
        issues.append(f"X post is {results['x_length']['count']} characters (max {X_POST_MAX_CHARS})")
    for name in results["empty_posts"]:
        issues.append(f"Empty {name} post")

    return _finish(results, issues, warnings)


def validate_performance(analysis: PerformanceAnalysis) -> dict:
    """Sanity-check a simulated report; the generator only promises a 100% split."""
    total = sum(s.percentage for s in analysis.traffic_sources)
    results = {
        "traffic_total": {"total": round(total, 1), "pass": abs(total - 100) <= 1},
        "action_items": {"count": len(analysis.action_plan)},
        "keywords": {"count": len(analysis.keyword_performance)},
    }

    issues, warnings = [], []
    if not results["traffic_total"]["pass"]:
        warnings.append(f"Traffic sources add up to {results['traffic_total']['total']}% (expected 100%)")
    if not analysis.action_plan:
        issues.append("Report has no action plan")

    return _finish(results, issues, warnings)


def _finish(results: dict, issues: list[str], warnings: list[str]) -> dict:
    results["issues"] = issues
    results["warnings"] = warnings
    results["pass"] = len(issues) == 0
    results["grade"] = compute_grade(issues, warnings)
    return results


# ── Issue aggregation ─────────────────────────────────────────────────────


def _collect_article_issues(results: dict) -> tuple[list[str], list[str]]:
    issues = []
    warnings = []

    cc = results["char_count"]
    if cc["count"] < ARTICLE_MIN_CHARS * 0.8:
        issues.append(f"Too short: {cc['count']} characters (target {ARTICLE_MIN_CHARS}-{ARTICLE_MAX_CHARS})")
    elif cc["count"] < ARTICLE_MIN_CHARS:
        warnings.append(f"Slightly short: {cc['count']} characters (target {ARTICLE_MIN_CHARS}+)")
    if cc["count"] > ARTICLE_MAX_CHARS * 1.2:
        issues.append(f"Too long: {cc['count']} characters (target {ARTICLE_MAX_CHARS} max)")
    elif cc["count"] > ARTICLE_MAX_CHARS:
        warnings.append(f"Slightly long: {cc['count']} characters (target {ARTICLE_MAX_CHARS} max)")

    if not results["heading_count"]["pass"]:
        issues.append(f"Too few section headings: {results['heading_count']['count']} (need 3+)")

    structure = results["structure"]
    if not structure["starts_with_paragraph"]:
        warnings.append("Article does not open with an introductory paragraph")
    if not structure["has_closing_section"]:
        issues.append("Article has no conclusion / summary section")
    if structure["ends_mid_sentence"]:
        warnings.append("Article may be truncated (last line does not end a sentence)")

    cov = results["outline_coverage"]
    if cov["total"] > 0 and cov["coverage_pct"] < 50:
        issues.append(f"Low outline coverage: {cov['coverage_pct']:.0f}% ({cov['found']}/{cov['total']})")
    elif cov["total"] > 0 and cov["coverage_pct"] < 80:
        warnings.append(f"Outline coverage could be better: {cov['coverage_pct']:.0f}% ({cov['found']}/{cov['total']})")

    return issues, warnings


# ── Individual check functions ────────────────────────────────────────────


def prose_text(article: str) -> str:
    """Visible prose only: Markdown markers, link URLs and images stripped."""
    text = article
    text = re.sub(r"!\[[^\]]*\]\([^)]+\)", "", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"^#{1,6}\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"\*{1,3}", "", text)
    text = re.sub(r"^\s*[-*+]\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"^\s*\d+\.\s+", "", text, flags=re.MULTILINE)
    text = re.sub(r"^\s*>\s*", "", text, flags=re.MULTILINE)
    text = re.sub(r"`", "", text)
    return text


def check_char_count(article: str) -> dict:
    """Non-whitespace prose characters (the length target is in characters)."""
    count = len(re.sub(r"\s+", "", prose_text(article)))
    return {"count": count, "pass": ARTICLE_MIN_CHARS <= count <= ARTICLE_MAX_CHARS}


def check_heading_count(article: str) -> dict:
    headings = re.findall(r"^#{2,3} .+", article, re.MULTILINE)
    return {"count": len(headings), "headings": headings, "pass": len(headings) >= 3}


def check_structure(article: str) -> dict:
    headings = re.findall(r"^#{1,4}\s+(.+)", article, re.MULTILINE)
    has_closing = any(
        any(word in h.lower() for word in CLOSING_HEADINGS) for h in headings
    )
    last_line = ""
    for line in reversed(article.strip().split("\n")):
        if line.strip():
            last_line = line.strip()
            break
    ends_mid_sentence = bool(last_line) and not last_line.startswith(("#", "-", "*", "|")) and not re.search(
        r"[.!?。！？)\]\"'*]$", last_line
    )
    first_line = next((line.strip() for line in article.split("\n") if line.strip()), "")
    return {
        "starts_with_paragraph": bool(first_line) and not first_line.startswith(("#", "-", "*", "|", ">")),
        "has_closing_section": has_closing,
        "ends_mid_sentence": ends_mid_sentence,
    }


def check_hashtags(hashtags: list[str]) -> dict:
    normalized = [h.strip().lstrip("#").lower() for h in hashtags]
    duplicates = sorted({h for h in normalized if normalized.count(h) > 1})
    return {
        "count": len(hashtags),
        "duplicates": duplicates,
        "pass": HASHTAGS_MIN <= len(hashtags) <= HASHTAGS_MAX,
    }


def check_outline_coverage(article: str, headings_required: list[str]) -> dict:
    """Check how many draft headings made it into the article.

    Two tiers: substring containment, then 60%+ overlap of significant words.
    """
    if not headings_required:
        return {"total": 0, "found": 0, "coverage_pct": 100.0, "missing": []}

    article_headers = re.findall(r"^#{1,4}\s+(.+)", article, re.MULTILINE)
    article_headers_lower = [h.strip().lower() for h in article_headers]

    stop_words = {
        "a", "an", "the", "to", "for", "of", "in", "on", "with",
        "and", "or", "is", "are", "do", "does", "how", "what",
        "when", "where", "why", "i", "you", "your", "my", "it",
        "can", "should", "must", "that", "this", "from",
    }

    def _significant_words(text: str) -> set:
        return set(re.findall(r"\w+", text.lower())) - stop_words

    found = []
    missing = []
    for req in headings_required:
        req_lower = req.strip().lower()

        if any(req_lower in ah or ah in req_lower for ah in article_headers_lower):
            found.append(req)
            continue

        req_words = _significant_words(req_lower)
        if req_words and any(
            len(req_words & _significant_words(ah)) / len(req_words) >= 0.6
            for ah in article_headers_lower
        ):
            found.append(req)
            continue

        missing.append(req)

    coverage = len(found) / len(headings_required) * 100
    return {
        "total": len(headings_required),
        "found": len(found),
        "coverage_pct": round(coverage, 1),
        "missing": missing,
    }
