"""Build the per-stage prompts sent to Claude.

Every builder embeds its inputs verbatim; nothing is escaped or validated here.
"""

from __future__ import annotations

from typing import Optional

from content_assistant.config import (
    ACTION_PLAN_ITEMS,
    ARTICLE_MAX_CHARS,
    ARTICLE_MIN_CHARS,
    COMPETITOR_ARTICLE_COUNT,
    HASHTAGS_MAX,
    HASHTAGS_MIN,
    KEYWORD_COUNT,
    TOP_KEYWORDS_IN_REPORT,
)
from content_assistant.models import ArticleDraft, CompetitorArticle


# ── System prompts ────────────────────────────────────────────────────────

JSON_SYSTEM_PROMPT = """You produce machine-readable output. Respond with a single JSON value that matches the schema given in the request. No explanations, no Markdown, no code fences."""

WRITER_SYSTEM_PROMPT = """You are an experienced SEO content writer and editor. You write clear, well-structured Markdown articles for a general business audience."""


# ── Preparation ───────────────────────────────────────────────────────────


def build_keyword_prompt(user_url: str, competitor_urls: list[str]) -> str:
    competitor_lines = "\n".join(f"- {url}" for url in competitor_urls)
    return f"""You are an outstanding SEO keyword strategist.
Analyze the user's site and the competitor sites below and simulate a keyword strategy.

# SITES
- User site: {user_url}
- Competitor sites:
{competitor_lines}

# TASK
1. From the content and structure of these sites, identify {KEYWORD_COUNT} high-potential keywords the user site should target.
2. For each keyword estimate:
   - **searchVolume**: search volume ("High", "Medium" or "Low")
   - **difficulty**: competition / difficulty ("High", "Medium" or "Low")
   - **currentRank**: the user site's estimated current position (a number, or "Not ranked")
   - **recommendation**: why the keyword is recommended and its strategic role ("Primary target", "Niche opportunity", ...)
3. **summary**: a short summary of the overall keyword strategy and recommendations.

# OUTPUT
Return JSON only, with English keys."""


def build_competitor_prompt(topic: str) -> str:
    return f"""Identify the {COMPETITOR_ARTICLE_COUNT} competitor articles currently ranking highest in Google search for the topic "{topic}".
For each article provide the title, the URL, and a short summary of its content."""


def build_composite_prompt(topic: str, articles: list[CompetitorArticle]) -> str:
    summaries = "\n\n".join(
        f"Title: {a.title}\nURL: {a.url}\nSummary: {a.summary}" for a in articles
    )
    return f"""Analyze the competitor articles below and plan one comprehensive SEO article that covers everything they cover and adds an original perspective that gives readers more value.

Main topic: {topic}

Competitor articles:
{summaries}

Produce an article draft as JSON containing an SEO-strong title, an engaging introduction, and a detailed section-by-section outline (headings and key points)."""


# ── Creation ──────────────────────────────────────────────────────────────


def _render_outline(draft: ArticleDraft) -> str:
    blocks = []
    for section in draft.outline.sections:
        points = "\n".join(f"- {p}" for p in section.points)
        blocks.append(f"### {section.heading}\n{points}")
    return "\n\n".join(blocks)


def build_article_prompt(draft: ArticleDraft) -> str:
    return f"""# TASK: WRITE THE ARTICLE
Write a high-quality, readable SEO article based on the draft below.
It must include an introduction, a body, and a conclusion / summary section.

# ARTICLE DRAFT
## Title
{draft.outline.title}
## Introduction
{draft.introduction}
## Outline
{_render_outline(draft)}

# INSTRUCTIONS
- Follow the PREP method (Point, Reason, Example, Point) so the structure is logical and easy to follow.
- **Keep it readable: use short sentences and bullet points where they help. Avoid jargon and explain things in plain language.**
- Write professionally and make every paragraph worth the reader's time.
- Use Markdown with appropriate headings and lists.
- **Aim for roughly {ARTICLE_MIN_CHARS}-{ARTICLE_MAX_CHARS} characters in total. Stay focused and avoid padding, but always finish the article.**"""


def build_social_prompt(article: str) -> str:
    return f"""You are an outstanding social media marketer. Analyze the whole article below and write engaging posts that raise reader engagement and drive clicks to the article.

# PLATFORMS
- X (formerly Twitter): a light, understated teaser.
- Facebook: a little more detail than X; lean on storytelling that readers relate to.
- LinkedIn: a professional angle that hints at lessons useful for the reader's career or business.

# COMMON INSTRUCTIONS
- Adapt tone and length to each platform.
- Convey the core value of the article.
- End on a note that makes readers want to read on.
- Suggest {HASHTAGS_MIN}-{HASHTAGS_MAX} highly relevant hashtags.

# ARTICLE
{article}

# OUTPUT
Return JSON only, with English keys."""


def build_revision_prompt(article: str, instruction: str) -> str:
    return f"""You are a professional editor. Revise the article below exactly as instructed.
**Whatever the instruction, the result must be a complete, finished article.**

# ORIGINAL ARTICLE
{article}

# REVISION INSTRUCTION
{instruction}

# TASK
1. Read the revision instruction carefully and apply it to the article.
2. Keep the tone and logical structure of the original.
3. Output **only the complete revised article**, formatted as Markdown. Never output a diff, a partial excerpt, an introduction, or excuses."""


# ── Analysis (simulation) ─────────────────────────────────────────────────


def build_performance_prompt(article_url: str, social_url: Optional[str] = None) -> str:
    return f"""You are a professional SEO consultant and data analyst.
Based on the article URL (and optionally a social post URL), realistically SIMULATE the article's performance during its first month after publication.
You have NO internet access. Infer the topic and target audience from the URL path and structure, and produce a plausible, realistic-looking analysis report. This is a simulation, not a measurement.

# TARGET
- Article URL: {article_url}
- Social post URL: {social_url or "not provided"}

# SIMULATION TASK
Produce data for a complete performance dashboard:

1. **keyMetrics**: predicted KPIs.
   - monthlyPV: monthly page views (e.g. "10,500")
   - users: unique users (e.g. "8,200")
   - cvr: conversion rate (e.g. "1.5%")
   - bounceRate: bounce rate (e.g. "45%")
2. **trafficSources**: share of each acquisition channel. The percentages must add up to 100.
   - source: "Organic Search", "Social", "Referral", "Direct", ...
   - percentage: number
3. **keywordPerformance**: the top {TOP_KEYWORDS_IN_REPORT} keywords expected to bring traffic, each with estimated monthly page views.
   - keyword: search keyword
   - estimatedPV: number
4. **summary**: an overall summary of the simulated results (strengths, weaknesses, opportunities).
5. **actionPlan**: {ACTION_PLAN_ITEMS} concrete, high-priority actions to improve performance **three months from now**.

# OUTPUT
Return the whole analysis STRICTLY as a single JSON object. Output nothing else."""
