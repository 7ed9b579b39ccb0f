"""One function per workflow stage: build prompt, call Claude, normalize.

Structured stages return a validated record or None. Free-text stages return
the text or None when the reply is empty. Errors raised by the SDK propagate.
"""

from __future__ import annotations

import logging
from typing import Optional

from content_assistant.config import ARTICLE_MAX_TOKENS
from content_assistant.models import (
    ArticleDraft,
    CompetitorArticle,
    KeywordAnalysisResponse,
    PerformanceAnalysis,
    SocialMediaPosts,
)
from content_assistant.pipeline.client import CompletionClient
from content_assistant.pipeline.normalizer import normalize, normalize_list
from content_assistant.pipeline.prompts import (
    build_article_prompt,
    build_competitor_prompt,
    build_composite_prompt,
    build_keyword_prompt,
    build_performance_prompt,
    build_revision_prompt,
    build_social_prompt,
)
from content_assistant.pipeline.schemas import (
    ARTICLE_DRAFT_SCHEMA,
    COMPETITOR_ARTICLES_SCHEMA,
    KEYWORD_ANALYSIS_SCHEMA,
    PERFORMANCE_ANALYSIS_SCHEMA,
    SOCIAL_POSTS_SCHEMA,
)

logger = logging.getLogger(__name__)


def _text_or_none(text: str) -> Optional[str]:
    return text if text and text.strip() else None


def analyze_keywords(
    client: CompletionClient,
    user_url: str,
    competitor_urls: list[str],
) -> Optional[KeywordAnalysisResponse]:
    prompt = build_keyword_prompt(user_url, competitor_urls)
    raw = client.complete(prompt, schema=KEYWORD_ANALYSIS_SCHEMA)
    return normalize(raw, KeywordAnalysisResponse)


def find_top_competitor_articles(
    client: CompletionClient,
    topic: str,
) -> Optional[list[CompetitorArticle]]:
    raw = client.complete(build_competitor_prompt(topic), schema=COMPETITOR_ARTICLES_SCHEMA)
    return normalize_list(raw, CompetitorArticle)


def create_composite_article(
    client: CompletionClient,
    topic: str,
    articles: list[CompetitorArticle],
) -> Optional[ArticleDraft]:
    prompt = build_composite_prompt(topic, articles)
    raw = client.complete(prompt, schema=ARTICLE_DRAFT_SCHEMA)
    return normalize(raw, ArticleDraft)


def generate_full_article(client: CompletionClient, draft: ArticleDraft) -> Optional[str]:
    """Write the full Markdown article from a draft (free text, no schema)."""
    raw = client.complete(build_article_prompt(draft), max_tokens=ARTICLE_MAX_TOKENS)
    article = _text_or_none(raw)
    if article is None:
        logger.warning("Article generation returned no text for %r", draft.outline.title)
    return article


def generate_social_media_posts(client: CompletionClient, article: str) -> Optional[SocialMediaPosts]:
    raw = client.complete(build_social_prompt(article), schema=SOCIAL_POSTS_SCHEMA)
    return normalize(raw, SocialMediaPosts)


def revise_full_article(client: CompletionClient, article: str, instruction: str) -> Optional[str]:
    """Return a complete replacement article, never a patch."""
    raw = client.complete(build_revision_prompt(article, instruction), max_tokens=ARTICLE_MAX_TOKENS)
    return _text_or_none(raw)


def analyze_performance_data(
    client: CompletionClient,
    article_url: str,
    social_url: Optional[str] = None,
) -> Optional[PerformanceAnalysis]:
    """Simulate a first-month performance report for a published article.

    Claude has no access to the live page: the numbers are a plausible
    simulation inferred from the URL, not a measurement.
    """
    prompt = build_performance_prompt(article_url, social_url)
    raw = client.complete(prompt, schema=PERFORMANCE_ANALYSIS_SCHEMA)
    return normalize(raw, PerformanceAnalysis)
