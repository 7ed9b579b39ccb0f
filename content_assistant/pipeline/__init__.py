"""Stage pipeline: prompts, schemas, Claude client, response normalization."""

from content_assistant.pipeline.client import CompletionClient
from content_assistant.pipeline.stages import (
    analyze_keywords,
    find_top_competitor_articles,
    create_composite_article,
    generate_full_article,
    generate_social_media_posts,
    revise_full_article,
    analyze_performance_data,
)

__all__ = [
    "CompletionClient",
    "analyze_keywords",
    "find_top_competitor_articles",
    "create_composite_article",
    "generate_full_article",
    "generate_social_media_posts",
    "revise_full_article",
    "analyze_performance_data",
]
