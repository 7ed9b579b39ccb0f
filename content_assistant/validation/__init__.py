"""Quality checks, grading, and reporting for generated content."""

from content_assistant.validation.checks import validate_article, validate_performance, validate_social_posts
from content_assistant.validation.report import format_validation_report

__all__ = ["validate_article", "validate_social_posts", "validate_performance", "format_validation_report"]
