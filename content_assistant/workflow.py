"""Three-phase workflow controller: Preparation -> Creation -> Analysis.

The controller owns the in-memory session state and threads each stage's
output into the next stage's input. Backends do the actual work, either
in-process (LocalBackend) or through the HTTP transport (RemoteBackend).

Rules:
- A failed stage sets that stage's error message and leaves earlier results
  as they were.
- Revising the article always discards held social posts; posts only come
  back through an explicit generation call.
- Busy flags are informational. The controller does not refuse a second call
  while one is running; callers check ``is_busy`` first.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError

from content_assistant.api_client import AssistantAPI
from content_assistant.models import (
    ArticleDraft,
    ArticleOutcome,
    CompetitorArticle,
    KeywordAnalysisResponse,
    PerformanceAnalysis,
    SocialMediaPosts,
)
from content_assistant.pipeline import stages
from content_assistant.pipeline.client import CompletionClient

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    PREPARATION = "preparation"
    CREATION = "creation"
    ANALYSIS = "analysis"


PHASE_ORDER = [Phase.PREPARATION, Phase.CREATION, Phase.ANALYSIS]


class Stage(str, Enum):
    KEYWORDS = "keywords"
    COMPETITORS = "competitors"
    DRAFT = "draft"
    ARTICLE = "article"
    SOCIAL = "social"
    REVISION = "revision"
    ANALYSIS = "analysis"


# One message per stage, whether the model returned junk or the network failed.
ERROR_MESSAGES = {
    Stage.KEYWORDS: "Keyword analysis failed. Please try again.",
    Stage.COMPETITORS: "Competitor article search failed. Please try again.",
    Stage.DRAFT: "Draft creation failed. Please try again.",
    Stage.ARTICLE: "Article generation failed. Please try again.",
    Stage.SOCIAL: "Social post generation failed. Please try again.",
    Stage.REVISION: "Article revision failed. Please try again.",
    Stage.ANALYSIS: "Performance report generation failed. Please try again.",
}

INPUT_ERRORS = {
    "user_url": "Enter your site URL.",
    "topic": "Select or enter a topic.",
    "articles": "Find competitor articles first.",
    "draft": "Create a draft first.",
    "article": "Generate an article first.",
    "article_url": "Enter a valid article URL.",
}


# ── Backends ──────────────────────────────────────────────────────────────


class LocalBackend:
    """Run stages in-process against Claude."""

    def __init__(self, client: Optional[CompletionClient] = None):
        self.client = client or CompletionClient()

    def analyze_keywords(self, user_url, competitor_urls):
        return stages.analyze_keywords(self.client, user_url, competitor_urls)

    def find_top_competitor_articles(self, topic):
        return stages.find_top_competitor_articles(self.client, topic)

    def create_composite_article(self, topic, articles):
        return stages.create_composite_article(self.client, topic, articles)

    def generate_full_article(self, draft):
        return stages.generate_full_article(self.client, draft)

    def generate_social_media_posts(self, article):
        return stages.generate_social_media_posts(self.client, article)

    def revise_full_article(self, article, instruction):
        return stages.revise_full_article(self.client, article, instruction)

    def analyze_performance_data(self, article_url, social_url=None):
        return stages.analyze_performance_data(self.client, article_url, social_url)


def _validated(model, data: Any):
    if data is None:
        return None
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("Server returned an unexpected %s: %s", model.__name__, e)
        return None


class RemoteBackend:
    """Run stages through the HTTP transport; results are re-validated."""

    def __init__(self, api: Optional[AssistantAPI] = None):
        self.api = api or AssistantAPI()

    def login(self, password: str) -> bool:
        return self.api.verify_password(password)

    def analyze_keywords(self, user_url, competitor_urls):
        data = self.api.call("analyzeKeywords", {"userUrl": user_url, "competitorUrls": competitor_urls})
        return _validated(KeywordAnalysisResponse, data)

    def find_top_competitor_articles(self, topic):
        data = self.api.call("findTopCompetitorArticles", {"topic": topic})
        if not isinstance(data, list):
            return None
        articles = [_validated(CompetitorArticle, item) for item in data]
        return None if any(a is None for a in articles) else articles

    def create_composite_article(self, topic, articles):
        data = self.api.call(
            "createCompositeArticle",
            {"topic": topic, "articles": [a.to_wire() for a in articles]},
        )
        return _validated(ArticleDraft, data)

    def generate_full_article(self, draft):
        data = self.api.call("generateFullArticle", {"draft": draft.to_wire()})
        return data if isinstance(data, str) and data else None

    def generate_social_media_posts(self, article):
        data = self.api.call("generateSocialMediaPosts", {"article": article})
        return _validated(SocialMediaPosts, data)

    def revise_full_article(self, article, instruction):
        data = self.api.call("reviseFullArticle", {"currentArticle": article, "revisionPrompt": instruction})
        return data if isinstance(data, str) and data else None

    def analyze_performance_data(self, article_url, social_url=None):
        data = self.api.call("analyzePerformanceData", {"articleUrl": article_url, "socialUrl": social_url})
        return _validated(PerformanceAnalysis, data)


# ── State ─────────────────────────────────────────────────────────────────


@dataclass
class WorkflowState:
    phase: Phase = Phase.PREPARATION
    keyword_analysis: Optional[KeywordAnalysisResponse] = None
    topic: str = ""
    competitor_articles: Optional[list[CompetitorArticle]] = None
    draft: Optional[ArticleDraft] = None
    article: Optional[str] = None
    social_posts: Optional[SocialMediaPosts] = None
    performance: Optional[PerformanceAnalysis] = None
    error: Optional[str] = None
    busy: set[Stage] = field(default_factory=set)


class Workflow:
    def __init__(self, backend):
        self.backend = backend
        self.state = WorkflowState()

    # ── Navigation ────────────────────────────────────────────────────────

    @staticmethod
    def phases() -> list[Phase]:
        return list(PHASE_ORDER)

    def navigate(self, phase: Phase) -> None:
        self.state.phase = Phase(phase)
        self.state.error = None

    def is_busy(self, stage: Optional[Stage] = None) -> bool:
        if stage is None:
            return bool(self.state.busy)
        return stage in self.state.busy

    @contextmanager
    def _running(self, stage: Stage):
        self.state.error = None
        self.state.busy.add(stage)
        try:
            yield
        finally:
            self.state.busy.discard(stage)

    def _call(self, stage: Stage, fn, *args):
        """Run one backend call; any failure becomes the stage's error message."""
        try:
            result = fn(*args)
        except Exception:
            logger.exception("Stage %s failed", stage.value)
            result = None
        if result is None:
            self.state.error = ERROR_MESSAGES[stage]
        return result

    def _input_error(self, key: str) -> None:
        self.state.error = INPUT_ERRORS[key]

    # ── Preparation ───────────────────────────────────────────────────────

    def analyze_keywords(self, user_url: str, competitor_urls: Optional[list[str]] = None):
        if not user_url.strip():
            self._input_error("user_url")
            return None
        urls = [u for u in (competitor_urls or []) if u.strip()]
        with self._running(Stage.KEYWORDS):
            result = self._call(Stage.KEYWORDS, self.backend.analyze_keywords, user_url, urls)
        if result is not None:
            self.state.keyword_analysis = result
        return result

    def select_keyword(self, keyword: str) -> None:
        self.state.topic = keyword

    def find_competitor_articles(self, topic: Optional[str] = None):
        if topic is not None:
            self.state.topic = topic
        if not self.state.topic.strip():
            self._input_error("topic")
            return None
        with self._running(Stage.COMPETITORS):
            result = self._call(
                Stage.COMPETITORS, self.backend.find_top_competitor_articles, self.state.topic
            )
        if result is not None:
            self.state.competitor_articles = result
        return result

    def create_composite_article(self):
        if not self.state.topic.strip():
            self._input_error("topic")
            return None
        if not self.state.competitor_articles:
            self._input_error("articles")
            return None
        with self._running(Stage.DRAFT):
            draft = self._call(
                Stage.DRAFT,
                self.backend.create_composite_article,
                self.state.topic,
                self.state.competitor_articles,
            )
        if draft is not None:
            self._start_creation(draft)
        return draft

    def _start_creation(self, draft: ArticleDraft) -> None:
        self.state.draft = draft
        self.state.article = None
        self.state.social_posts = None
        self.state.phase = Phase.CREATION

    # ── Creation ──────────────────────────────────────────────────────────

    def generate_article(self) -> ArticleOutcome:
        """Write the article, then the social posts for it.

        The posts step only runs after a successful article step, and a posts
        failure does not undo the article.
        """
        if self.state.draft is None:
            self._input_error("draft")
            return ArticleOutcome()
        with self._running(Stage.ARTICLE):
            article = self._call(Stage.ARTICLE, self.backend.generate_full_article, self.state.draft)
            if article is None:
                return ArticleOutcome()
            self.state.article = article
            self.state.social_posts = None
            posts = self._generate_posts(article)
        return ArticleOutcome(article=article, social_posts=posts)

    def _generate_posts(self, article: str) -> Optional[SocialMediaPosts]:
        try:
            posts = self.backend.generate_social_media_posts(article)
        except Exception:
            logger.exception("Social post generation raised")
            posts = None
        if posts is None:
            logger.warning("Social posts failed; keeping the generated article")
            return None
        self.state.social_posts = posts
        return posts

    def generate_social_posts(self) -> Optional[SocialMediaPosts]:
        """Regenerate posts for the current article (e.g. after a revision)."""
        if self.state.article is None:
            self._input_error("article")
            return None
        with self._running(Stage.SOCIAL):
            posts = self._call(
                Stage.SOCIAL, self.backend.generate_social_media_posts, self.state.article
            )
        if posts is not None:
            self.state.social_posts = posts
        return posts

    def can_revise(self, instruction: str) -> bool:
        return self.state.article is not None and bool(instruction.strip())

    def revise_article(self, instruction: str) -> Optional[str]:
        if not self.can_revise(instruction):
            return None
        # Held posts describe the old article.
        self.state.social_posts = None
        with self._running(Stage.REVISION):
            revised = self._call(
                Stage.REVISION, self.backend.revise_full_article, self.state.article, instruction
            )
        if revised is not None:
            self.state.article = revised
        return revised

    # ── Analysis ──────────────────────────────────────────────────────────

    def analyze_performance(self, article_url: str, social_url: Optional[str] = None):
        """Produce a simulated performance report; no real traffic data is read."""
        if not article_url.strip() or not article_url.startswith("http"):
            self._input_error("article_url")
            return None
        with self._running(Stage.ANALYSIS):
            result = self._call(
                Stage.ANALYSIS,
                self.backend.analyze_performance_data,
                article_url,
                social_url or None,
            )
        if result is not None:
            self.state.performance = result
        return result
