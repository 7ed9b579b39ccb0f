"""Tests for content_assistant/workflow.py -- phases, chaining, failure handling."""

import json
from unittest.mock import MagicMock

import pytest

from conftest import FakeClient
from content_assistant.workflow import (
    ERROR_MESSAGES,
    INPUT_ERRORS,
    LocalBackend,
    Phase,
    Stage,
    Workflow,
)


@pytest.fixture
def backend(keywords, competitors, draft, posts, performance, article_text):
    b = MagicMock()
    b.analyze_keywords.return_value = keywords
    b.find_top_competitor_articles.return_value = competitors
    b.create_composite_article.return_value = draft
    b.generate_full_article.return_value = article_text
    b.generate_social_media_posts.return_value = posts
    b.revise_full_article.return_value = "# Revised\n\nNew text."
    b.analyze_performance_data.return_value = performance
    return b


@pytest.fixture
def workflow(backend):
    return Workflow(backend)


def _to_creation(workflow):
    workflow.select_keyword("best running shoes")
    workflow.find_competitor_articles()
    workflow.create_composite_article()


# ---------------------------------------------------------------------------
# Preparation
# ---------------------------------------------------------------------------

class TestPreparation:

    def test_starts_in_preparation(self, workflow):
        assert workflow.state.phase == Phase.PREPARATION
        assert workflow.phases() == [Phase.PREPARATION, Phase.CREATION, Phase.ANALYSIS]

    def test_full_preparation_scenario(self, workflow, backend):
        result = workflow.analyze_keywords("https://a.com", ["https://b.com", "  "])
        assert len(result.keyword_analysis) == 10
        backend.analyze_keywords.assert_called_once_with("https://a.com", ["https://b.com"])

        workflow.select_keyword("best running shoes")
        articles = workflow.find_competitor_articles()
        assert len(articles) == 5
        backend.find_top_competitor_articles.assert_called_once_with("best running shoes")

        draft = workflow.create_composite_article()
        assert len(draft.outline.sections) >= 1
        assert all(s.points for s in draft.outline.sections)
        backend.create_composite_article.assert_called_once_with("best running shoes", articles)
        assert workflow.state.phase == Phase.CREATION
        assert workflow.state.draft is draft

    def test_blank_user_url_skips_backend(self, workflow, backend):
        assert workflow.analyze_keywords("   ") is None
        assert workflow.state.error == INPUT_ERRORS["user_url"]
        backend.analyze_keywords.assert_not_called()

    def test_blank_topic_skips_backend(self, workflow, backend):
        assert workflow.find_competitor_articles("  ") is None
        assert workflow.state.error == INPUT_ERRORS["topic"]
        backend.find_top_competitor_articles.assert_not_called()

    def test_draft_needs_articles(self, workflow, backend):
        workflow.select_keyword("shoes")
        assert workflow.create_composite_article() is None
        assert workflow.state.error == INPUT_ERRORS["articles"]
        backend.create_composite_article.assert_not_called()

    def test_failed_stage_keeps_previous_result(self, workflow, backend, keywords):
        workflow.analyze_keywords("https://a.com")
        backend.analyze_keywords.return_value = None
        assert workflow.analyze_keywords("https://a.com") is None
        assert workflow.state.keyword_analysis is keywords
        assert workflow.state.error == ERROR_MESSAGES[Stage.KEYWORDS]

    def test_backend_exception_becomes_stage_error(self, workflow, backend):
        backend.find_top_competitor_articles.side_effect = ConnectionError("down")
        assert workflow.find_competitor_articles("shoes") is None
        assert workflow.state.error == ERROR_MESSAGES[Stage.COMPETITORS]
        assert workflow.state.competitor_articles is None
        assert not workflow.is_busy(Stage.COMPETITORS)

    def test_failed_draft_stays_in_preparation(self, workflow, backend):
        backend.create_composite_article.return_value = None
        _to_creation(workflow)
        assert workflow.state.phase == Phase.PREPARATION
        assert workflow.state.draft is None

    def test_retry_clears_error(self, workflow, backend, competitors):
        backend.find_top_competitor_articles.return_value = None
        workflow.find_competitor_articles("shoes")
        assert workflow.state.error
        backend.find_top_competitor_articles.return_value = competitors
        workflow.find_competitor_articles()
        assert workflow.state.error is None


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------

class TestCreation:

    def test_generate_chains_social_posts(self, workflow, backend, article_text, posts):
        _to_creation(workflow)
        outcome = workflow.generate_article()
        assert outcome.ok and not outcome.partial
        assert outcome.article == article_text
        assert outcome.social_posts == posts
        backend.generate_social_media_posts.assert_called_once_with(article_text)
        assert workflow.state.social_posts == posts

    def test_posts_failure_keeps_article(self, workflow, backend, article_text):
        backend.generate_social_media_posts.return_value = None
        _to_creation(workflow)
        outcome = workflow.generate_article()
        assert outcome.partial
        assert workflow.state.article == article_text
        assert workflow.state.social_posts is None
        assert workflow.state.error is None

    def test_posts_exception_keeps_article(self, workflow, backend, article_text):
        backend.generate_social_media_posts.side_effect = ConnectionError("down")
        _to_creation(workflow)
        assert workflow.generate_article().partial
        assert workflow.state.article == article_text

    def test_article_failure_skips_posts(self, workflow, backend):
        backend.generate_full_article.return_value = None
        _to_creation(workflow)
        outcome = workflow.generate_article()
        assert not outcome.ok
        backend.generate_social_media_posts.assert_not_called()
        assert workflow.state.error == ERROR_MESSAGES[Stage.ARTICLE]

    def test_generate_without_draft(self, workflow, backend):
        assert not workflow.generate_article().ok
        assert workflow.state.error == INPUT_ERRORS["draft"]
        backend.generate_full_article.assert_not_called()

    def test_revision_discards_posts(self, workflow, backend):
        _to_creation(workflow)
        workflow.generate_article()
        assert workflow.state.social_posts is not None

        assert workflow.revise_article("Make it shorter") == "# Revised\n\nNew text."
        assert workflow.state.article == "# Revised\n\nNew text."
        assert workflow.state.social_posts is None
        assert backend.generate_social_media_posts.call_count == 1

    def test_failed_revision_still_discards_posts(self, workflow, backend, article_text):
        backend.revise_full_article.return_value = None
        _to_creation(workflow)
        workflow.generate_article()
        assert workflow.revise_article("shorter") is None
        assert workflow.state.article == article_text
        assert workflow.state.social_posts is None
        assert workflow.state.error == ERROR_MESSAGES[Stage.REVISION]

    def test_posts_return_only_via_explicit_generation(self, workflow, backend, posts):
        _to_creation(workflow)
        workflow.generate_article()
        workflow.revise_article("shorter")
        workflow.revise_article("friendlier")
        assert workflow.state.social_posts is None
        assert workflow.generate_social_posts() == posts
        backend.generate_social_media_posts.assert_called_with("# Revised\n\nNew text.")
        assert workflow.state.social_posts == posts

    def test_blank_instruction_never_reaches_backend(self, workflow, backend):
        _to_creation(workflow)
        workflow.generate_article()
        assert not workflow.can_revise("   ")
        assert workflow.revise_article("   ") is None
        backend.revise_full_article.assert_not_called()
        assert workflow.state.social_posts is not None

    def test_cannot_revise_without_article(self, workflow, backend):
        assert not workflow.can_revise("shorter")
        assert workflow.revise_article("shorter") is None
        backend.revise_full_article.assert_not_called()

    def test_new_draft_resets_creation(self, workflow):
        _to_creation(workflow)
        workflow.generate_article()
        workflow.create_composite_article()
        assert workflow.state.article is None
        assert workflow.state.social_posts is None

    def test_no_automatic_transition_after_article(self, workflow):
        _to_creation(workflow)
        workflow.generate_article()
        assert workflow.state.phase == Phase.CREATION

    def test_busy_flag_set_during_call(self, workflow, backend, article_text):
        seen = []
        backend.generate_full_article.side_effect = lambda draft: seen.append(workflow.is_busy(Stage.ARTICLE)) or article_text
        _to_creation(workflow)
        workflow.generate_article()
        assert seen == [True]
        assert not workflow.is_busy()


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

class TestAnalysis:

    def test_independent_of_other_state(self, workflow, backend, performance):
        workflow.navigate(Phase.ANALYSIS)
        assert workflow.analyze_performance("https://a.com/post") == performance
        backend.analyze_performance_data.assert_called_once_with("https://a.com/post", None)

    def test_social_url_passed(self, workflow, backend):
        workflow.analyze_performance("https://a.com/post", "https://x.com/s/1")
        backend.analyze_performance_data.assert_called_once_with("https://a.com/post", "https://x.com/s/1")

    @pytest.mark.parametrize("url", ["", "   ", "a.com/post", "ftp://a.com"])
    def test_invalid_url_rejected(self, workflow, backend, url):
        assert workflow.analyze_performance(url) is None
        assert workflow.state.error == INPUT_ERRORS["article_url"]
        backend.analyze_performance_data.assert_not_called()

    def test_navigate_clears_error(self, workflow):
        workflow.analyze_performance("")
        workflow.navigate(Phase.CREATION)
        assert workflow.state.error is None


# ---------------------------------------------------------------------------
# LocalBackend end to end with a fake Claude
# ---------------------------------------------------------------------------

def test_local_backend_scenario(keyword_data, competitor_data, draft_data, article_text, posts_data):
    client = FakeClient(
        json.dumps(keyword_data),
        json.dumps(competitor_data),
        json.dumps(draft_data),
        article_text,
        json.dumps(posts_data),
    )
    workflow = Workflow(LocalBackend(client))

    assert len(workflow.analyze_keywords("https://a.com", ["https://b.com"]).keyword_analysis) == 10
    workflow.select_keyword("best running shoes")
    assert len(workflow.find_competitor_articles()) == 5
    assert workflow.create_composite_article() is not None
    outcome = workflow.generate_article()
    assert outcome.ok and outcome.social_posts is not None
    assert len(client.calls) == 5
