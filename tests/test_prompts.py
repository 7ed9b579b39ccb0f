"""Tests for content_assistant/pipeline/prompts.py -- inputs embedded verbatim."""

from content_assistant.pipeline.prompts import (
    build_article_prompt,
    build_competitor_prompt,
    build_composite_prompt,
    build_keyword_prompt,
    build_performance_prompt,
    build_revision_prompt,
    build_social_prompt,
)


def test_keyword_prompt_lists_urls():
    prompt = build_keyword_prompt("https://a.com", ["https://b.com", "https://c.com"])
    assert "User site: https://a.com" in prompt
    assert "- https://b.com\n- https://c.com" in prompt
    assert "10 high-potential keywords" in prompt


def test_keyword_prompt_without_competitors():
    prompt = build_keyword_prompt("https://a.com", [])
    assert "https://a.com" in prompt


def test_competitor_prompt_embeds_topic():
    prompt = build_competitor_prompt('shoes "for kids"')
    assert 'shoes "for kids"' in prompt
    assert "5 competitor articles" in prompt


def test_composite_prompt_has_every_article(competitors):
    prompt = build_composite_prompt("best running shoes", competitors)
    for a in competitors:
        assert f"Title: {a.title}\nURL: {a.url}\nSummary: {a.summary}" in prompt
    assert "Main topic: best running shoes" in prompt


def test_article_prompt_renders_outline(draft):
    prompt = build_article_prompt(draft)
    assert draft.outline.title in prompt
    assert draft.introduction in prompt
    assert "### How to Choose Running Shoes\n- Fit\n- Cushioning" in prompt
    assert "3000-5000 characters" in prompt


def test_social_prompt_embeds_article(article_text):
    prompt = build_social_prompt(article_text)
    assert article_text in prompt
    assert "5-7" in prompt
    for platform in ("X (formerly Twitter)", "Facebook", "LinkedIn"):
        assert platform in prompt


def test_revision_prompt_asks_for_full_article(article_text):
    prompt = build_revision_prompt(article_text, "Make it shorter")
    assert article_text in prompt
    assert "Make it shorter" in prompt
    assert "complete revised article" in prompt
    assert "diff" in prompt


def test_empty_inputs_pass_through():
    assert "Revise" in build_revision_prompt("", "")
    assert '""' in build_competitor_prompt("")


def test_performance_prompt_is_a_simulation():
    prompt = build_performance_prompt("https://a.com/post")
    assert "SIMULATE" in prompt
    assert "NO internet access" in prompt
    assert "Social post URL: not provided" in prompt


def test_performance_prompt_with_social_url():
    prompt = build_performance_prompt("https://a.com/post", "https://x.com/a/status/1")
    assert "Social post URL: https://x.com/a/status/1" in prompt
