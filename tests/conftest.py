"""Shared pytest fixtures: canned model replies and a fake completion client."""

import json

import pytest

from content_assistant.models import (
    ArticleDraft,
    CompetitorArticle,
    KeywordAnalysisResponse,
    PerformanceAnalysis,
    SocialMediaPosts,
)


class FakeClient:
    """Stands in for CompletionClient: replays canned replies in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def complete(self, prompt, schema=None, max_tokens=None):
        self.calls.append({"prompt": prompt, "schema": schema, "max_tokens": max_tokens})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def keyword_data():
    return {
        "keywordAnalysis": [
            {
                "keyword": kw,
                "searchVolume": "High",
                "difficulty": "Medium",
                "currentRank": "Not ranked" if i % 2 else str(10 + i),
                "recommendation": "Primary target",
            }
            for i, kw in enumerate([
                "best running shoes", "running shoes for beginners", "trail running shoes",
                "marathon shoes", "running shoe sizing", "cushioned running shoes",
                "running shoes flat feet", "cheap running shoes", "running shoe reviews",
                "how to choose running shoes",
            ])
        ],
        "summary": "Focus on beginner-intent queries first.",
    }


@pytest.fixture
def competitor_data():
    return [
        {"title": f"Top running shoes #{i}", "url": f"https://site{i}.com/shoes", "summary": f"Review roundup {i}."}
        for i in range(1, 6)
    ]


@pytest.fixture
def draft_data():
    return {
        "outline": {
            "title": "The Best Running Shoes of the Year",
            "sections": [
                {"heading": "How to Choose Running Shoes", "points": ["Fit", "Cushioning"]},
                {"heading": "Top Picks for Beginners", "points": ["Comfort first"]},
                {"heading": "Summary", "points": ["Recap the picks"]},
            ],
        },
        "introduction": "Choosing shoes is hard. This guide helps.",
    }


@pytest.fixture
def posts_data():
    return {
        "x": "New guide: the best running shoes this year.",
        "facebook": "We tested dozens of shoes so you don't have to...",
        "linkedin": "What running shoes teach us about product fit.",
        "hashtags": ["#running", "#shoes", "#fitness", "#marathon", "#gear"],
    }


@pytest.fixture
def performance_data():
    return {
        "summary": 'Strong organic start; "quick wins" remain, e.g. internal links.',
        "keyMetrics": {"monthlyPV": "10,500", "users": "8,200", "cvr": "1.5%", "bounceRate": "45%"},
        "trafficSources": [
            {"source": "Organic Search", "percentage": 60},
            {"source": "Social", "percentage": 25},
            {"source": "Direct", "percentage": 15},
        ],
        "keywordPerformance": [
            {"keyword": "best running shoes", "estimatedPV": 4200},
            {"keyword": 'shoes "2026"', "estimatedPV": 900},
        ],
        "actionPlan": [
            {"action": "Add comparison table", "justification": "Improves dwell time, and CTR"},
            {"action": "Refresh title", "justification": "Match intent"},
            {"action": "Build links", "justification": "Authority"},
        ],
    }


@pytest.fixture
def article_text():
    return """Finding the right pair of running shoes changes how every run feels.

## How to Choose Running Shoes

Fit comes first. Cushioning comes second.

## Top Picks for Beginners

- Comfortable
- Affordable

## Summary

Pick the shoe that fits your foot and your goals.
"""


@pytest.fixture
def keywords(keyword_data):
    return KeywordAnalysisResponse.model_validate(keyword_data)


@pytest.fixture
def competitors(competitor_data):
    return [CompetitorArticle.model_validate(a) for a in competitor_data]


@pytest.fixture
def draft(draft_data):
    return ArticleDraft.model_validate(draft_data)


@pytest.fixture
def posts(posts_data):
    return SocialMediaPosts.model_validate(posts_data)


@pytest.fixture
def performance(performance_data):
    return PerformanceAnalysis.model_validate(performance_data)


@pytest.fixture
def as_json():
    return lambda data: json.dumps(data, ensure_ascii=False)
