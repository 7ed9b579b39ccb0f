"""Records exchanged between the stages.

Field names follow Python conventions; aliases keep the camelCase keys used in
the model's JSON output and on the HTTP transport.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# ── Preparation ──────────────────────────────────────────────────────────


class KeywordAnalysisResult(Record):
    keyword: str
    search_volume: str = Field(alias="searchVolume")
    difficulty: str
    current_rank: str = Field(alias="currentRank")
    recommendation: str


class KeywordAnalysisResponse(Record):
    keyword_analysis: list[KeywordAnalysisResult] = Field(alias="keywordAnalysis")
    summary: str = Field(min_length=1)


class CompetitorArticle(Record):
    title: str
    url: str
    summary: str


class OutlineSection(Record):
    heading: str
    points: list[str] = Field(min_length=1)


class Outline(Record):
    title: str
    sections: list[OutlineSection] = Field(min_length=1)


class ArticleDraft(Record):
    outline: Outline
    introduction: str


# ── Creation ─────────────────────────────────────────────────────────────


class SocialMediaPosts(Record):
    x: str = Field(min_length=1)
    facebook: str = Field(min_length=1)
    linkedin: str = Field(min_length=1)
    hashtags: list[str] = Field(min_length=1)


class ArticleOutcome(BaseModel):
    """Result of the article -> social posts pipeline.

    ``article`` set with ``social_posts`` unset is a partial success: the
    article stands even though the posts step failed.
    """

    article: Optional[str] = None
    social_posts: Optional[SocialMediaPosts] = None

    @property
    def ok(self) -> bool:
        return self.article is not None

    @property
    def partial(self) -> bool:
        return self.article is not None and self.social_posts is None


# ── Analysis (simulated) ─────────────────────────────────────────────────


class KeyMetrics(Record):
    monthly_pv: str = Field(alias="monthlyPV")
    users: str
    cvr: str
    bounce_rate: str = Field(alias="bounceRate")


class TrafficSource(Record):
    source: str
    percentage: float


class KeywordPerformance(Record):
    keyword: str
    estimated_pv: float = Field(alias="estimatedPV")


class ActionItem(Record):
    action: str
    justification: str


class PerformanceAnalysis(Record):
    summary: str = Field(min_length=1)
    key_metrics: KeyMetrics = Field(alias="keyMetrics")
    traffic_sources: list[TrafficSource] = Field(alias="trafficSources")
    keyword_performance: list[KeywordPerformance] = Field(alias="keywordPerformance")
    action_plan: list[ActionItem] = Field(alias="actionPlan")
