"""Output schemas for the structured stages.

Plain JSON-schema dicts; they are shown to the model as the output contract.
Required-field enforcement happens in the normalizer via the pydantic models.
"""

STRING = {"type": "string"}
NUMBER = {"type": "number"}


def _string(description: str) -> dict:
    return {"type": "string", "description": description}


def _object(properties: dict, required: list[str] | None = None) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": required if required is not None else list(properties),
    }


def _array(items: dict, description: str = "") -> dict:
    schema = {"type": "array", "items": items}
    if description:
        schema["description"] = description
    return schema


KEYWORD_ANALYSIS_SCHEMA = _object({
    "keywordAnalysis": _array(_object({
        "keyword": STRING,
        "searchVolume": _string("High, Medium or Low"),
        "difficulty": _string("High, Medium or Low"),
        "currentRank": _string("Estimated current position, or 'Not ranked'"),
        "recommendation": STRING,
    })),
    "summary": _string("Summary of the keyword strategy"),
})

COMPETITOR_ARTICLES_SCHEMA = _array(_object({
    "title": _string("Article title"),
    "url": _string("Article URL"),
    "summary": _string("Short summary of the article"),
}))

ARTICLE_DRAFT_SCHEMA = _object({
    "outline": _object({
        "title": _string("Proposed article title"),
        "sections": _array(_object({
            "heading": _string("Section heading (H2)"),
            "points": _array(STRING, "Key points the section must cover"),
        })),
    }),
    "introduction": _string("Article introduction"),
})

SOCIAL_POSTS_SCHEMA = _object({
    "x": _string("Post for X (Twitter)"),
    "facebook": _string("Post for Facebook"),
    "linkedin": _string("Post for LinkedIn"),
    "hashtags": _array(STRING, "Hashtags shared by all platforms"),
})

PERFORMANCE_ANALYSIS_SCHEMA = _object({
    "summary": _string("Overall summary of the simulated results"),
    "keyMetrics": _object({
        "monthlyPV": STRING,
        "users": STRING,
        "cvr": STRING,
        "bounceRate": STRING,
    }),
    "trafficSources": _array(_object({"source": STRING, "percentage": NUMBER})),
    "keywordPerformance": _array(_object({"keyword": STRING, "estimatedPV": NUMBER})),
    "actionPlan": _array(_object({
        "action": _string("Concrete improvement action"),
        "justification": _string("Why the action is expected to work"),
    })),
})
