"""SEO content assistant: keyword research to article, social posts and a simulated report.

Package structure:
    content_assistant/config.py      – paths, API keys, model settings, stage targets
    content_assistant/models.py      – records exchanged between stages
    content_assistant/pipeline/      – prompts, schemas, Claude client, normalizer, stages
    content_assistant/workflow.py    – three-phase stage controller
    content_assistant/web/           – HTTP transport and access gate
    content_assistant/validation/    – quality checks, grading, and report formatting
    content_assistant/export.py      – CSV export of the performance report
"""

__version__ = "0.1.0"
