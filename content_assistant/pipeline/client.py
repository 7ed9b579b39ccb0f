"""Single-round-trip completion client on top of the Anthropic SDK.

Structured stages pass an output schema; the schema is appended to the prompt
as the output contract and the system prompt demands JSON only. Free-text
stages pass no schema.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Optional

import anthropic

from content_assistant import config
from content_assistant.pipeline.prompts import JSON_SYSTEM_PROMPT, WRITER_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


def _extract_text(message: anthropic.types.Message) -> str:
    """Join the text blocks of a reply; other block types are ignored."""
    text_parts: list[str] = []
    for block in message.content:
        if block.type == "text":
            text_parts.append(block.text)
    return "".join(text_parts)


def with_schema(prompt: str, schema: dict) -> str:
    """Append the JSON output contract to a prompt."""
    return (
        f"{prompt}\n\n"
        "# JSON SCHEMA\n"
        "Your response MUST be valid JSON matching this schema exactly "
        "(all required fields present):\n"
        f"{json.dumps(schema, indent=2)}"
    )


class CompletionClient:
    """Send one prompt, get one text reply. No retries, no streaming."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[anthropic.Anthropic] = None,
    ):
        api_key = api_key if api_key is not None else config.ANTHROPIC_API_KEY
        if client is None and not api_key:
            raise ValueError("ANTHROPIC_API_KEY not set. Add it to your .env file.")
        self.client = client or anthropic.Anthropic(api_key=api_key)
        self.model = model or config.CLAUDE_MODEL
        self.temperature = config.CLAUDE_TEMPERATURE if temperature is None else temperature

    def complete(
        self,
        prompt: str,
        schema: Optional[dict] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        if schema is not None:
            system = JSON_SYSTEM_PROMPT
            content = with_schema(prompt, schema)
        else:
            system = WRITER_SYSTEM_PROMPT
            content = prompt

        start = time.time()
        message = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens or config.CLAUDE_MAX_TOKENS,
            temperature=self.temperature,
            system=system,
            messages=[{"role": "user", "content": content}],
        )
        elapsed = time.time() - start

        text = _extract_text(message)
        usage = message.usage
        logger.info(
            "completion %s in %.1fs (%s in / %s out)",
            "json" if schema is not None else "text",
            elapsed,
            usage.input_tokens,
            usage.output_tokens,
        )
        return text
