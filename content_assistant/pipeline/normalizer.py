"""Turn raw model text into validated records, or None."""

from __future__ import annotations

import json
import logging
import re
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_LEADING_FENCE = re.compile(r"^```[A-Za-z]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```$")


def strip_code_fence(text: str) -> str:
    """Remove a leading ```/```json marker and a trailing ``` marker."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_json(text: str):
    """Parse fenced or bare JSON. Raises json.JSONDecodeError on garbage."""
    return json.loads(strip_code_fence(text or ""))


def normalize(text: str, model: type[M]) -> Optional[M]:
    """Parse ``text`` as one ``model`` record.

    Returns None when the text is not JSON or any required field is missing.
    """
    try:
        return model.model_validate(parse_json(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Failed to parse %s: %s\nRaw text: %r", model.__name__, e, text)
        return None


def normalize_list(text: str, model: type[M]) -> Optional[list[M]]:
    """Parse ``text`` as a JSON array of ``model`` records, all or nothing."""
    try:
        data = parse_json(text)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        return [model.model_validate(item) for item in data]
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        logger.warning("Failed to parse list of %s: %s\nRaw text: %r", model.__name__, e, text)
        return None
