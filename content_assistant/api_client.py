"""Client for the /api/assistant transport endpoint.

Every failure (network, HTTP error status, unreadable body) is logged and
collapses to None, so callers see one failure shape per operation.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from content_assistant import config

logger = logging.getLogger(__name__)


class AssistantAPI:
    """Cookie-keeping HTTP client; one instance = one server session."""

    def __init__(self, url: Optional[str] = None, http: Optional[httpx.Client] = None):
        self.url = url or config.API_URL
        # No client-side timeout: a call waits for the server as long as it takes.
        self.http = http or httpx.Client(timeout=None)

    def call(self, operation: str, params: dict) -> Any:
        try:
            response = self.http.post(self.url, json={"operation": operation, "params": params})
        except httpx.HTTPError as e:
            logger.error("Network error for %s: %s", operation, e)
            return None

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            message = payload.get("error") or f"API request failed with status {response.status_code}"
            logger.error("API error for %s: %s", operation, message)
            return None

        return payload.get("data")

    def verify_password(self, password: str) -> bool:
        result = self.call("verifyPassword", {"password": password})
        return bool(isinstance(result, dict) and result.get("success"))

    def end_session(self) -> None:
        end_url = self.url.rsplit("/", 1)[0] + "/session/end"
        try:
            self.http.post(end_url)
        except httpx.HTTPError as e:
            logger.warning("Could not end session: %s", e)

    def close(self) -> None:
        self.http.close()
