"""HTTP transport: one POST endpoint dispatching named operations.

Request body: {"operation": str, "params": {...}}
Success:      200 {"data": <result or null>}
Errors:       400 unknown operation / malformed body, 401 not logged in,
              405 wrong method, 500 missing credential or internal failure.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from content_assistant import __version__, config
from content_assistant.models import ArticleDraft, CompetitorArticle, Record
from content_assistant.pipeline import stages
from content_assistant.pipeline.client import CompletionClient
from content_assistant.web.session import SessionContext, SessionStore

logger = logging.getLogger(__name__)

app = FastAPI(title="SEO Content Assistant", version=__version__)
sessions = SessionStore()


class OperationRequest(BaseModel):
    operation: str
    params: Dict[str, Any] = Field(default_factory=dict)


def make_client() -> CompletionClient:
    return CompletionClient(api_key=config.ANTHROPIC_API_KEY)


def _wire(result: Any) -> Any:
    """Serialize stage results with the camelCase keys the callers expect."""
    if isinstance(result, Record):
        return result.to_wire()
    if isinstance(result, list):
        return [_wire(item) for item in result]
    return result


# ── Operation handlers ────────────────────────────────────────────────────
# Each takes (client, params) and returns JSON-ready data or None.


def _analyze_keywords(client: CompletionClient, params: dict):
    return stages.analyze_keywords(
        client, params.get("userUrl", ""), list(params.get("competitorUrls") or [])
    )


def _find_top_competitor_articles(client: CompletionClient, params: dict):
    return stages.find_top_competitor_articles(client, params.get("topic", ""))


def _create_composite_article(client: CompletionClient, params: dict):
    articles = [CompetitorArticle.model_validate(a) for a in params.get("articles") or []]
    return stages.create_composite_article(client, params.get("topic", ""), articles)


def _generate_full_article(client: CompletionClient, params: dict):
    return stages.generate_full_article(client, ArticleDraft.model_validate(params.get("draft")))


def _generate_social_media_posts(client: CompletionClient, params: dict):
    return stages.generate_social_media_posts(client, params.get("article", ""))


def _revise_full_article(client: CompletionClient, params: dict):
    return stages.revise_full_article(
        client, params.get("currentArticle", ""), params.get("revisionPrompt", "")
    )


def _analyze_performance_data(client: CompletionClient, params: dict):
    # Simulated report: Claude never sees the live page.
    return stages.analyze_performance_data(
        client, params.get("articleUrl", ""), params.get("socialUrl") or None
    )


OPERATIONS: Dict[str, Callable[[CompletionClient, dict], Any]] = {
    "analyzeKeywords": _analyze_keywords,
    "findTopCompetitorArticles": _find_top_competitor_articles,
    "createCompositeArticle": _create_composite_article,
    "generateFullArticle": _generate_full_article,
    "generateSocialMediaPosts": _generate_social_media_posts,
    "reviseFullArticle": _revise_full_article,
    "analyzePerformanceData": _analyze_performance_data,
}


# ── Responses ─────────────────────────────────────────────────────────────


def _reply(status: int, payload: dict, session: Optional[SessionContext] = None) -> JSONResponse:
    response = JSONResponse(status_code=status, content=payload)
    if session is not None:
        response.set_cookie(
            config.SESSION_COOKIE, session.token, httponly=True, samesite="lax"
        )
    return response


def _error(status: int, message: str, session: Optional[SessionContext] = None) -> JSONResponse:
    return _reply(status, {"error": message}, session)


@app.exception_handler(RequestValidationError)
async def _malformed_body(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request body: %s", exc.errors())
    return _error(400, "Malformed request body.")


# ── Routes ────────────────────────────────────────────────────────────────


@app.post("/api/assistant")
def assistant(body: OperationRequest, request: Request):
    """Dispatch one operation.

    analyzePerformanceData returns a simulated report, not measured data.
    """
    token = request.cookies.get(config.SESSION_COOKIE)
    session = sessions.get(token)
    operation = body.operation
    params = body.params

    if operation == "verifyPassword":
        authenticated = sessions.login(token, params.get("password"), config.APP_PASSWORD)
        if authenticated is None:
            logger.info("Failed login attempt")
            return _reply(200, {"data": {"success": False}}, session)
        return _reply(200, {"data": {"success": True}}, authenticated)

    if not config.ANTHROPIC_API_KEY:
        return _error(500, "ANTHROPIC_API_KEY environment variable not set on the server", session)

    handler = OPERATIONS.get(operation)
    if handler is None:
        return _error(400, "Invalid operation specified.", session)

    if session is None or not session.authenticated:
        return _error(401, "Authentication required.", session)

    try:
        data = _wire(handler(make_client(), params))
    except Exception as e:
        logger.exception("Error during operation: %s", operation)
        return _error(500, f"An internal server error occurred: {e}", session)

    return _reply(200, {"data": data}, session)


@app.api_route("/api/assistant", methods=["GET", "PUT", "PATCH", "DELETE"])
def assistant_wrong_method():
    return _error(405, "Method Not Allowed")


@app.post("/api/session/end")
def end_session(request: Request):
    ended = sessions.end(request.cookies.get(config.SESSION_COOKIE))
    response = JSONResponse(status_code=200, content={"data": {"ended": ended}})
    response.delete_cookie(config.SESSION_COOKIE)
    return response


@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "version": __version__,
        "generation_configured": bool(config.ANTHROPIC_API_KEY),
        "access_gate_configured": bool(config.APP_PASSWORD),
    }
