"""Central configuration for the content assistant."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ── Paths ──────────────────────────────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent.parent
OUTPUT_DIR = Path(os.getenv("ASSISTANT_OUTPUT_DIR", ROOT_DIR / "output"))

# ── Secrets ────────────────────────────────────────────────────────────────
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
APP_PASSWORD = os.getenv("APP_PASSWORD", "")  # empty = access gate always denies

# ── Claude settings ────────────────────────────────────────────────────────
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-5-20250929")
CLAUDE_MAX_TOKENS = int(os.getenv("CLAUDE_MAX_TOKENS", "4096"))
CLAUDE_TEMPERATURE = float(os.getenv("CLAUDE_TEMPERATURE", "0.7"))
ARTICLE_MAX_TOKENS = 8192  # full-article stage only

# ── Stage targets ─────────────────────────────────────────────────────────
KEYWORD_COUNT = 10
COMPETITOR_ARTICLE_COUNT = 5
ARTICLE_MIN_CHARS = 3000
ARTICLE_MAX_CHARS = 5000
HASHTAGS_MIN = 5
HASHTAGS_MAX = 7
TOP_KEYWORDS_IN_REPORT = 5
ACTION_PLAN_ITEMS = 3
X_POST_MAX_CHARS = 280

# ── Transport ──────────────────────────────────────────────────────────────
API_URL = os.getenv("ASSISTANT_API_URL", "http://127.0.0.1:8000/api/assistant")
SERVER_HOST = os.getenv("ASSISTANT_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("ASSISTANT_PORT", "8000"))
SESSION_COOKIE = "assistant_session"

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
