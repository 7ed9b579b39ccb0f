"""Access gate and per-session authentication state.

A session is created by a successful password check and is gone when it is
ended or the process restarts. Failed or anonymous requests store nothing.
"""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


def verify_password(candidate: Any, secret: Optional[str]) -> bool:
    """Compare a supplied password with the configured secret.

    No configured secret means every attempt fails, including "". A
    candidate that is not a string never matches.
    """
    if not secret:
        return False
    if not isinstance(candidate, str):
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


@dataclass
class SessionContext:
    token: str
    authenticated: bool = False
    created_at: datetime = field(default_factory=datetime.now)


class SessionStore:
    """In-memory sessions keyed by an opaque cookie token."""

    def __init__(self):
        self._sessions: Dict[str, SessionContext] = {}
        self._lock = threading.RLock()

    def open(self) -> SessionContext:
        session = SessionContext(token=secrets.token_urlsafe(32))
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: Optional[str]) -> Optional[SessionContext]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def login(self, token: Optional[str], candidate: Any, secret: Optional[str]) -> Optional[SessionContext]:
        """Authenticate the caller; a session is stored only on success.

        Returns the authenticated session, or None on a failed check. A
        failed check leaves an existing session as it was.
        """
        if not verify_password(candidate, secret):
            return None
        session = self.get(token) or self.open()
        session.authenticated = True
        return session

    def end(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
