"""HTTP transport and access gate."""

from content_assistant.web.session import SessionContext, SessionStore, verify_password

__all__ = ["SessionContext", "SessionStore", "verify_password"]
