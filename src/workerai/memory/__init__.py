"""In-process conversation history, one ordered message log per session.

Sessions are created lazily on first use and live until cleared or deleted.
Nothing is persisted across restarts.
"""

from workerai.memory.sessions import Session, SessionStore

__all__ = ["Session", "SessionStore"]
