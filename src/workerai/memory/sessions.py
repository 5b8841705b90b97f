"""Session store guarding each session's history with its own lock."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from workerai.llm.client import Message

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Session:
    """One conversation: an ordered message log and its locks.

    ``lock`` guards ``messages`` for the duration of a single append or
    clear. ``turn_lock`` is held for a whole agent turn so that turns on the
    same session run one after another.
    """

    session_id: str
    messages: list[Message] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    turn_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    deleted: bool = False


class SessionStore:
    """Owns all sessions of the process, keyed by caller-supplied id."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._registry_lock = asyncio.Lock()

    async def get_or_create(self, session_id: str) -> Session:
        """Return the session for ``session_id``, creating it if unseen."""
        async with self._registry_lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = Session(session_id=session_id)
                self._sessions[session_id] = session
                logger.debug("Created session %s", session_id)
            return session

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    async def append(self, session: Session, message: Message) -> None:
        """Append a message to a session's history.

        Appends to a session deleted mid-turn are dropped.
        """
        async with session.lock:
            if session.deleted:
                logger.debug("Dropping message for deleted session %s", session.session_id)
                return
            session.messages.append(message)

    async def history(self, session: Session) -> list[Message]:
        """Return a snapshot of a session's messages in order."""
        async with session.lock:
            return list(session.messages)

    async def clear(self, session_id: str) -> bool:
        """Empty a session's history, keeping its id.

        Returns:
            True if the session existed
        """
        session = self._sessions.get(session_id)
        if session is None:
            return False
        async with session.lock:
            session.messages.clear()
        logger.info("Cleared session %s", session_id)
        return True

    async def delete(self, session_id: str) -> bool:
        """Remove a session.

        Returns:
            True if the session existed
        """
        async with self._registry_lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        async with session.lock:
            session.deleted = True
            session.messages.clear()
        logger.info("Deleted session %s", session_id)
        return True

    def list_sessions(self) -> list[str]:
        """Return the ids of all live sessions in creation order."""
        return list(self._sessions)
