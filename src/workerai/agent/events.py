"""Typed events the agent loop emits to the presentation layer."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

from workerai.tools.base import ToolStatus


@dataclass(frozen=True)
class StatusEvent:
    """Brackets a turn: ``working`` is True at the start, False at the end."""

    session_id: str
    working: bool

    def to_dict(self) -> dict[str, Any]:
        return {"type": "status", "sessionId": self.session_id, "working": self.working}


@dataclass(frozen=True)
class NarrativeEvent:
    """Model text with all directives removed."""

    session_id: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "narrative", "sessionId": self.session_id, "text": self.text}


@dataclass(frozen=True)
class ToolEvent:
    """Progress of one directive: ``running`` then ``success`` or ``error``."""

    session_id: str
    kind: str
    status: ToolStatus
    output: str
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "tool",
            "sessionId": self.session_id,
            "kind": self.kind,
            "path": self.path,
            "status": self.status.value,
            "output": self.output,
        }


@dataclass(frozen=True)
class FileChangedEvent:
    """A file was written or restored; hosts may open or focus it."""

    session_id: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "file_changed", "sessionId": self.session_id, "path": self.path}


@dataclass(frozen=True)
class ErrorEvent:
    """The turn ended on a fatal error."""

    session_id: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "error", "sessionId": self.session_id, "message": self.message}


AgentEvent = Union[StatusEvent, NarrativeEvent, ToolEvent, FileChangedEvent, ErrorEvent]

# Sync or async callable receiving every event of a turn.
EventHandler = Callable[[AgentEvent], Union[Awaitable[None], None]]


async def dispatch(handler: EventHandler | None, event: AgentEvent) -> None:
    """Deliver ``event`` to ``handler``, awaiting it if it is async."""
    if handler is None:
        return
    result = handler(event)
    if inspect.isawaitable(result):
        await result
