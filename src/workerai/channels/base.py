"""Command surface shared by presentation adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class CommandType(str, Enum):
    """Commands a presentation layer can send to the core."""

    SEND_MESSAGE = "sendMessage"
    CLEAR_SESSION = "clearSession"
    DELETE_SESSION = "deleteSession"


@dataclass(frozen=True)
class ChannelCommand:
    """A command received from a presentation layer."""

    type: CommandType
    session_id: str
    message: str = ""


def parse_command(payload: Any) -> ChannelCommand:
    """Validate a decoded JSON command.

    Args:
        payload: Decoded JSON object, e.g. ``{"type": "sendMessage", ...}``

    Returns:
        ChannelCommand

    Raises:
        ValueError: If the payload is not a recognised command
    """
    if not isinstance(payload, dict):
        raise ValueError("Command must be a JSON object")

    try:
        command_type = CommandType(payload.get("type"))
    except ValueError:
        raise ValueError(f"Unknown command type: {payload.get('type')!r}") from None

    session_id = payload.get("sessionId")
    if not isinstance(session_id, str) or not session_id:
        raise ValueError("Command requires a non-empty sessionId")

    message = payload.get("message", "")
    if command_type is CommandType.SEND_MESSAGE and (not isinstance(message, str) or not message.strip()):
        raise ValueError("sendMessage requires a non-empty message")

    return ChannelCommand(type=command_type, session_id=session_id, message=message or "")


@runtime_checkable
class ChannelAdapter(Protocol):
    """Protocol for presentation adapters.

    Each adapter accepts commands from its frontend, runs them through an
    Agent, and forwards the agent's events back to the frontend.
    """

    async def start(self) -> None:
        """Start listening for commands."""
        ...

    async def stop(self) -> None:
        """Stop listening and clean up."""
        ...
