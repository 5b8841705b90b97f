"""Model client protocol and conversation types."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Role(str, Enum):
    """Author of a conversation message."""

    USER = "User"
    ASSISTANT = "Assistant"
    SYSTEM = "System"


@dataclass(frozen=True)
class Message:
    """A message in the conversation."""

    role: Role
    content: str


class LLMClient(Protocol):
    """Protocol for model client implementations."""

    async def complete(self, prompt: str) -> str:
        """Send a fully rendered prompt and return the reply text.

        Args:
            prompt: System instruction, transcript and assistant cue

        Returns:
            Raw reply text

        Raises:
            ModelError: If the endpoint does not answer successfully
        """
        ...
