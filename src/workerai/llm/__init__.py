"""Model endpoint clients."""

from .client import LLMClient, Message, Role
from .factory import create_llm_client
from .http import HTTPPromptClient

__all__ = [
    "HTTPPromptClient",
    "LLMClient",
    "Message",
    "Role",
    "create_llm_client",
]
