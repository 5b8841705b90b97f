"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from workerai.config.schema import WorkerConfig
from workerai.tools.executor import ToolExecutor
from workerai.tools.workspace import WorkspaceGateway


class ScriptedLLM:
    """Model client that replays canned replies.

    Once the script is exhausted the last reply is repeated. Exceptions in
    the script are raised instead of returned.
    """

    def __init__(self, replies: list):
        self.replies = list(replies)
        self.prompts: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies[min(len(self.prompts), len(self.replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Provide an empty workspace directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def gateway(workspace_root: Path) -> WorkspaceGateway:
    """Provide a gateway rooted at the temporary workspace, commands enabled."""
    return WorkspaceGateway(workspace_root, allow_commands=True, command_timeout=10)


@pytest.fixture
def executor(gateway: WorkspaceGateway) -> ToolExecutor:
    """Provide an executor over the temporary workspace."""
    return ToolExecutor(gateway)


@pytest.fixture
def default_config() -> WorkerConfig:
    """Provide a default configuration for tests."""
    return WorkerConfig()


@pytest.fixture
def make_llm():
    """Provide a factory for scripted model clients."""
    return ScriptedLLM
