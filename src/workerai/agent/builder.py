"""Assemble an Agent from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from workerai.agent.loop import Agent
from workerai.llm.factory import create_llm_client
from workerai.memory.sessions import SessionStore
from workerai.tools.backup import BackupStore
from workerai.tools.executor import ConfirmCallback, ToolExecutor
from workerai.tools.workspace import WorkspaceGateway

if TYPE_CHECKING:
    from workerai.config.schema import WorkerConfig
    from workerai.llm.client import LLMClient


def build_agent(
    config: WorkerConfig,
    llm: LLMClient | None = None,
    sessions: SessionStore | None = None,
    confirm_callback: ConfirmCallback | None = None,
) -> Agent:
    """Create an agent wired to the configured endpoint and workspace.

    Args:
        config: WorkerAI configuration
        llm: Model client override (defaults to the configured endpoint)
        sessions: Shared session store
        confirm_callback: Asked before each command when
            ``tools.confirm_commands`` is set

    Returns:
        Ready-to-use Agent
    """
    workspace = WorkspaceGateway(
        root=config.workspace.root,
        ignore=config.workspace.ignore,
        backups=BackupStore(),
        allow_commands=config.tools.run_command,
        command_timeout=config.tools.command_timeout,
        max_output_bytes=config.tools.max_output_bytes,
    )
    executor = ToolExecutor(
        workspace,
        confirm_callback=confirm_callback if config.tools.confirm_commands else None,
    )
    return Agent(
        llm=llm or create_llm_client(config),
        executor=executor,
        sessions=sessions,
        max_loops=config.agent.max_loops,
        system_prompt=config.agent.system_prompt,
    )
