"""Agent loop for model-driven workspace edits.

The agent renders a session's history into a prompt, sends it to the model,
runs the tool directives in the reply, records their output as system
messages, and repeats until the model answers without directives or the
loop limit is reached.

Usage::

    from workerai.agent import Agent
    from workerai.llm.factory import create_llm_client
    from workerai.tools import ToolExecutor, WorkspaceGateway

    agent = Agent(
        llm=create_llm_client(config),
        executor=ToolExecutor(WorkspaceGateway("/path/to/project")),
    )
    result = await agent.send_message("Add a README", session_id="s1", on_event=print)
"""

from workerai.agent.events import (
    AgentEvent,
    ErrorEvent,
    EventHandler,
    FileChangedEvent,
    NarrativeEvent,
    StatusEvent,
    ToolEvent,
)
from workerai.agent.loop import Agent, TurnResult

__all__ = [
    "Agent",
    "AgentEvent",
    "ErrorEvent",
    "EventHandler",
    "FileChangedEvent",
    "NarrativeEvent",
    "StatusEvent",
    "ToolEvent",
    "TurnResult",
]
