"""Agent loop: prompt the model, run its directives, repeat."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from workerai.agent.events import (
    ErrorEvent,
    EventHandler,
    FileChangedEvent,
    NarrativeEvent,
    StatusEvent,
    ToolEvent,
    dispatch,
)
from workerai.agent.prompt import DEFAULT_SYSTEM_PROMPT, render_prompt
from workerai.llm.client import LLMClient, Message, Role
from workerai.memory.sessions import Session, SessionStore
from workerai.tools.base import ToolDirective, ToolKind, ToolResult, ToolStatus
from workerai.tools.executor import ToolExecutor
from workerai.tools.parser import parse_directives

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """Summary of one user turn."""

    session_id: str
    iterations: int
    final_answer: str | None = None
    error: str | None = None
    # Set when the session was deleted while the turn was running.
    stopped: bool = False

    @property
    def hit_loop_limit(self) -> bool:
        return self.final_answer is None and self.error is None and not self.stopped


class Agent:
    """Runs user turns against a model and a workspace.

    Each turn appends the user text to the session, then repeatedly renders
    the history into a prompt, asks the model, records the reply, and runs
    any directives in it. The turn ends when a reply contains no directives
    or after ``max_loops`` model calls.
    """

    def __init__(
        self,
        llm: LLMClient,
        executor: ToolExecutor,
        sessions: SessionStore | None = None,
        max_loops: int = 10,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ):
        """Initialize the agent.

        Args:
            llm: Model client
            executor: Executor for parsed directives
            sessions: Session store; a private one is created if omitted
            max_loops: Maximum model calls per turn
            system_prompt: Instruction placed before the history
        """
        self.llm = llm
        self.executor = executor
        self.sessions = sessions or SessionStore()
        self.max_loops = max_loops
        self.system_prompt = system_prompt

    async def send_message(
        self,
        text: str,
        session_id: str,
        on_event: EventHandler | None = None,
    ) -> TurnResult:
        """Run one turn for ``session_id``.

        Turns on the same session are serialized; turns on different
        sessions may run concurrently.

        Args:
            text: User message
            session_id: Opaque session identifier
            on_event: Receives status, narrative, tool and error events

        Returns:
            TurnResult describing how the turn ended
        """
        session = await self._acquire(session_id)
        try:
            await dispatch(on_event, StatusEvent(session_id=session_id, working=True))
            return await self._run_turn(session, text, on_event)
        finally:
            session.turn_lock.release()
            await dispatch(on_event, StatusEvent(session_id=session_id, working=False))

    async def clear_session(self, session_id: str) -> bool:
        """Empty the history of ``session_id``."""
        return await self.sessions.clear(session_id)

    async def delete_session(self, session_id: str) -> bool:
        """Forget ``session_id``; an in-flight turn stops after its current step."""
        return await self.sessions.delete(session_id)

    async def _acquire(self, session_id: str) -> Session:
        # A session deleted while we waited is replaced by a fresh one.
        while True:
            session = await self.sessions.get_or_create(session_id)
            await session.turn_lock.acquire()
            if not session.deleted:
                return session
            session.turn_lock.release()

    async def _run_turn(
        self, session: Session, text: str, on_event: EventHandler | None
    ) -> TurnResult:
        session_id = session.session_id
        result = TurnResult(session_id=session_id, iterations=0)

        try:
            await self.sessions.append(session, Message(role=Role.USER, content=text))

            while result.iterations < self.max_loops:
                if session.deleted:
                    logger.info("Session %s deleted mid-turn, stopping", session_id)
                    result.stopped = True
                    break

                result.iterations += 1
                history = await self.sessions.history(session)
                prompt = render_prompt(self.system_prompt, history)
                logger.info(
                    "Session %s iteration %d: prompting model (%d chars)",
                    session_id,
                    result.iterations,
                    len(prompt),
                )

                reply = await self.llm.complete(prompt)
                await self.sessions.append(session, Message(role=Role.ASSISTANT, content=reply))

                parsed = parse_directives(reply)
                if parsed.narrative.strip():
                    await dispatch(on_event, NarrativeEvent(session_id=session_id, text=parsed.narrative))

                if not parsed.has_tool_calls:
                    result.final_answer = parsed.narrative
                    break

                for directive in parsed.directives:
                    await self._run_directive(session, directive, on_event)
            else:
                if session.deleted:
                    result.stopped = True
                else:
                    logger.warning("Session %s reached the loop limit (%d)", session_id, self.max_loops)

        except Exception as e:
            logger.error("Turn failed for session %s: %s", session_id, e)
            result.error = str(e)
            await dispatch(on_event, ErrorEvent(session_id=session_id, message=str(e)))

        return result

    async def _run_directive(
        self, session: Session, directive: ToolDirective, on_event: EventHandler | None
    ) -> ToolResult:
        kind = directive.kind.value
        running_output = directive.body.strip() if directive.kind is ToolKind.RUN_COMMAND else ""
        await dispatch(
            on_event,
            ToolEvent(
                session_id=session.session_id,
                kind=kind,
                path=directive.path,
                status=ToolStatus.RUNNING,
                output=running_output,
            ),
        )

        result = await self.executor.execute(directive)

        if result.ok:
            content = f"Tool Output ({kind}): {result.output}"
        else:
            content = f"Error ({kind}): {result.output}"
        await self.sessions.append(session, Message(role=Role.SYSTEM, content=content))

        await dispatch(
            on_event,
            ToolEvent(
                session_id=session.session_id,
                kind=kind,
                path=directive.path,
                status=result.status,
                output=result.output,
            ),
        )
        if result.ok and directive.kind.mutates and directive.path:
            await dispatch(on_event, FileChangedEvent(session_id=session.session_id, path=directive.path))

        return result
