"""WebSocket-based chat adapter.

Frontends send JSON commands::

    {"type": "sendMessage", "sessionId": "s1", "message": "..."}
    {"type": "clearSession", "sessionId": "s1"}
    {"type": "deleteSession", "sessionId": "s1"}

and receive every agent event as JSON (see ``AgentEvent.to_dict``).

Usage:
    from fastapi import FastAPI
    from workerai.channels.web import WebChatAdapter

    app = FastAPI()
    adapter = WebChatAdapter(agent=agent)
    app.include_router(adapter.router)
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from workerai.channels.base import ChannelCommand, CommandType, parse_command

if TYPE_CHECKING:
    from workerai.agent.events import AgentEvent
    from workerai.agent.loop import Agent

logger = logging.getLogger(__name__)


class WebChatAdapter:
    """WebSocket chat adapter."""

    def __init__(self, agent: Agent, path: str = "/ws/chat") -> None:
        """Initialize WebSocket chat adapter.

        Args:
            agent: Agent that handles the commands
            path: WebSocket endpoint path
        """
        self.agent = agent
        self.path = path
        self.router = APIRouter()
        self._connections: dict[str, WebSocket] = {}
        self._turns: set[asyncio.Task[Any]] = set()

        self.router.add_api_websocket_route(path, self._websocket_handler)

    async def _websocket_handler(self, websocket: WebSocket) -> None:
        """Handle a WebSocket connection."""
        await websocket.accept()
        conn_id = str(id(websocket))
        self._connections[conn_id] = websocket
        logger.info("WebSocket client connected: %s", conn_id)

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))

                data = message.get("text")
                try:
                    if data is None:
                        raise ValueError("Commands must be sent as text frames")
                    command = parse_command(json.loads(data))
                except ValueError as e:
                    logger.debug("Rejected frame from %s: %s", conn_id, e)
                    await websocket.send_json({"type": "error", "sessionId": None, "message": str(e)})
                    continue

                await self._handle_command(conn_id, command)

        except WebSocketDisconnect:
            logger.info("WebSocket client disconnected: %s", conn_id)
        finally:
            self._connections.pop(conn_id, None)

    async def _handle_command(self, conn_id: str, command: ChannelCommand) -> None:
        if command.type is CommandType.SEND_MESSAGE:
            logger.info("Message for session %s: %s", command.session_id, command.message[:100])
            # Run the turn in the background so clear/delete can arrive meanwhile.
            task = asyncio.create_task(self._run_turn(conn_id, command))
            self._turns.add(task)
            task.add_done_callback(self._turns.discard)
        elif command.type is CommandType.CLEAR_SESSION:
            await self.agent.clear_session(command.session_id)
            await self._send(conn_id, {"type": "sessionCleared", "sessionId": command.session_id})
        elif command.type is CommandType.DELETE_SESSION:
            await self.agent.delete_session(command.session_id)
            await self._send(conn_id, {"type": "sessionDeleted", "sessionId": command.session_id})

    async def _run_turn(self, conn_id: str, command: ChannelCommand) -> None:
        async def forward(event: AgentEvent) -> None:
            await self._send(conn_id, event.to_dict())

        await self.agent.send_message(command.message, command.session_id, on_event=forward)

    async def _send(self, conn_id: str, payload: dict[str, Any]) -> None:
        websocket = self._connections.get(conn_id)
        if websocket is None:
            return
        try:
            await websocket.send_json(payload)
        except (RuntimeError, WebSocketDisconnect) as e:
            # Client went away; the turn keeps running without a listener.
            logger.debug("Dropping event for %s: %s", conn_id, e)

    async def start(self) -> None:
        """No-op for WebSocket adapter (runs as part of FastAPI app)."""
        pass

    async def stop(self) -> None:
        """Close all WebSocket connections."""
        for _conn_id, ws in list(self._connections.items()):
            with contextlib.suppress(Exception):
                await ws.close()
        self._connections.clear()
