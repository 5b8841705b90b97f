"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from workerai import __version__
from workerai.agent.builder import build_agent
from workerai.channels.web import WebChatAdapter
from workerai.config.schema import WorkerConfig

if TYPE_CHECKING:
    from workerai.agent.loop import Agent


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    workspace: str | None
    sessions: int


def create_app(config: WorkerConfig, agent: Agent | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: WorkerAI configuration
        agent: Agent override; built from ``config`` when omitted. The app
               closes the model client of an agent it built, never of one
               passed in.

    Returns:
        Configured FastAPI app
    """
    owns_agent = agent is None
    agent = agent or build_agent(config)
    adapter = WebChatAdapter(agent=agent, path=config.server.ws_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await adapter.stop()
        close = getattr(agent.llm, "close", None)
        if owns_agent and close is not None:
            await close()

    app = FastAPI(
        title="WorkerAI",
        description="Agent loop for model-driven workspace edits",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(adapter.router)
    app.state.agent = agent
    app.state.adapter = adapter

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=__version__,
            workspace=config.workspace.root,
            sessions=len(agent.sessions.list_sessions()),
        )

    return app
