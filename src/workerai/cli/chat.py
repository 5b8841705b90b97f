"""Interactive chat REPL command."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from workerai.agent.builder import build_agent
from workerai.agent.events import (
    AgentEvent,
    ErrorEvent,
    FileChangedEvent,
    NarrativeEvent,
    StatusEvent,
    ToolEvent,
)
from workerai.cli.logs import setup_logging
from workerai.config.loader import ConfigError, load_config
from workerai.tools.base import ToolStatus

if TYPE_CHECKING:
    from workerai.agent.loop import Agent
    from workerai.config.schema import WorkerConfig
    from workerai.tools.base import ToolDirective

console = Console()
logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 2000


def chat_command(
    config_path: str | None = None,
    workspace: str | None = None,
    session_id: str = "cli",
    allow_commands: bool = False,
) -> None:
    """Start interactive chat session.

    Args:
        config_path: Optional path to config file
        workspace: Workspace root override (defaults to config, then cwd)
        session_id: Session identifier for this REPL
        allow_commands: Enable the run_command directive
    """
    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        return

    config.workspace.root = workspace or config.workspace.root or str(Path.cwd())
    if allow_commands:
        config.tools.run_command = True
    setup_logging(config.logging.level)

    console.print(
        Panel.fit(
            f"[bold blue]workerai chat[/bold blue]\n"
            f"Workspace: {config.workspace.root}\n"
            f"Endpoint: {config.model.endpoint}\n"
            f"Type /help for commands, /exit to quit",
            border_style="blue",
        )
    )

    asyncio.run(_async_chat(config, session_id))


def confirm_command(directive: ToolDirective) -> bool:
    """Ask the user before a command runs.

    Blocks on terminal input, so the executor calls it from a worker thread.
    """
    console.print(f"\n[yellow]The model wants to run:[/yellow] {directive.body.strip()}")
    return Confirm.ask("Run this command?", default=False)


def render_event(event: AgentEvent) -> None:
    """Print one agent event to the console."""
    if isinstance(event, NarrativeEvent):
        console.print("\n[bold green]assistant[/bold green]")
        console.print(Markdown(event.text))
    elif isinstance(event, ToolEvent):
        target = f" {event.path}" if event.path else ""
        if event.status is ToolStatus.RUNNING:
            detail = f": {event.output}" if event.output else ""
            console.print(f"[dim]→ {event.kind}{target}{detail}[/dim]")
        else:
            color = "green" if event.status is ToolStatus.SUCCESS else "red"
            output = event.output
            if len(output) > _PREVIEW_CHARS:
                output = output[:_PREVIEW_CHARS] + f"\n... ({len(event.output) - _PREVIEW_CHARS} chars omitted)"
            console.print(
                Panel(output or "(empty)", title=f"{event.kind}{target}", border_style=color)
            )
    elif isinstance(event, FileChangedEvent):
        console.print(f"[cyan]✎ {event.path}[/cyan]")
    elif isinstance(event, ErrorEvent):
        console.print(f"\n[red]Error: {event.message}[/red]")
    elif isinstance(event, StatusEvent):
        logger.debug("Session %s working=%s", event.session_id, event.working)


async def _async_chat(config: WorkerConfig, session_id: str) -> None:
    """Async chat loop.

    Args:
        config: WorkerAI configuration
        session_id: Session identifier
    """
    agent = build_agent(config, confirm_callback=confirm_command)

    try:
        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")

                if not user_input.strip():
                    continue

                if user_input.startswith("/"):
                    if await _handle_slash_command(user_input, agent, session_id):
                        break
                    continue

                result = await agent.send_message(user_input, session_id, on_event=render_event)
                if result.hit_loop_limit:
                    console.print(
                        f"[yellow]Stopped after {result.iterations} model calls (loop limit).[/yellow]"
                    )

            except KeyboardInterrupt:
                console.print("\n[yellow]Interrupted[/yellow]")
                if Confirm.ask("Exit chat?", default=False):
                    break
            except EOFError:
                break
    finally:
        close = getattr(agent.llm, "close", None)
        if close is not None:
            await close()

    console.print("\n[cyan]Goodbye![/cyan]")


async def _handle_slash_command(command: str, agent: Agent, session_id: str) -> bool:
    """Handle slash commands.

    Returns:
        True if the chat should exit
    """
    cmd = command.lower().strip()

    if cmd in ("/exit", "/quit"):
        return True

    if cmd == "/help":
        console.print(
            Panel(
                "[bold]Commands:[/bold]\n"
                "/help   - Show this help\n"
                "/clear  - Clear conversation history\n"
                "/exit   - Exit chat",
                title="Help",
                border_style="blue",
            )
        )
    elif cmd == "/clear":
        await agent.clear_session(session_id)
        console.print("[green]Conversation cleared[/green]")
    else:
        console.print(f"[red]Unknown command: {command}[/red]")
        console.print("Type /help for available commands")

    return False
