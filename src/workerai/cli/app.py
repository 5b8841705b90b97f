"""Main CLI application using Typer."""

import sys

import typer
from rich.console import Console

from workerai import __version__

app = typer.Typer(
    name="workerai",
    help="WorkerAI - let a language model inspect and edit a local project",
    no_args_is_help=True,
)

console = Console()


@app.command()
def version():
    """Show workerai version."""
    console.print(f"workerai version {__version__}")


@app.command()
def chat(
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.workerai/workerai.yaml)",
    ),
    workspace: str = typer.Option(None, "--workspace", "-w", help="Workspace root directory"),
    session: str = typer.Option("cli", "--session", "-s", help="Session identifier"),
    allow_commands: bool = typer.Option(
        False, "--allow-commands", help="Let the model run shell commands"
    ),
):
    """Start an interactive chat session."""
    from workerai.cli.chat import chat_command

    chat_command(
        config_path=config_path,
        workspace=workspace,
        session_id=session,
        allow_commands=allow_commands,
    )


@app.command()
def serve(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
    workspace: str = typer.Option(None, "--workspace", "-w", help="Workspace root directory"),
    host: str = typer.Option(None, "--host", help="Bind address"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port"),
):
    """Start the WebSocket server."""
    from workerai.cli.server_cmd import serve_command

    serve_command(config_path=config_path, workspace=workspace, host=host, port=port)


def main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
