"""Server command."""

from pathlib import Path

from rich.console import Console

from workerai.cli.logs import setup_logging

console = Console()


def serve_command(
    config_path: str | None = None,
    workspace: str | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the WebSocket server in the foreground.

    Args:
        config_path: Optional path to config file
        workspace: Workspace root override
        host: Bind address override
        port: Bind port override
    """
    import uvicorn

    from workerai.config.loader import ConfigError, load_config
    from workerai.server.app import create_app

    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except ConfigError as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        return

    if workspace:
        config.workspace.root = workspace
    if host:
        config.server.host = host
    if port:
        config.server.port = port

    setup_logging(config.logging.level)
    app = create_app(config)

    console.print(
        f"[green]Starting workerai server on "
        f"{config.server.host}:{config.server.port}{config.server.ws_path}[/green]"
    )
    if not config.workspace.root:
        console.print("[yellow]No workspace configured: file tools will fail.[/yellow]")
    console.print("\nPress Ctrl+C to stop")

    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )
