"""Pydantic models for workerai.yaml configuration."""

from pydantic import BaseModel, Field

from workerai.agent.prompt import DEFAULT_SYSTEM_PROMPT
from workerai.tools.workspace import DEFAULT_IGNORE


class ModelConfig(BaseModel):
    """Model endpoint configuration."""

    endpoint: str = Field(
        default="http://localhost:8787",
        description="URL of the model endpoint; the prompt is sent as a GET query parameter",
    )
    query_param: str = Field(default="q", description="Query parameter carrying the prompt")
    timeout: int = Field(default=120, description="Request timeout in seconds", ge=1)


class AgentConfig(BaseModel):
    """Agent loop configuration."""

    max_loops: int = Field(default=10, description="Maximum model calls per turn", ge=1, le=50)
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        description="Instruction placed before the conversation in every prompt",
    )


class WorkspaceConfig(BaseModel):
    """Workspace root and access policy."""

    root: str | None = Field(
        default=None,
        description="Workspace root directory; tools fail with NoWorkspace when unset",
    )
    ignore: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE),
        description="Directory names the tools may not read, write or list",
    )


class ToolsConfig(BaseModel):
    """Tool availability configuration."""

    run_command: bool = Field(
        default=False,
        description="Allow the model to run shell commands in the workspace root",
    )
    confirm_commands: bool = Field(
        default=True,
        description="Ask before running each command (interactive hosts only)",
    )
    command_timeout: int = Field(default=60, description="Command timeout in seconds", ge=1)
    max_output_bytes: int = Field(
        default=1024 * 1024,
        description="Per-stream cap on captured command output",
        ge=1024,
    )


class ServerConfig(BaseModel):
    """API server configuration."""

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)
    ws_path: str = Field(default="/ws/chat", description="WebSocket chat endpoint path")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Root log level")


class WorkerConfig(BaseModel):
    """Root configuration model."""

    model: ModelConfig = Field(default_factory=ModelConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
