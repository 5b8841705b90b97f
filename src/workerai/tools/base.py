"""Base types for tool directives and their results."""

from dataclasses import dataclass
from enum import Enum


class ToolKind(str, Enum):
    """Tool directives the executor knows how to run."""

    READ_FILE = "read_file"
    WRITE_FILE = "write_file"
    REPLACE_LINES = "replace_lines"
    LIST_FILES = "list_files"
    RUN_COMMAND = "run_command"
    RESTORE_FILE = "restore_file"

    @property
    def needs_path(self) -> bool:
        return self not in (ToolKind.LIST_FILES, ToolKind.RUN_COMMAND)

    @property
    def mutates(self) -> bool:
        return self in (ToolKind.WRITE_FILE, ToolKind.REPLACE_LINES, ToolKind.RESTORE_FILE)


class ToolStatus(str, Enum):
    """Lifecycle of a single directive."""

    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ToolDirective:
    """A tool invocation embedded in model output."""

    kind: ToolKind
    body: str
    path: str | None = None


@dataclass(frozen=True)
class ToolResult:
    """Outcome of executing one directive."""

    directive: ToolDirective
    status: ToolStatus
    output: str
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ToolStatus.SUCCESS
