"""Error types raised by the workspace tools and the model client."""

from __future__ import annotations


class WorkerAIError(Exception):
    """Base class for workerai errors."""


class ToolError(WorkerAIError):
    """A failure scoped to a single tool directive.

    These are caught at the executor boundary and reported back to the
    model; they never end the turn.
    """

    code = "ToolError"


class NoWorkspaceError(ToolError):
    """No workspace root is configured."""

    code = "NoWorkspace"

    def __init__(self, message: str = "No workspace open") -> None:
        super().__init__(message)


class AccessDeniedError(ToolError):
    """Path is inside an ignored directory or outside the workspace."""

    code = "AccessDenied"


class WorkspaceIOError(ToolError):
    """Underlying filesystem failure (including decode errors)."""

    code = "IOError"


class NotFoundError(WorkspaceIOError):
    """Requested file does not exist."""

    code = "NotFound"


class SearchNotFoundError(ToolError):
    """The search text of a replace directive is not in the file."""

    code = "SearchNotFound"


class NoBackupFoundError(ToolError):
    """Restore was requested for a path without any backup."""

    code = "NoBackupFound"


class ExecError(ToolError):
    """A command could not be spawned."""

    code = "ExecError"


class CommandCancelledError(ToolError):
    """The host declined to run a command."""

    code = "Cancelled"


class MalformedDirectiveError(ToolError):
    """A directive is missing a required part."""

    code = "MalformedDirective"


class ModelError(WorkerAIError):
    """The model endpoint did not return a successful reply."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
