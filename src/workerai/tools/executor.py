"""Dispatch of parsed directives to workspace operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from workerai.errors import CommandCancelledError, MalformedDirectiveError, ToolError
from workerai.tools.base import ToolDirective, ToolKind, ToolResult, ToolStatus
from workerai.tools.parser import parse_replace_body
from workerai.tools.workspace import WorkspaceGateway

logger = logging.getLogger(__name__)

# Called from a worker thread before each run_command directive; returning
# False cancels it.
ConfirmCallback = Callable[[ToolDirective], bool]


class ToolExecutor:
    """Runs one directive at a time and turns the outcome into a ToolResult.

    Tool failures never propagate out of :meth:`execute`; they come back as
    results with ``status == ToolStatus.ERROR``.
    """

    def __init__(
        self,
        workspace: WorkspaceGateway,
        confirm_callback: ConfirmCallback | None = None,
    ):
        """Initialize the executor.

        Args:
            workspace: Gateway that performs the actual I/O
            confirm_callback: Optional hook asked before every command.
                              If None, commands run without confirmation.
        """
        self.workspace = workspace
        self.confirm_callback = confirm_callback
        self._handlers: dict[ToolKind, Callable[[ToolDirective], Awaitable[str]]] = {
            ToolKind.READ_FILE: self._read_file,
            ToolKind.WRITE_FILE: self._write_file,
            ToolKind.REPLACE_LINES: self._replace_lines,
            ToolKind.LIST_FILES: self._list_files,
            ToolKind.RUN_COMMAND: self._run_command,
            ToolKind.RESTORE_FILE: self._restore_file,
        }

    async def execute(self, directive: ToolDirective) -> ToolResult:
        """Execute a directive.

        Args:
            directive: Parsed tool directive

        Returns:
            ToolResult with the operation's output or error message
        """
        logger.info("Executing %s %s", directive.kind.value, directive.path or "")
        try:
            if directive.kind.needs_path and not directive.path:
                raise MalformedDirectiveError(f"{directive.kind.value} requires a path attribute")
            output = await self._handlers[directive.kind](directive)
        except ToolError as e:
            logger.info("%s failed: %s", directive.kind.value, e)
            return ToolResult(
                directive=directive,
                status=ToolStatus.ERROR,
                output=str(e),
                error_code=e.code,
            )
        except Exception as e:
            logger.error("Unexpected error in %s: %s", directive.kind.value, e)
            return ToolResult(
                directive=directive,
                status=ToolStatus.ERROR,
                output=f"Unexpected error: {e}",
                error_code=type(e).__name__,
            )

        return ToolResult(directive=directive, status=ToolStatus.SUCCESS, output=output)

    async def _read_file(self, directive: ToolDirective) -> str:
        return await self.workspace.read_file(directive.path)

    async def _write_file(self, directive: ToolDirective) -> str:
        return await self.workspace.write_file(directive.path, directive.body.strip())

    async def _replace_lines(self, directive: ToolDirective) -> str:
        search, replace = parse_replace_body(directive.body)
        return await self.workspace.replace_lines(directive.path, search, replace)

    async def _list_files(self, directive: ToolDirective) -> str:
        return await self.workspace.list_files()

    async def _restore_file(self, directive: ToolDirective) -> str:
        return await self.workspace.restore_file(directive.path)

    async def _run_command(self, directive: ToolDirective) -> str:
        command = directive.body.strip()
        if not command:
            raise MalformedDirectiveError("run_command requires a command line")

        if self.workspace.allow_commands and self.confirm_callback is not None:
            # Callbacks may block on terminal input.
            approved = await asyncio.to_thread(self.confirm_callback, directive)
            if not approved:
                raise CommandCancelledError(f"[CANCELLED] User declined to run: {command}")

        return await self.workspace.run_command(command)

