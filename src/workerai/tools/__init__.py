"""Tool directives and the workspace operations behind them.

Models ask for actions by embedding ``<tool code="..." path="...">`` blocks
in their replies. The parser extracts them, the executor dispatches each one
to the workspace gateway, and the gateway performs the file or process
operation, snapshotting files before they are overwritten.

Available directives:

- **read_file** / **write_file** - Whole-file read and overwrite
- **replace_lines** - Replace the first occurrence of a literal search text
- **list_files** - All non-ignored files under the root
- **run_command** - Shell command in the workspace root (opt-in)
- **restore_file** - Roll a file back to its latest backup

Usage::

    from workerai.tools import ToolExecutor, WorkspaceGateway, parse_directives

    executor = ToolExecutor(WorkspaceGateway("/path/to/project"))
    for directive in parse_directives(reply).directives:
        result = await executor.execute(directive)
"""

from workerai.tools.backup import BackupStore
from workerai.tools.base import ToolDirective, ToolKind, ToolResult, ToolStatus
from workerai.tools.executor import ToolExecutor
from workerai.tools.parser import ParsedReply, parse_directives, parse_replace_body
from workerai.tools.workspace import DEFAULT_IGNORE, WorkspaceGateway

__all__ = [
    "DEFAULT_IGNORE",
    "BackupStore",
    "ParsedReply",
    "ToolDirective",
    "ToolExecutor",
    "ToolKind",
    "ToolResult",
    "ToolStatus",
    "WorkspaceGateway",
    "parse_directives",
    "parse_replace_body",
]
