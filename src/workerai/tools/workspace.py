"""Workspace gateway: the only code that touches files and processes.

Every path handed to the gateway is relative to the configured workspace
root. Paths inside an ignored directory, or resolving outside the root, are
refused before any I/O happens.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
import signal
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from workerai.errors import (
    AccessDeniedError,
    ExecError,
    NoBackupFoundError,
    NotFoundError,
    NoWorkspaceError,
    SearchNotFoundError,
    WorkspaceIOError,
)
from workerai.tools.backup import BackupStore

logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024
_POSIX = os.name == "posix"

DEFAULT_IGNORE = (
    "node_modules",
    "vendor",
    ".git",
    "dist",
    "build",
    "out",
    "target",
    "bin",
    "obj",
    "lib",
    ".idea",
    ".vscode",
    ".env",
)


class WorkspaceGateway:
    """Filesystem and shell access scoped to a single workspace root."""

    def __init__(
        self,
        root: str | Path | None,
        ignore: Iterable[str] | None = None,
        backups: BackupStore | None = None,
        allow_commands: bool = False,
        command_timeout: int = 60,
        max_output_bytes: int = 1024 * 1024,
    ):
        """Initialize the gateway.

        Args:
            root: Workspace root directory, or None when no workspace is open
            ignore: Directory names that may not be read, written or listed
            backups: Backup store used before overwriting files
            allow_commands: Whether run_command may spawn processes
            command_timeout: Seconds before a running command is killed
            max_output_bytes: Per-stream cap on captured command output
        """
        self.root = Path(root).expanduser().resolve() if root is not None else None
        self.ignore = frozenset(DEFAULT_IGNORE if ignore is None else ignore)
        self.backups = backups or BackupStore()
        self.allow_commands = allow_commands
        self.command_timeout = command_timeout
        self.max_output_bytes = max_output_bytes

    def _require_root(self) -> Path:
        if self.root is None:
            raise NoWorkspaceError()
        return self.root

    def _is_ignored(self, parts: Iterable[str]) -> bool:
        return any(part in self.ignore for part in parts)

    def resolve(self, relative_path: str) -> Path:
        """Resolve a workspace-relative path, enforcing the access policy.

        Args:
            relative_path: Path as written by the model

        Returns:
            Absolute path inside the workspace

        Raises:
            NoWorkspaceError: If no root is configured
            AccessDeniedError: If the path is ignored or escapes the root
        """
        root = self._require_root()
        normalized = relative_path.replace("\\", "/").strip()
        if not normalized:
            raise AccessDeniedError("Access denied: empty path")

        # Only directory components are checked, so a file named "lib.py" is fine.
        if self._is_ignored(PurePosixPath(normalized).parts[:-1]):
            raise AccessDeniedError(
                f'Access denied: "{relative_path}" is in an ignored directory.'
            )

        target = (root / normalized).resolve()
        try:
            inside = target.relative_to(root)
        except ValueError:
            raise AccessDeniedError(
                f'Access denied: "{relative_path}" is outside the workspace.'
            ) from None

        if self._is_ignored(inside.parts[:-1]):
            raise AccessDeniedError(
                f'Access denied: "{relative_path}" is in an ignored directory.'
            )
        return target

    def _backup(self, target: Path) -> Path | None:
        # A failed backup never blocks the write that follows it.
        try:
            return self.backups.snapshot(target)
        except OSError as e:
            logger.warning("Backup of %s failed: %s", target, e)
            return None

    async def read_file(self, path: str) -> str:
        """Return the UTF-8 text of a workspace file."""
        target = self.resolve(path)
        try:
            data = target.read_bytes()
        except FileNotFoundError:
            raise NotFoundError(f"File not found: {path}") from None
        except OSError as e:
            raise WorkspaceIOError(f"Cannot read {path}: {e.strerror or e}") from e

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WorkspaceIOError(f"Cannot decode {path} as UTF-8: {e}") from e

    async def write_file(self, path: str, content: str) -> str:
        """Overwrite (or create) a file, backing up any previous version.

        Returns:
            Confirmation naming the path
        """
        target = self.resolve(path)
        backup = self._backup(target) if target.exists() else None

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content.encode("utf-8"))
        except OSError as e:
            raise WorkspaceIOError(f"Cannot write {path}: {e.strerror or e}") from e

        if backup is not None:
            return f"Written to {path} (backup: {backup.name})"
        return f"Written to {path} (new file)"

    async def replace_lines(self, path: str, search: str, replace: str) -> str:
        """Replace the first literal occurrence of ``search`` in a file."""
        content = await self.read_file(path)
        if not search:
            raise SearchNotFoundError(f"Empty search text for {path}")
        if search not in content:
            raise SearchNotFoundError(f"Search text not found in {path}")

        target = self.resolve(path)
        self._backup(target)
        updated = content.replace(search, replace, 1)
        try:
            target.write_bytes(updated.encode("utf-8"))
        except OSError as e:
            raise WorkspaceIOError(f"Cannot write {path}: {e.strerror or e}") from e

        return f"Replaced 1 occurrence in {path}"

    async def list_files(self) -> str:
        """List every non-ignored file as newline-joined root-relative paths."""
        root = self._require_root()
        files: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if d not in self.ignore]
            base = Path(dirpath).relative_to(root)
            for name in filenames:
                files.append((base / name).as_posix())
        return "\n".join(files)

    async def restore_file(self, path: str) -> str:
        """Copy the most recent backup of ``path`` over the live file."""
        target = self.resolve(path)
        latest = self.backups.latest(target)
        if latest is None:
            raise NoBackupFoundError(f"No backup found for {path}")

        try:
            shutil.copyfile(latest, target)
        except OSError as e:
            raise WorkspaceIOError(f"Cannot restore {path}: {e.strerror or e}") from e

        return f"Restored {path} from {latest.name}"

    async def run_command(self, command: str) -> str:
        """Run a shell command in the workspace root.

        A command that runs but fails is not an error: its exit code is part
        of the returned text. Only a failure to spawn raises.

        Returns:
            Combined stdout/stderr, annotated with a non-zero exit code

        Raises:
            NoWorkspaceError: If no root is configured
            AccessDeniedError: If command execution is disabled
            ExecError: If the process could not be started
        """
        root = self._require_root()
        if not self.allow_commands:
            raise AccessDeniedError("Access denied: command execution is disabled")

        try:
            process = await asyncio.create_subprocess_shell(
                command,
                cwd=root,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=_POSIX,
            )
        except OSError as e:
            raise ExecError(f"Cannot start command: {e}") from e

        try:
            (stdout, out_cut), (stderr, err_cut) = await asyncio.wait_for(
                self._communicate(process),
                timeout=self.command_timeout,
            )
        except asyncio.TimeoutError:
            _kill(process)
            await process.wait()
            logger.warning("Command timed out after %ds: %s", self.command_timeout, command)
            return f"Command timed out after {self.command_timeout} seconds"

        returncode = process.returncode
        logger.info("Command exited with %s: %s", returncode, command)

        output = stdout.decode("utf-8", errors="replace")
        if stderr:
            output += "\nstderr:\n" + stderr.decode("utf-8", errors="replace")
        if out_cut or err_cut:
            output += f"\n... (output truncated at {self.max_output_bytes} bytes, process killed)"

        if returncode:
            return f"Exit Code: {returncode}\n{output}"
        return output or "Success (No Output)"

    async def _communicate(
        self, process: asyncio.subprocess.Process
    ) -> tuple[tuple[bytes, bool], tuple[bytes, bool]]:
        stdout, stderr = await asyncio.gather(
            self._read_capped(process.stdout, process),
            self._read_capped(process.stderr, process),
        )
        await process.wait()
        return stdout, stderr

    async def _read_capped(
        self, stream: asyncio.StreamReader | None, process: asyncio.subprocess.Process
    ) -> tuple[bytes, bool]:
        if stream is None:
            return b"", False

        data = bytearray()
        while True:
            chunk = await stream.read(_READ_CHUNK)
            if not chunk:
                return bytes(data), False
            room = self.max_output_bytes - len(data)
            data.extend(chunk[:room])
            if len(chunk) > room:
                _kill(process)
                return bytes(data), True


def _kill(process: asyncio.subprocess.Process) -> None:
    # Commands run in their own session; kill the group so children die too.
    with contextlib.suppress(ProcessLookupError, PermissionError):
        if _POSIX:
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()
