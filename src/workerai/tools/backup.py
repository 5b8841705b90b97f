"""Timestamped file snapshots taken before a file is overwritten."""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_MARKER = ".bak."

# Fixed-width UTC timestamp, so string order equals chronological order.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S-%fZ"
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{6}Z$")


class BackupStore:
    """Creates and finds ``<path>.bak.<timestamp>`` copies next to the original."""

    def __init__(self) -> None:
        self._last: datetime | None = None

    def _next_timestamp(self) -> str:
        now = datetime.now(timezone.utc)
        if self._last is not None and now <= self._last:
            now = self._last + timedelta(microseconds=1)
        self._last = now
        return now.strftime(TIMESTAMP_FORMAT)

    def snapshot(self, path: Path) -> Path | None:
        """Copy ``path`` to a new backup if it exists.

        Args:
            path: Absolute path of the file about to change

        Returns:
            Path of the backup, or None when there was nothing to copy
        """
        if not path.is_file():
            return None

        backup = path.with_name(f"{path.name}{BACKUP_MARKER}{self._next_timestamp()}")
        while backup.exists():
            backup = path.with_name(f"{path.name}{BACKUP_MARKER}{self._next_timestamp()}")

        shutil.copy2(path, backup)
        logger.debug("Backed up %s to %s", path, backup.name)
        return backup

    def list_backups(self, path: Path) -> list[Path]:
        """Return all backups of ``path``, oldest first."""
        prefix = f"{path.name}{BACKUP_MARKER}"
        if not path.parent.is_dir():
            return []

        backups = [
            candidate
            for candidate in path.parent.iterdir()
            if candidate.name.startswith(prefix)
            and TIMESTAMP_PATTERN.match(candidate.name[len(prefix) :])
            and candidate.is_file()
        ]
        return sorted(backups, key=lambda p: p.name)

    def latest(self, path: Path) -> Path | None:
        """Return the most recent backup of ``path``, if any."""
        backups = self.list_backups(path)
        return backups[-1] if backups else None
