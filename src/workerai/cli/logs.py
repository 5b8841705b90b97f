"""Console logging setup for CLI commands."""

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> None:
    """Route log records through a rich console handler.

    Repeated calls only adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    root.addHandler(RichHandler(rich_tracebacks=False, show_path=False))
