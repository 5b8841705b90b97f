"""Extraction of ``<tool>`` directives from model replies.

A directive looks like::

    <tool code="write_file" path="src/app.py">
    print("hello")
    </tool>

The body is literal text up to the first closing ``</tool>``; directives do
not nest. ``replace_lines`` bodies carry a ``<search>`` and a ``<replace>``
region.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from workerai.errors import MalformedDirectiveError
from workerai.tools.base import ToolDirective, ToolKind

logger = logging.getLogger(__name__)

TOOL_PATTERN = re.compile(
    r'<tool code="([^"]+)"(?: path="([^"]*)")?\s*>(.*?)</tool>',
    re.DOTALL,
)
SEARCH_PATTERN = re.compile(r"<search>(.*?)</search>", re.DOTALL)
REPLACE_PATTERN = re.compile(r"<replace>(.*?)</replace>", re.DOTALL)

_KINDS = {kind.value: kind for kind in ToolKind}


@dataclass
class ParsedReply:
    """Directives found in a reply plus the text left for display."""

    directives: list[ToolDirective] = field(default_factory=list)
    narrative: str = ""
    ignored: list[str] = field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.directives)


def parse_directives(text: str) -> ParsedReply:
    """Parse all directives in ``text`` in document order.

    Directives with an unknown ``code`` are stripped from the narrative and
    listed in ``ignored`` but are not returned for execution.

    Args:
        text: Full model reply

    Returns:
        ParsedReply with directives, narrative and ignored kinds
    """
    directives: list[ToolDirective] = []
    ignored: list[str] = []

    for match in TOOL_PATTERN.finditer(text):
        code, path, body = match.group(1), match.group(2), match.group(3)
        kind = _KINDS.get(code)
        if kind is None:
            logger.info("Ignoring unknown tool directive %r", code)
            ignored.append(code)
            continue
        directives.append(ToolDirective(kind=kind, body=body, path=path or None))

    if not directives and not ignored:
        return ParsedReply(narrative=text)

    narrative = TOOL_PATTERN.sub("", text)
    narrative = re.sub(r"\n{3,}", "\n\n", narrative).strip()
    return ParsedReply(directives=directives, narrative=narrative, ignored=ignored)


def _unwrap(region: str) -> str:
    # Drop the line breaks that put the region on its own lines.
    if region.startswith("\r\n"):
        region = region[2:]
    elif region.startswith("\n"):
        region = region[1:]
    if region.endswith("\r\n"):
        region = region[:-2]
    elif region.endswith("\n"):
        region = region[:-1]
    return region


def parse_replace_body(body: str) -> tuple[str, str]:
    """Split a ``replace_lines`` body into its search and replace texts.

    Args:
        body: Directive body

    Returns:
        ``(search, replace)`` tuple

    Raises:
        MalformedDirectiveError: If either region is missing
    """
    search = SEARCH_PATTERN.search(body)
    replace = REPLACE_PATTERN.search(body)
    if search is None or replace is None:
        missing = [name for name, m in (("<search>", search), ("<replace>", replace)) if m is None]
        raise MalformedDirectiveError(
            f"replace_lines requires {' and '.join(missing)} block{'s' if len(missing) > 1 else ''}"
        )
    return _unwrap(search.group(1)), _unwrap(replace.group(1))
