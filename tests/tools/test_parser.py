"""Tests for tool directive parsing."""

import pytest

from workerai.errors import MalformedDirectiveError
from workerai.tools.base import ToolKind
from workerai.tools.parser import parse_directives, parse_replace_body


class TestParseDirectives:
    def test_no_directives_returns_text_unchanged(self):
        """A plain reply yields no directives and the original text."""
        text = "Sure, here is an explanation.\n\nNo tools needed.  "
        parsed = parse_directives(text)

        assert parsed.directives == []
        assert parsed.narrative == text
        assert parsed.has_tool_calls is False

    def test_single_directive_with_path(self):
        """Kind, path and literal body are extracted."""
        text = 'Reading it now.\n<tool code="read_file" path="src/app.py"></tool>'
        parsed = parse_directives(text)

        assert len(parsed.directives) == 1
        directive = parsed.directives[0]
        assert directive.kind is ToolKind.READ_FILE
        assert directive.path == "src/app.py"
        assert directive.body == ""
        assert parsed.narrative == "Reading it now."

    def test_directive_without_path(self):
        """list_files carries no path attribute."""
        parsed = parse_directives('<tool code="list_files">\n</tool>')

        assert parsed.directives[0].kind is ToolKind.LIST_FILES
        assert parsed.directives[0].path is None

    def test_multiple_directives_keep_document_order(self):
        """N directives come back in the order they were written."""
        text = (
            "Plan:\n"
            '<tool code="write_file" path="a.txt">\nA\n</tool>\n'
            "then\n"
            '<tool code="run_command">\nls\n</tool>\n'
            '<tool code="read_file" path="a.txt"></tool>\n'
            "done"
        )
        parsed = parse_directives(text)

        assert [d.kind for d in parsed.directives] == [
            ToolKind.WRITE_FILE,
            ToolKind.RUN_COMMAND,
            ToolKind.READ_FILE,
        ]
        assert "<tool" not in parsed.narrative
        assert "</tool>" not in parsed.narrative
        assert "Plan:" in parsed.narrative
        assert "then" in parsed.narrative
        assert "done" in parsed.narrative

    def test_body_stops_at_first_end_marker(self):
        """The narrowest body is taken so later directives are not swallowed."""
        text = (
            '<tool code="write_file" path="one.txt">first</tool>'
            '<tool code="write_file" path="two.txt">second</tool>'
        )
        parsed = parse_directives(text)

        assert [d.body for d in parsed.directives] == ["first", "second"]
        assert [d.path for d in parsed.directives] == ["one.txt", "two.txt"]

    def test_body_is_literal(self):
        """Markup-like content inside a body is not interpreted."""
        body = '\n<div class="x">&amp;</div>\n'
        parsed = parse_directives(f'<tool code="write_file" path="index.html">{body}</tool>')

        assert parsed.directives[0].body == body

    def test_unknown_kind_is_ignored(self):
        """Unknown kinds are stripped from the narrative but not dispatched."""
        text = 'Hi <tool code="teleport" path="x">now</tool> there'
        parsed = parse_directives(text)

        assert parsed.directives == []
        assert parsed.ignored == ["teleport"]
        assert "teleport" not in parsed.narrative
        assert parsed.has_tool_calls is False

    def test_unknown_kind_does_not_hide_known_ones(self):
        text = '<tool code="teleport"></tool><tool code="list_files"></tool>'
        parsed = parse_directives(text)

        assert [d.kind for d in parsed.directives] == [ToolKind.LIST_FILES]

    def test_unterminated_directive_is_not_matched(self):
        """A start marker without an end marker stays in the narrative."""
        text = '<tool code="read_file" path="a.txt">'
        parsed = parse_directives(text)

        assert parsed.directives == []
        assert parsed.narrative == text


class TestParseReplaceBody:
    def test_search_and_replace(self):
        body = "\n<search>\nold line\n</search>\n<replace>\nnew line\n</replace>\n"
        assert parse_replace_body(body) == ("old line", "new line")

    def test_inline_regions_kept_verbatim(self):
        body = "<search>  a  </search><replace>b</replace>"
        assert parse_replace_body(body) == ("  a  ", "b")

    def test_only_one_wrapping_newline_removed(self):
        body = "<search>\n\nx\n\n</search><replace>\ny\n</replace>"
        assert parse_replace_body(body) == ("\nx\n", "y")

    def test_empty_replace_allowed(self):
        assert parse_replace_body("<search>x</search><replace></replace>") == ("x", "")

    def test_missing_search(self):
        with pytest.raises(MalformedDirectiveError, match="<search>"):
            parse_replace_body("<replace>new</replace>")

    def test_missing_replace(self):
        with pytest.raises(MalformedDirectiveError, match="<replace>"):
            parse_replace_body("<search>old</search>")

    def test_missing_both(self):
        with pytest.raises(MalformedDirectiveError) as exc_info:
            parse_replace_body("just text")
        assert exc_info.value.code == "MalformedDirective"
