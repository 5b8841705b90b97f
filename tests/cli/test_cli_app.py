"""Tests for CLI app entry point."""

from unittest.mock import patch

from typer.testing import CliRunner

from workerai.agent.events import ErrorEvent, FileChangedEvent, NarrativeEvent, ToolEvent
from workerai.cli.app import app, main
from workerai.cli.chat import render_event
from workerai.tools.base import ToolStatus

runner = CliRunner()


def test_version_command():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "workerai version" in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert result.exit_code in (0, 2)
    assert "Usage" in result.output or "workerai" in result.output


def test_chat_command_delegates():
    with patch("workerai.cli.chat.chat_command") as mock_chat:
        result = runner.invoke(
            app, ["chat", "--workspace", "/tmp/ws", "--session", "abc", "--allow-commands"]
        )

    assert result.exit_code == 0
    mock_chat.assert_called_once_with(
        config_path=None, workspace="/tmp/ws", session_id="abc", allow_commands=True
    )


def test_serve_command_delegates():
    with patch("workerai.cli.server_cmd.serve_command") as mock_serve:
        result = runner.invoke(app, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    mock_serve.assert_called_once_with(config_path=None, workspace=None, host=None, port=9000)


def test_serve_with_bad_config(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("agent: [oops")

    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(app, ["serve", "--config", str(bad)])

    assert result.exit_code == 0
    assert "Failed to load config" in result.output
    mock_run.assert_not_called()


def test_serve_runs_uvicorn(tmp_path):
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(
            app,
            ["serve", "--config", str(tmp_path / "none.yaml"), "--workspace", str(tmp_path), "--port", "9001"],
        )

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs["port"] == 9001


def test_render_event_prints_each_kind():
    with patch("workerai.cli.chat.console") as mock_console:
        render_event(NarrativeEvent(session_id="s", text="hello"))
        render_event(ToolEvent(session_id="s", kind="run_command", status=ToolStatus.RUNNING, output="ls"))
        render_event(ToolEvent(session_id="s", kind="read_file", path="a", status=ToolStatus.ERROR, output="nope"))
        render_event(FileChangedEvent(session_id="s", path="a.txt"))
        render_event(ErrorEvent(session_id="s", message="API 500"))

    printed = [str(call.args[0]) for call in mock_console.print.call_args_list]
    assert any("run_command: ls" in p for p in printed)
    assert any("a.txt" in p for p in printed)
    assert any("API 500" in p for p in printed)


def test_main_keyboard_interrupt():
    with (
        patch("workerai.cli.app.app", side_effect=KeyboardInterrupt),
        patch("workerai.cli.app.sys") as mock_sys,
    ):
        main()
        mock_sys.exit.assert_called_with(130)


def test_main_exception():
    with (
        patch("workerai.cli.app.app", side_effect=RuntimeError("test error")),
        patch("workerai.cli.app.sys") as mock_sys,
    ):
        main()
        mock_sys.exit.assert_called_with(1)
