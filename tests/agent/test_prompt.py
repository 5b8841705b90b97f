"""Tests for prompt rendering."""

from workerai.agent.prompt import DEFAULT_SYSTEM_PROMPT, render_prompt
from workerai.llm.client import Message, Role


def test_render_prompt_layout():
    history = [
        Message(role=Role.USER, content="hi"),
        Message(role=Role.ASSISTANT, content="hello"),
        Message(role=Role.SYSTEM, content="Tool Output (list_files): a.txt"),
    ]

    prompt = render_prompt("SYSTEM", history)

    assert prompt == (
        "SYSTEM\n\n"
        "User: hi\n\n"
        "Assistant: hello\n\n"
        "System: Tool Output (list_files): a.txt\n\n"
        "Assistant:"
    )


def test_default_prompt_documents_every_tool():
    for kind in ("read_file", "write_file", "replace_lines", "list_files", "run_command", "restore_file"):
        assert f'code="{kind}"' in DEFAULT_SYSTEM_PROMPT
