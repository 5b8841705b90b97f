#!/usr/bin/env python3
"""Example 1: Agent editing a scratch workspace.

Runs one turn against the configured model endpoint and prints every event
the agent emits.

Prerequisites:
- A model endpoint that accepts GET ?q=<prompt> and answers with plain text
- ``model.endpoint`` set in ~/.workerai/workerai.yaml

Usage:
    python examples/01_local_agent.py
"""

import asyncio
import tempfile

from workerai.agent.builder import build_agent
from workerai.config.loader import load_config


async def main():
    """Ask the model to scaffold a file in a throwaway workspace."""
    config = load_config()

    with tempfile.TemporaryDirectory() as workspace:
        config.workspace.root = workspace
        agent = build_agent(config)

        print(f"Workspace: {workspace}")
        print(f"Endpoint: {config.model.endpoint}\n")

        result = await agent.send_message(
            "Create hello.py that prints a greeting, then read it back to check it.",
            session_id="example",
            on_event=lambda event: print(event.to_dict()),
        )
        await agent.llm.close()

        print(f"\nModel calls: {result.iterations}")
        if result.error:
            print(f"Error: {result.error}")
        elif result.final_answer is not None:
            print(f"Final answer:\n{result.final_answer}")


if __name__ == "__main__":
    asyncio.run(main())
