"""WorkerAI - agent loop for model-driven edits of a local workspace.

A remote language model is prompted with the conversation so far, replies
with prose and embedded ``<tool>`` directives, and the directives are run
against the configured workspace. Results are fed back into the conversation
until the model stops asking for tools or the loop budget runs out.

Key modules:

- :mod:`workerai.agent` - Agent loop and the events it emits
- :mod:`workerai.tools` - Directive parser, executor, workspace gateway, backups
- :mod:`workerai.memory` - Per-session conversation history
- :mod:`workerai.llm` - Model endpoint client
- :mod:`workerai.channels` - WebSocket presentation adapter
- :mod:`workerai.config` - YAML configuration
"""

__version__ = "0.1.0"
