"""Factory function for creating the model client from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from workerai.llm.http import HTTPPromptClient

if TYPE_CHECKING:
    from workerai.config.schema import WorkerConfig


def create_llm_client(config: WorkerConfig) -> HTTPPromptClient:
    """Create the model client described by ``config.model``.

    Args:
        config: WorkerAI configuration.

    Returns:
        A client for the configured endpoint.
    """
    return HTTPPromptClient(
        endpoint=config.model.endpoint,
        query_param=config.model.query_param,
        timeout=config.model.timeout,
    )
