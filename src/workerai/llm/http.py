"""Model client for endpoints that take the prompt as a GET query parameter."""

import logging

import httpx

from workerai.errors import ModelError

logger = logging.getLogger(__name__)


class HTTPPromptClient:
    """LLM client that sends the whole prompt in a single GET request.

    The endpoint answers with the reply as plain response text. Any non-2xx
    status is a :class:`ModelError`; nothing is retried.
    """

    def __init__(self, endpoint: str, query_param: str = "q", timeout: int = 120):
        """Initialize the client.

        Args:
            endpoint: Endpoint URL
            query_param: Name of the query parameter carrying the prompt
            timeout: Request timeout in seconds
        """
        self.endpoint = endpoint
        self.query_param = query_param
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout)

    async def complete(self, prompt: str) -> str:
        """Send the prompt and return the reply body.

        Args:
            prompt: Fully rendered prompt

        Returns:
            Response body text

        Raises:
            ModelError: On non-2xx status or transport failure
        """
        try:
            response = await self._client.get(self.endpoint, params={self.query_param: prompt})
        except httpx.HTTPError as e:
            raise ModelError(f"Model request failed: {e}") from e

        if not response.is_success:
            logger.warning("Model endpoint returned %d", response.status_code)
            raise ModelError(f"API {response.status_code}", status_code=response.status_code)

        return response.text

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
