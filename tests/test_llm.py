"""Tests for the HTTP model client."""

import httpx
import pytest
import respx
from httpx import Response

from workerai.config.schema import WorkerConfig
from workerai.errors import ModelError
from workerai.llm.factory import create_llm_client
from workerai.llm.http import HTTPPromptClient

ENDPOINT = "https://model.example.dev/"


@pytest.mark.asyncio
@respx.mock
async def test_prompt_sent_as_query_parameter():
    route = respx.get(ENDPOINT).mock(return_value=Response(200, text="Hello back"))

    async with HTTPPromptClient(ENDPOINT) as client:
        reply = await client.complete("System\n\nUser: hi & bye?\n\nAssistant:")

    assert reply == "Hello back"
    assert route.called
    request = route.calls.last.request
    assert request.method == "GET"
    assert request.url.params["q"] == "System\n\nUser: hi & bye?\n\nAssistant:"


@pytest.mark.asyncio
@respx.mock
async def test_custom_query_param():
    route = respx.get(ENDPOINT).mock(return_value=Response(200, text="ok"))

    client = HTTPPromptClient(ENDPOINT, query_param="prompt")
    await client.complete("x")
    await client.close()

    assert route.calls.last.request.url.params["prompt"] == "x"


@pytest.mark.asyncio
@respx.mock
async def test_any_2xx_is_success():
    respx.get(ENDPOINT).mock(return_value=Response(203, text="partial info"))

    async with HTTPPromptClient(ENDPOINT) as client:
        assert await client.complete("x") == "partial info"


@pytest.mark.asyncio
@respx.mock
async def test_non_2xx_raises_model_error():
    respx.get(ENDPOINT).mock(return_value=Response(503, text="overloaded"))

    async with HTTPPromptClient(ENDPOINT) as client:
        with pytest.raises(ModelError) as exc_info:
            await client.complete("x")

    assert exc_info.value.status_code == 503
    assert "503" in str(exc_info.value)


@pytest.mark.asyncio
@respx.mock
async def test_transport_error_raises_model_error():
    respx.get(ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))

    async with HTTPPromptClient(ENDPOINT) as client:
        with pytest.raises(ModelError) as exc_info:
            await client.complete("x")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@respx.mock
async def test_not_retried():
    route = respx.get(ENDPOINT).mock(return_value=Response(500))

    async with HTTPPromptClient(ENDPOINT) as client:
        with pytest.raises(ModelError):
            await client.complete("x")

    assert route.call_count == 1


def test_factory_uses_model_config():
    config = WorkerConfig()
    config.model.endpoint = ENDPOINT
    config.model.query_param = "p"
    config.model.timeout = 30

    client = create_llm_client(config)

    assert isinstance(client, HTTPPromptClient)
    assert client.endpoint == ENDPOINT
    assert client.query_param == "p"
    assert client.timeout == 30
