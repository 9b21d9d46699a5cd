"""
Unit tests for GeminiModelClient.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from reviewdesk.services.ReviewService.gemini_model_client import GeminiModelClient
from reviewdesk.tools.generate_file_tool import GENERATE_FILE_TOOL


@pytest.fixture
def genai_client() -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=types.GenerateContentResponse(candidates=[])
    )
    return client


@pytest.fixture
def model_client(genai_client: MagicMock) -> GeminiModelClient:
    return GeminiModelClient(
        client=genai_client,
        model_name="gemini-test",
        logger=logging.getLogger("GeminiModelClientTest"),
    )


@pytest.mark.asyncio
async def test_generate_forwards_model_contents_and_config(
    model_client: GeminiModelClient, genai_client: MagicMock
) -> None:
    contents = [types.Content(role="user", parts=[types.Part.from_text(text="hi")])]

    response = await model_client.generate(
        contents, "Be a reviewer.", 0.3, [GENERATE_FILE_TOOL]
    )

    assert response.candidates == []
    kwargs = genai_client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["contents"] is contents
    config: types.GenerateContentConfig = kwargs["config"]
    assert config.system_instruction == "Be a reviewer."
    assert config.temperature == 0.3
    assert config.tools == [GENERATE_FILE_TOOL]


@pytest.mark.asyncio
async def test_generate_without_tools_sends_none(
    model_client: GeminiModelClient, genai_client: MagicMock
) -> None:
    await model_client.generate([], "sys", 0.3, [])

    config = genai_client.aio.models.generate_content.await_args.kwargs["config"]
    assert config.tools is None


@pytest.mark.asyncio
async def test_generate_propagates_errors(
    model_client: GeminiModelClient, genai_client: MagicMock
) -> None:
    genai_client.aio.models.generate_content.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await model_client.generate([], "sys", 0.3, [])
