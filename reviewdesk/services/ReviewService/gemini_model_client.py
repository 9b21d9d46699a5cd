from __future__ import annotations

import logging

from google import genai
from google.genai import types
from langfuse import observe

from reviewdesk.services.ReviewService.model_client_interface import (
    ModelClientInterface,
)


class GeminiModelClient(ModelClientInterface):
    """Model invocation backed by the Google Gen AI SDK."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        logger: logging.Logger,
    ) -> None:
        self.client = client
        self.model_name = model_name
        self.logger = logger

    @observe()
    async def generate(
        self,
        contents: list[types.Content],
        system_instruction: str,
        temperature: float,
        tools: list[types.Tool],
    ) -> types.GenerateContentResponse:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            tools=tools or None,
        )

        self.logger.info(
            "Calling %s with %d content(s), tools offered: %s",
            self.model_name,
            len(contents),
            bool(tools),
        )

        return await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=config,
        )
