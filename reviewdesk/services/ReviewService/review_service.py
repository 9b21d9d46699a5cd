"""
ReviewService: one document-review turn against the model.

Assembles the conversation, makes the single model call, collects reply text
and generate_file calls, and encodes every requested file.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from google.genai import types
from langfuse import observe

from reviewdesk.entities.message import (
    Attachment,
    Message,
    OutputMode,
    RequestedFileType,
    ReviewResult,
)
from reviewdesk.services.ConversationService.conversation_assembler import (
    ConversationAssembler,
)
from reviewdesk.services.ConversationService.output_mode_policy import (
    resolve_output_policy,
)
from reviewdesk.services.FileCodecService.file_codec_service_interface import (
    FileCodecServiceInterface,
)
from reviewdesk.services.ReviewService.model_client_interface import (
    ModelClientInterface,
)
from reviewdesk.services.ReviewService.review_service_interface import (
    ReviewServiceInterface,
)
from reviewdesk.tools.generate_file_tool import (
    GENERATE_FILE_TOOL,
    GENERATE_FILE_TOOL_NAME,
    parse_generate_file_arguments,
)

DEFAULT_SYSTEM_INSTRUCTION = """You are an expert Document Reviewer Agent.
Your goal is to review, summarize, analyze, and critique documents uploaded by the user.
- Provide clear, professional, and structured responses.
- If the user asks for a specific type of review (e.g., tone, compliance, technical), focus strictly on that.
- If a document is unclear or you cannot process it, ask clarifying questions.
- Use formatting (Markdown) to make your output easy to read (bullet points, bold text for key insights).
- Maintain a helpful, objective, and analytical tone.
- When generating files, ONLY use the provided tool 'generate_file'. Do not write the file content in the chat.
"""

DEFAULT_TEMPERATURE = 0.3

FILE_ONLY_FALLBACK_TEXT = "File generated successfully."
EMPTY_REPLY_TEXT = "No response generated."


class TurnState(Enum):
    IDLE = "idle"
    ASSEMBLING = "assembling"
    AWAITING_MODEL = "awaiting_model"
    PARSING_REPLY = "parsing_reply"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


class ReviewService(ReviewServiceInterface):
    def __init__(
        self,
        model_client: ModelClientInterface,
        assembler: ConversationAssembler,
        file_codec: FileCodecServiceInterface,
        logger: logging.Logger,
        system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.model_client = model_client
        self.assembler = assembler
        self.file_codec = file_codec
        self.logger = logger
        self.system_instruction = system_instruction
        self.temperature = temperature

    @observe()
    async def review(
        self,
        history: Sequence[Message],
        new_text: str,
        new_attachments: Sequence[Attachment],
        mode: OutputMode,
        requested_type: RequestedFileType,
    ) -> ReviewResult:
        policy = resolve_output_policy(mode, requested_type)
        tools = [GENERATE_FILE_TOOL] if policy.tool_offered else []

        try:
            self._enter(TurnState.ASSEMBLING)
            contents = self.assembler.assemble(
                history, new_text, new_attachments, mode, requested_type
            )

            self._enter(TurnState.AWAITING_MODEL)
            response = await self.model_client.generate(
                contents, self.system_instruction, self.temperature, tools
            )

            self._enter(TurnState.PARSING_REPLY)
            text, file_calls = self._parse_reply(response)
            if file_calls and not policy.tool_offered:
                self.logger.warning(
                    "Ignoring %d generate_file call(s): tool was not offered",
                    len(file_calls),
                )
                file_calls = []

            self._enter(TurnState.ENCODING)
            generated_files = self._encode_files(file_calls)

        except Exception as e:
            self._enter(TurnState.FAILED)
            self.logger.error("Review turn failed: %s", e, exc_info=True)
            return {
                "text": f"Error during processing: {str(e) or 'Unknown error'}",
                "generated_files": [],
                "failed": True,
            }

        self._enter(TurnState.DONE)
        if not text:
            text = FILE_ONLY_FALLBACK_TEXT if generated_files else EMPTY_REPLY_TEXT

        return {"text": text, "generated_files": generated_files, "failed": False}

    def _enter(self, state: TurnState) -> None:
        self.logger.debug("Review turn entering %s", state.value)

    def _parse_reply(
        self, response: types.GenerateContentResponse
    ) -> tuple[str, list[dict[str, Any] | None]]:
        """Collect text and generate_file arguments from the first candidate only."""
        candidates = response.candidates or []
        if not candidates or candidates[0].content is None:
            return "", []

        text = ""
        file_calls: list[dict[str, Any] | None] = []
        for part in candidates[0].content.parts or []:
            if part.text:
                text += part.text
            call = part.function_call
            if call is None:
                continue
            if call.name == GENERATE_FILE_TOOL_NAME:
                file_calls.append(call.args)
            else:
                self.logger.warning("Ignoring call to undeclared tool %s", call.name)

        return text, file_calls

    def _encode_files(
        self, file_calls: list[dict[str, Any] | None]
    ) -> list[Attachment]:
        generated: list[Attachment] = []
        for raw_args in file_calls:
            args = parse_generate_file_arguments(raw_args)
            try:
                generated.append(
                    self.file_codec.encode(args.filename, args.content, args.mime_type)
                )
            except Exception as e:
                self.logger.warning(
                    "Dropping generated file %s: %s", args.filename, e, exc_info=True
                )

        self.logger.info("Generated %d file(s)", len(generated))
        return generated
