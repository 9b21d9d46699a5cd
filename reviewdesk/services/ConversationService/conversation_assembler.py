from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Sequence

from google.genai import types

from reviewdesk.entities.message import (
    Attachment,
    Message,
    OutputMode,
    RequestedFileType,
)
from reviewdesk.services.ConversationService.output_mode_policy import (
    resolve_output_policy,
)


class ConversationAssembler:
    """
    Builds the contents of a single model call.

    Every turn lists its attachments as inline data before its text, turns
    keep their chronological order and the new user turn always comes last.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def assemble(
        self,
        history: Sequence[Message],
        new_text: str,
        new_attachments: Sequence[Attachment],
        mode: OutputMode,
        requested_type: RequestedFileType,
    ) -> list[types.Content]:
        """
        Map prior history plus the new user turn into role-tagged contents.

        Args:
            history: Previous messages, never including the turn being sent
            new_text: The user's instruction for this turn
            new_attachments: Documents uploaded with this turn
            mode: Output mode selected for this turn
            requested_type: File type hint used in the steering note

        Returns:
            One Content per history message that still has parts, followed by
            the new user turn
        """
        contents: list[types.Content] = []
        for message in history:
            content = self._history_content(message)
            if not content.parts:
                self.logger.warning(
                    "Skipping history message %s: nothing left to send", message["id"]
                )
                continue
            contents.append(content)

        parts = self._inline_parts(new_attachments)
        policy = resolve_output_policy(mode, requested_type)
        instruction = new_text + (policy.steering_text or "")
        if instruction:
            parts.append(types.Part.from_text(text=instruction))

        contents.append(types.Content(role="user", parts=parts))
        return contents

    def _history_content(self, message: Message) -> types.Content:
        parts = self._inline_parts(message.get("attachments") or [])
        if message["text"]:
            parts.append(types.Part.from_text(text=message["text"]))

        role = "user" if message["role"] == "user" else "model"
        return types.Content(role=role, parts=parts)

    def _inline_parts(self, attachments: Sequence[Attachment]) -> list[types.Part]:
        parts: list[types.Part] = []
        for attachment in attachments:
            try:
                data = base64.b64decode(attachment["data"], validate=True)
            except (binascii.Error, ValueError) as e:
                self.logger.warning(
                    "Failed to decode attachment %s: %s", attachment["name"], e
                )
                continue
            parts.append(types.Part.from_bytes(data=data, mime_type=attachment["mime_type"]))
        return parts
