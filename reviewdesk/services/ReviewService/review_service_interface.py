from abc import ABC, abstractmethod
from collections.abc import Sequence

from reviewdesk.entities.message import (
    Attachment,
    Message,
    OutputMode,
    RequestedFileType,
    ReviewResult,
)


class ReviewServiceInterface(ABC):
    @abstractmethod
    async def review(
        self,
        history: Sequence[Message],
        new_text: str,
        new_attachments: Sequence[Attachment],
        mode: OutputMode,
        requested_type: RequestedFileType,
    ) -> ReviewResult:
        """
        Run one review turn against the model.

        Never raises: a failed model call is reported as readable text with no
        generated files.

        Args:
            history: Prior messages, excluding the turn being submitted
            new_text: The user's instruction
            new_attachments: Documents attached to this turn
            mode: Whether a file is forbidden, required or optional
            requested_type: File type hint for file_only mode

        Returns:
            The reply text and the files the model generated
        """
