from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path

from reviewdesk.entities.conversation import Folder
from reviewdesk.entities.message import (
    Attachment,
    Message,
    OutputMode,
    RequestedFileType,
)


class WorkspaceServiceInterface(ABC):
    @property
    @abstractmethod
    def current_folder(self) -> Folder | None:
        """The selected folder, if any."""

    @abstractmethod
    def list_folders(self) -> list[Folder]:
        pass

    @abstractmethod
    def create_folder(self, name: str) -> Folder:
        """Create a folder at the top of the list and select it."""

    @abstractmethod
    def select_folder(self, folder_id: str) -> Folder:
        pass

    @abstractmethod
    def delete_folder(self, folder_id: str) -> None:
        pass

    @abstractmethod
    def save_draft(
        self, instruction: str, attachments: Sequence[Attachment] | None = None
    ) -> Folder:
        pass

    @abstractmethod
    def add_draft_files(self, paths: Iterable[str | Path]) -> list[Attachment]:
        """Convert files and append them to the current draft."""

    @abstractmethod
    def remove_draft_attachment(self, index: int) -> Folder:
        """Drop one draft attachment by position; negative or out-of-range indexes raise."""

    @abstractmethod
    async def submit(
        self, mode: OutputMode, requested_type: RequestedFileType
    ) -> Message | None:
        """
        Send the current draft as one turn and record the reply.

        Returns None when there is nothing to send.
        """
