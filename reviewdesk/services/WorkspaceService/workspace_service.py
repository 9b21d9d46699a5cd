from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path

from reviewdesk.entities.conversation import Folder
from reviewdesk.entities.message import (
    Attachment,
    Message,
    OutputMode,
    RequestedFileType,
)
from reviewdesk.repositories.folder_repository.folder_repository_interface import (
    FolderRepositoryInterface,
)
from reviewdesk.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
)
from reviewdesk.services.ReviewService.review_service_interface import (
    ReviewServiceInterface,
)
from reviewdesk.services.WorkspaceService.workspace_service_interface import (
    WorkspaceServiceInterface,
)


class FolderNotFoundError(Exception):
    def __init__(self, folder_id: str) -> None:
        self.folder_id = folder_id
        super().__init__(f"Folder not found: {folder_id}")


class TurnInProgressError(Exception):
    def __init__(self, folder_id: str) -> None:
        self.folder_id = folder_id
        super().__init__(f"A review turn is already in progress (folder {folder_id})")


class DraftAttachmentNotFoundError(Exception):
    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"No draft attachment at index {index} (draft holds {count})")


def generate_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


class WorkspaceService(WorkspaceServiceInterface):
    """
    Folder workspace that drives review turns.

    Serializes turns (one outstanding model call at a time), appends the user
    message before calling the model and the reply after it. History is only
    ever appended to.
    """

    def __init__(
        self,
        folder_repository: FolderRepositoryInterface,
        attachment_service: AttachmentServiceInterface,
        review_service: ReviewServiceInterface,
        logger: logging.Logger,
    ) -> None:
        self.folder_repository = folder_repository
        self.attachment_service = attachment_service
        self.review_service = review_service
        self.logger = logger
        self.current_folder_id: str | None = None
        self.is_loading: bool = False

    @property
    def current_folder(self) -> Folder | None:
        if self.current_folder_id is None:
            return None
        return self.folder_repository.get_folder(self.current_folder_id)

    def list_folders(self) -> list[Folder]:
        return self.folder_repository.list_folders()

    def create_folder(self, name: str) -> Folder:
        folder = Folder(id=generate_id(), name=name, created_at=now_ms())
        self.folder_repository.add_folder(folder)
        self.current_folder_id = folder.id
        self.logger.info("Created folder '%s' (%s)", name, folder.id)
        return folder

    def select_folder(self, folder_id: str) -> Folder:
        folder = self._get_folder(folder_id)
        self.current_folder_id = folder.id
        return folder

    def delete_folder(self, folder_id: str) -> None:
        if not self.folder_repository.delete_folder(folder_id):
            raise FolderNotFoundError(folder_id)

        self.logger.info("Deleted folder %s", folder_id)
        if self.current_folder_id == folder_id:
            remaining = self.folder_repository.list_folders()
            self.current_folder_id = remaining[0].id if remaining else None

    def save_draft(
        self, instruction: str, attachments: Sequence[Attachment] | None = None
    ) -> Folder:
        folder = self._require_current()
        updated = replace(
            folder,
            current_instruction=instruction,
            draft_attachments=(
                folder.draft_attachments if attachments is None else tuple(attachments)
            ),
        )
        self.folder_repository.save_folder(updated)
        return updated

    def add_draft_files(self, paths: Iterable[str | Path]) -> list[Attachment]:
        folder = self._require_current()
        attachments = self.attachment_service.process_paths(paths)
        self.folder_repository.save_folder(
            replace(folder, draft_attachments=folder.draft_attachments + tuple(attachments))
        )
        return attachments

    def remove_draft_attachment(self, index: int) -> Folder:
        folder = self._require_current()
        drafts = list(folder.draft_attachments)
        if not 0 <= index < len(drafts):
            raise DraftAttachmentNotFoundError(index, len(drafts))
        del drafts[index]
        updated = replace(folder, draft_attachments=tuple(drafts))
        self.folder_repository.save_folder(updated)
        return updated

    async def submit(
        self, mode: OutputMode, requested_type: RequestedFileType
    ) -> Message | None:
        folder = self.current_folder
        if folder is None:
            return None
        if not folder.current_instruction and not folder.draft_attachments:
            return None
        if self.is_loading:
            raise TurnInProgressError(folder.id)

        self.is_loading = True
        try:
            user_message: Message = {
                "id": generate_id(),
                "role": "user",
                "text": folder.current_instruction,
                "timestamp": now_ms(),
                "attachments": list(folder.draft_attachments),
            }
            folder = replace(
                folder,
                history=folder.history.append(user_message),
                current_instruction="",
                draft_attachments=(),
            )
            self.folder_repository.save_folder(folder)

            result = await self.review_service.review(
                folder.history.without_latest(),
                user_message["text"],
                user_message["attachments"],
                mode,
                requested_type,
            )

            model_message: Message = {
                "id": generate_id(),
                "role": "model",
                "text": result["text"],
                "timestamp": now_ms(),
                "generated_files": result["generated_files"],
            }

            latest = self.folder_repository.get_folder(folder.id)
            if latest is None:
                self.logger.warning(
                    "Folder %s was deleted during the turn; reply discarded", folder.id
                )
                return model_message

            self.folder_repository.save_folder(
                replace(latest, history=latest.history.append(model_message))
            )
            return model_message
        finally:
            self.is_loading = False

    def _get_folder(self, folder_id: str) -> Folder:
        folder = self.folder_repository.get_folder(folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        return folder

    def _require_current(self) -> Folder:
        folder = self.current_folder
        if folder is None:
            raise FolderNotFoundError(str(self.current_folder_id))
        return folder
