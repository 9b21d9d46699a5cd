from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from reviewdesk.entities.message import Attachment


@dataclass(frozen=True)
class RawUpload:
    """A user-supplied file before conversion."""

    name: str
    mime_type: str
    data: bytes


class AttachmentServiceInterface(ABC):
    @abstractmethod
    def to_attachment(self, upload: RawUpload) -> Attachment:
        """Convert one upload, raising AttachmentProcessingError on failure."""

    @abstractmethod
    def process_uploads(self, uploads: Iterable[RawUpload]) -> list[Attachment]:
        """
        Convert a batch of uploads.

        Every upload is attempted independently; failures are logged and the
        upload is left out of the result. Output order follows input order.
        """

    @abstractmethod
    def process_paths(self, paths: Iterable[str | Path]) -> list[Attachment]:
        """Read files from disk and convert them with the same batch semantics."""
