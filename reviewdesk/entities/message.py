from typing import Literal, NotRequired, TypedDict

Role = Literal["user", "model"]

OutputMode = Literal["text_only", "file_only", "text_and_file"]

RequestedFileType = Literal["doc", "xlsx", "txt", "auto"]


class Attachment(TypedDict):
    """File payload encoded as base64, either uploaded or generated."""

    name: str
    mime_type: str
    data: str


class Message(TypedDict):
    """One entry of a folder's conversation history."""

    id: str
    role: Role
    text: str
    timestamp: int
    attachments: NotRequired[list[Attachment]]
    generated_files: NotRequired[list[Attachment]]


class ReviewResult(TypedDict):
    """Outcome of a single review turn."""

    text: str
    generated_files: list[Attachment]
    failed: bool
