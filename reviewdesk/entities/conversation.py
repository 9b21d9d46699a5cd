from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from reviewdesk.entities.message import Attachment, Message


@dataclass(frozen=True)
class ConversationHistory:
    """Append-only sequence of messages.

    Appending returns a new history; an existing instance never changes, so a
    message that has been sent cannot be retracted or edited.
    """

    messages: tuple[Message, ...] = ()

    def append(self, message: Message) -> ConversationHistory:
        return ConversationHistory(self.messages + (message,))

    def without_latest(self) -> tuple[Message, ...]:
        return self.messages[:-1]

    @property
    def latest(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)


@dataclass(frozen=True)
class Folder:
    """A review project: its history plus the unsent draft."""

    id: str
    name: str
    created_at: int
    history: ConversationHistory = field(default_factory=ConversationHistory)
    current_instruction: str = ""
    draft_attachments: tuple[Attachment, ...] = ()
