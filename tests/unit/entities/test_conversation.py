import dataclasses

import pytest

from reviewdesk.entities.conversation import ConversationHistory, Folder
from reviewdesk.entities.message import Message


def _message(message_id: str, role: str = "user") -> Message:
    return {"id": message_id, "role": role, "text": message_id, "timestamp": 0}


def test_append_returns_new_history() -> None:
    empty = ConversationHistory()

    one = empty.append(_message("a"))
    two = one.append(_message("b", "model"))

    assert len(empty) == 0
    assert len(one) == 1
    assert [m["id"] for m in two] == ["a", "b"]
    assert two.latest["id"] == "b"


def test_without_latest_drops_only_last() -> None:
    history = ConversationHistory().append(_message("a")).append(_message("b"))

    assert [m["id"] for m in history.without_latest()] == ["a"]
    assert ConversationHistory().without_latest() == ()
    assert ConversationHistory().latest is None


def test_history_is_immutable() -> None:
    history = ConversationHistory()

    with pytest.raises(dataclasses.FrozenInstanceError):
        history.messages = (_message("x"),)


def test_folder_defaults_to_empty_draft() -> None:
    folder = Folder(id="f", name="Contracts", created_at=1)

    assert folder.current_instruction == ""
    assert folder.draft_attachments == ()
    assert len(folder.history) == 0
