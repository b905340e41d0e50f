"""
Tests for the message board and the blackboard category index.
"""
import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from agentic_board.core.board import Blackboard, MessageBoard
from agentic_board.core.exceptions import BoardError
from agentic_board.core.state import BoardMessage, MessageCategory, USER_AUTHOR


def test_ids_start_at_one_and_strictly_increase(board):
    messages = [
        board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "a"),
        board.append("uiux", MessageCategory.UIUX_SPEC, "b"),
        board.append("frontend", MessageCategory.FRONTEND_PLAN, "c"),
        board.append("uiux", MessageCategory.UIUX_SPEC, "d"),
    ]

    ids = [m.id for m in board.all()]
    assert ids == [1, 2, 3, 4]
    assert [m.id for m in messages] == ids


def test_id_counter_is_per_board():
    first, second = MessageBoard(), MessageBoard()
    first.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "a")
    first.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "b")

    assert second.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "c").id == 1


def test_append_stamps_utc_time(board):
    before = datetime.now(timezone.utc)
    message = board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "a")

    assert message.created_at.tzinfo is not None
    assert before - timedelta(seconds=1) <= message.created_at <= datetime.now(timezone.utc)


def test_messages_are_immutable(board):
    message = board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        message.content = "changed"


def test_all_returns_a_snapshot(board):
    board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "a")
    view = board.all()
    board.append("uiux", MessageCategory.UIUX_SPEC, "b")

    assert isinstance(view, tuple)
    assert len(view) == 1
    assert len(board) == 2


def test_append_rejects_unknown_category(board):
    with pytest.raises(BoardError):
        board.append(USER_AUTHOR, "feature-request", "a")
    assert len(board) == 0


def test_append_rejects_empty_author(board):
    with pytest.raises(BoardError):
        board.append("", MessageCategory.FEATURE_REQUEST, "a")


def test_latest_and_author_queries(board):
    board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "old request")
    spec = board.append("uiux", MessageCategory.UIUX_SPEC, "spec")
    newest = board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "new request")
    revised = board.append("uiux", MessageCategory.UIUX_SPEC, "spec v2")

    assert board.latest(MessageCategory.FEATURE_REQUEST) is newest
    assert board.latest(MessageCategory.BACKEND_PLAN) is None
    assert board.authored_by("uiux") == [spec, revised]
    assert board.authored_by(USER_AUTHOR, MessageCategory.UIUX_SPEC) == []
    assert board.latest_by("uiux", MessageCategory.UIUX_SPEC) is revised
    assert board.latest_by("frontend", MessageCategory.UIUX_SPEC) is None
    assert board.get(spec.id) is spec
    assert board.get(99) is None


def test_blackboard_keeps_highest_id_even_out_of_order(board):
    blackboard = Blackboard()
    older = board.append("uiux", MessageCategory.UIUX_SPEC, "v1")
    newer = board.append("uiux", MessageCategory.UIUX_SPEC, "v2")

    assert blackboard.update(newer) is True
    assert blackboard.update(older) is False
    assert blackboard.lookup(MessageCategory.UIUX_SPEC) is newer


def test_blackboard_lookup_absent_category():
    blackboard = Blackboard()

    assert blackboard.lookup(MessageCategory.FRONTEND_PLAN) is None
    assert MessageCategory.FRONTEND_PLAN not in blackboard


def test_resolve_falls_back_to_board_scan(board):
    blackboard = Blackboard()
    request = board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "never indexed")

    assert blackboard.lookup(MessageCategory.FEATURE_REQUEST) is None
    assert blackboard.resolve(board, MessageCategory.FEATURE_REQUEST) is request


def test_index_matches_full_scan_after_every_append(board):
    blackboard = Blackboard()
    sequence = [
        (USER_AUTHOR, MessageCategory.FEATURE_REQUEST),
        ("uiux", MessageCategory.UIUX_SPEC),
        ("frontend", MessageCategory.FRONTEND_PLAN),
        ("uiux", MessageCategory.UIUX_SPEC),
        ("backend", MessageCategory.BACKEND_PLAN),
        (USER_AUTHOR, MessageCategory.FEATURE_REQUEST),
    ]

    for author, category in sequence:
        blackboard.update(board.append(author, category, f"{author} {category.value}"))
        for cat in MessageCategory:
            scanned = next((m for m in reversed(board.all()) if m.category == cat), None)
            assert blackboard.lookup(cat) is scanned


def test_snapshot_is_a_copy(board):
    blackboard = Blackboard()
    message = board.append(USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "a")
    blackboard.update(message)

    snapshot = blackboard.snapshot()
    snapshot.clear()

    assert blackboard.lookup(MessageCategory.FEATURE_REQUEST) is message


def test_board_message_to_dict():
    created = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    message = BoardMessage(1, USER_AUTHOR, MessageCategory.FEATURE_REQUEST, "hi", created)

    assert message.to_dict() == {
        "id": 1,
        "author": "user",
        "category": "feature-request",
        "content": "hi",
        "created_at": "2024-01-15T10:30:00+00:00",
    }
