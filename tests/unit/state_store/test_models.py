"""Unit tests for State Store models."""

import pytest

from trackboard.importer import BoardType, SprintStatus, TicketPriority, TicketType
from trackboard.state_store.models import Board, Sprint, Ticket


@pytest.mark.unit
class TestBoardModel:
    """Tests for Board model."""

    def test_board_defaults(self) -> None:
        """Type defaults to kanban, columns to an empty list."""
        board = Board(name="Web", key="WEB")

        assert board.type == "kanban"
        assert board.board_type == BoardType.KANBAN
        assert board.columns == []
        assert len(board.id) == 36

    def test_board_explicit_id(self) -> None:
        """An explicit ID is kept (imports supply their own)."""
        assert Board(id="b-1", name="Web", key="WEB").id == "b-1"

    def test_board_repr(self) -> None:
        """Board has a useful repr."""
        text = repr(Board(id="b-1", name="Web", key="WEB"))
        assert "b-1" in text
        assert "WEB" in text


@pytest.mark.unit
class TestSprintModel:
    """Tests for Sprint model."""

    def test_sprint_defaults(self) -> None:
        """Status defaults to future."""
        sprint = Sprint(board_id="b-1", name="Sprint 1")

        assert sprint.status == "future"
        assert sprint.sprint_status == SprintStatus.FUTURE
        assert sprint.goal is None


@pytest.mark.unit
class TestTicketModel:
    """Tests for Ticket model."""

    def test_ticket_defaults(self) -> None:
        """Defaults match the import defaults."""
        ticket = Ticket(board_id="b-1", title="Task")

        assert ticket.status == "Todo"
        assert ticket.ticket_type == TicketType.STORY
        assert ticket.ticket_priority == TicketPriority.MEDIUM
        assert ticket.labels == []
        assert ticket.is_flagged is False
        assert ticket.parent_id is None
        assert ticket.created_at is not None

    def test_ticket_repr(self) -> None:
        """Ticket has a useful repr."""
        text = repr(Ticket(id="t-1", board_id="b-1", title="Task"))
        assert "t-1" in text
        assert "Task" in text
