"""StateStore - Main API for State Store operations."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from trackboard.state_store.database import Database
from trackboard.state_store.exceptions import (
    BoardNotFoundError,
    ImportConflictError,
    InvalidImportError,
    SprintNotFoundError,
    TicketNotFoundError,
)
from trackboard.state_store.models import Board, Sprint, Ticket

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from trackboard.importer import ImportResult, ImportStats

logger = logging.getLogger(__name__)


class StateStore:
    """Main API for State Store operations.

    Provides CRUD operations for Boards, Sprints and Tickets, and the
    insert-only bulk path used by JSON imports.
    """

    def __init__(self, db_path: str = "trackboard.db") -> None:
        """Initialize State Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Board Operations ---

    def create_board(
        self,
        name: str,
        key: str,
        type: str = "kanban",
        columns: list[dict[str, Any]] | None = None,
    ) -> Board:
        """Create a new board.

        Args:
            name: Human-readable board name
            key: Short project code, e.g. "PROJ"
            type: "scrum" or "kanban"
            columns: Workflow columns as {"id", "title", "limit"} dicts

        Returns:
            Created Board object with generated ID
        """
        with self._db.transaction() as session:
            board = Board(name=name, key=key, type=type, columns=columns)
            session.add(board)
        return board

    def get_board(self, board_id: str) -> Board:
        """Get board by ID.

        Raises:
            BoardNotFoundError: If board doesn't exist
        """
        session = self._db.get_session()
        try:
            board = session.get(Board, board_id)
            if board is None:
                raise BoardNotFoundError(f"Board with id '{board_id}' not found")
            return board
        finally:
            session.close()

    def list_boards(self) -> list[Board]:
        """List all boards, ordered by name."""
        session = self._db.get_session()
        try:
            stmt = select(Board).order_by(Board.name)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def delete_board(self, board_id: str) -> None:
        """Delete a board together with its sprints and tickets.

        Raises:
            BoardNotFoundError: If board doesn't exist
        """
        with self._db.transaction() as session:
            board = session.get(Board, board_id)
            if board is None:
                raise BoardNotFoundError(f"Board with id '{board_id}' not found")
            session.delete(board)
        logger.info("Deleted board %s", board_id)

    # --- Sprint Operations ---

    def create_sprint(
        self,
        board_id: str,
        name: str,
        status: str = "future",
        goal: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> Sprint:
        """Create a new sprint on a board.

        Raises:
            BoardNotFoundError: If board doesn't exist
        """
        with self._db.transaction() as session:
            self._require_board(session, board_id)
            sprint = Sprint(
                board_id=board_id,
                name=name,
                status=status,
                goal=goal,
                start_date=start_date,
                end_date=end_date,
            )
            session.add(sprint)
        return sprint

    def get_sprint(self, sprint_id: str) -> Sprint:
        """Get sprint by ID.

        Raises:
            SprintNotFoundError: If sprint doesn't exist
        """
        session = self._db.get_session()
        try:
            sprint = session.get(Sprint, sprint_id)
            if sprint is None:
                raise SprintNotFoundError(f"Sprint with id '{sprint_id}' not found")
            return sprint
        finally:
            session.close()

    def list_sprints(self, board_id: str | None = None) -> list[Sprint]:
        """List sprints, optionally limited to one board, ordered by name."""
        session = self._db.get_session()
        try:
            stmt = select(Sprint)
            if board_id is not None:
                stmt = stmt.where(Sprint.board_id == board_id)
            stmt = stmt.order_by(Sprint.name)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    # --- Ticket Operations ---

    def create_ticket(
        self,
        board_id: str,
        title: str,
        sprint_id: str | None = None,
        parent_id: str | None = None,
        **fields: Any,
    ) -> Ticket:
        """Create a new ticket.

        Args:
            board_id: Board the ticket belongs to
            title: Ticket title
            sprint_id: Optional sprint the ticket is planned into
            parent_id: Optional parent (usually an Epic)
            **fields: Remaining Ticket columns (description, status, type, ...)

        Returns:
            Created Ticket object with generated ID

        Raises:
            BoardNotFoundError: If board doesn't exist
            SprintNotFoundError: If sprint_id is given but doesn't exist
            TicketNotFoundError: If parent_id is given but doesn't exist
        """
        with self._db.transaction() as session:
            self._require_board(session, board_id)
            if sprint_id is not None and session.get(Sprint, sprint_id) is None:
                raise SprintNotFoundError(f"Sprint with id '{sprint_id}' not found")
            if parent_id is not None and session.get(Ticket, parent_id) is None:
                raise TicketNotFoundError(f"Parent ticket with id '{parent_id}' not found")
            ticket = Ticket(
                board_id=board_id,
                title=title,
                sprint_id=sprint_id,
                parent_id=parent_id,
                **fields,
            )
            session.add(ticket)
        return ticket

    def get_ticket(self, ticket_id: str) -> Ticket:
        """Get ticket by ID.

        Raises:
            TicketNotFoundError: If ticket doesn't exist
        """
        session = self._db.get_session()
        try:
            ticket = session.get(Ticket, ticket_id)
            if ticket is None:
                raise TicketNotFoundError(f"Ticket with id '{ticket_id}' not found")
            return ticket
        finally:
            session.close()

    def list_tickets(
        self, board_id: str | None = None, sprint_id: str | None = None
    ) -> list[Ticket]:
        """List tickets, optionally filtered by board and/or sprint."""
        session = self._db.get_session()
        try:
            stmt = select(Ticket)
            if board_id is not None:
                stmt = stmt.where(Ticket.board_id == board_id)
            if sprint_id is not None:
                stmt = stmt.where(Ticket.sprint_id == sprint_id)
            stmt = stmt.order_by(Ticket.created_at, Ticket.title)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def delete_ticket(self, ticket_id: str) -> None:
        """Delete a ticket. Its children lose their parent link.

        Raises:
            TicketNotFoundError: If ticket doesn't exist
        """
        with self._db.transaction() as session:
            ticket = session.get(Ticket, ticket_id)
            if ticket is None:
                raise TicketNotFoundError(f"Ticket with id '{ticket_id}' not found")
            session.delete(ticket)

    # --- Import Operations ---

    def import_batch(self, result: ImportResult) -> ImportStats:
        """Insert a reconciled import batch in a single transaction.

        Boards are inserted first, then sprints, then tickets. Nothing is
        updated or deleted; if any row fails, none are stored.

        Args:
            result: Output of trackboard.importer.reconcile

        Returns:
            Counts of the inserted entities

        Raises:
            InvalidImportError: If a ticket has no board
            BoardNotFoundError: If a sprint or ticket names a board that is
                neither in the batch nor in the store
            ImportConflictError: If the batch collides with existing rows
        """
        batch_board_ids = {board.id for board in result.boards}
        try:
            with self._db.transaction() as session:
                for sprint in result.sprints:
                    self._require_import_board(session, sprint.board_id, batch_board_ids)
                for ticket in result.tickets:
                    if ticket.board_id is None:
                        raise InvalidImportError(
                            f"Ticket '{ticket.title}' has no board; select a board first"
                        )
                    self._require_import_board(session, ticket.board_id, batch_board_ids)

                session.add_all(
                    Board(
                        id=board.id,
                        name=board.name,
                        key=board.key,
                        type=board.type.value,
                        columns=[asdict(column) for column in board.columns],
                    )
                    for board in result.boards
                )
                session.flush()
                session.add_all(
                    Sprint(
                        id=sprint.id,
                        board_id=sprint.board_id,
                        name=sprint.name,
                        status=sprint.status.value,
                        goal=sprint.goal,
                        start_date=sprint.start_date,
                        end_date=sprint.end_date,
                    )
                    for sprint in result.sprints
                )
                session.flush()
                session.add_all(
                    Ticket(
                        id=ticket.id,
                        board_id=ticket.board_id,
                        title=ticket.title,
                        sprint_id=ticket.sprint_id,
                        parent_id=ticket.parent_id,
                        description=ticket.description,
                        status=ticket.status,
                        type=ticket.type.value,
                        priority=ticket.priority.value,
                        story_points=ticket.story_points,
                        labels=list(ticket.labels),
                        is_flagged=ticket.is_flagged,
                        assignee_id=ticket.assignee_id,
                        created_at=ticket.created_at,
                    )
                    for ticket in result.tickets
                )
        except IntegrityError as e:
            raise ImportConflictError("Import batch conflicts with existing data") from e

        stats = result.stats
        logger.info(
            "Stored import: %d boards, %d sprints, %d tickets",
            stats.boards,
            stats.sprints,
            stats.tickets,
        )
        return stats

    # --- Helpers ---

    def _require_board(self, session: Session, board_id: str) -> None:
        if session.get(Board, board_id) is None:
            raise BoardNotFoundError(f"Board with id '{board_id}' not found")

    def _require_import_board(
        self, session: Session, board_id: str, batch_board_ids: set[str]
    ) -> None:
        if board_id not in batch_board_ids:
            self._require_board(session, board_id)
