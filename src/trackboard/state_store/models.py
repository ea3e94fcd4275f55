"""SQLAlchemy models for State Store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)

from trackboard.importer.models import BoardType, SprintStatus, TicketPriority, TicketType


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Board(Base):
    """Board model - a project container with workflow columns."""

    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    key: Mapped[str] = mapped_column(String(20), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    # List of {"id", "title", "limit"} dicts
    columns: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)

    # Relationships
    sprints: Mapped[list[Sprint]] = relationship(
        "Sprint", back_populates="board", cascade="all, delete-orphan"
    )
    tickets: Mapped[list[Ticket]] = relationship(
        "Ticket", back_populates="board", cascade="all, delete-orphan"
    )

    def __init__(
        self,
        name: str,
        key: str,
        id: str | None = None,
        type: str | None = None,
        columns: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.key = key
        self.type = type if type is not None else BoardType.KANBAN.value
        self.columns = columns if columns is not None else []

    @property
    def board_type(self) -> BoardType:
        """Get type as BoardType enum."""
        return BoardType(self.type)

    def __repr__(self) -> str:
        return f"<Board(id={self.id!r}, key={self.key!r}, name={self.name!r})>"


class Sprint(Base):
    """Sprint model - a time-boxed unit of work on one board."""

    __tablename__ = "sprints"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    board_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    goal: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    board: Mapped[Board] = relationship("Board", back_populates="sprints")

    def __init__(
        self,
        board_id: str,
        name: str,
        id: str | None = None,
        status: str | None = None,
        goal: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.board_id = board_id
        self.name = name
        self.status = status if status is not None else SprintStatus.FUTURE.value
        self.goal = goal
        self.start_date = start_date
        self.end_date = end_date

    @property
    def sprint_status(self) -> SprintStatus:
        """Get status as SprintStatus enum."""
        return SprintStatus(self.status)

    def __repr__(self) -> str:
        return f"<Sprint(id={self.id!r}, name={self.name!r}, status={self.status!r})>"


class Ticket(Base):
    """Ticket model - a unit of work on a board."""

    __tablename__ = "tickets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    board_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False
    )
    # Deferred so a batch may insert a child before its parent
    sprint_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("sprints.id", ondelete="SET NULL", deferrable=True, initially="DEFERRED"),
        nullable=True,
    )
    parent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("tickets.id", ondelete="SET NULL", deferrable=True, initially="DEFERRED"),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    priority: Mapped[str] = mapped_column(String(20), nullable=False)
    story_points: Mapped[int | None] = mapped_column(Integer, nullable=True)
    labels: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    is_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False)
    assignee_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    board: Mapped[Board] = relationship("Board", back_populates="tickets")

    def __init__(
        self,
        board_id: str,
        title: str,
        id: str | None = None,
        sprint_id: str | None = None,
        parent_id: str | None = None,
        description: str = "",
        status: str = "Todo",
        type: str | None = None,
        priority: str | None = None,
        story_points: int | None = None,
        labels: list[str] | None = None,
        is_flagged: bool = False,
        assignee_id: str | None = None,
        created_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.board_id = board_id
        self.title = title
        self.sprint_id = sprint_id
        self.parent_id = parent_id
        self.description = description
        self.status = status
        self.type = type if type is not None else TicketType.STORY.value
        self.priority = priority if priority is not None else TicketPriority.MEDIUM.value
        self.story_points = story_points
        self.labels = labels if labels is not None else []
        self.is_flagged = is_flagged
        self.assignee_id = assignee_id
        self.created_at = created_at if created_at is not None else datetime.now(UTC)

    @property
    def ticket_type(self) -> TicketType:
        """Get type as TicketType enum."""
        return TicketType(self.type)

    @property
    def ticket_priority(self) -> TicketPriority:
        """Get priority as TicketPriority enum."""
        return TicketPriority(self.priority)

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id!r}, title={self.title!r}, status={self.status!r})>"
