"""Data models for Import Reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - used at runtime by dataclasses
from enum import StrEnum


class BoardType(StrEnum):
    """Workflow type of a board."""

    SCRUM = "scrum"
    KANBAN = "kanban"


class SprintStatus(StrEnum):
    """Lifecycle state of a sprint."""

    ACTIVE = "active"
    FUTURE = "future"
    CLOSED = "closed"


class TicketType(StrEnum):
    """Kind of work a ticket represents."""

    EPIC = "Epic"
    STORY = "Story"
    TASK = "Task"
    BUG = "Bug"


class TicketPriority(StrEnum):
    """Ticket priority."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@dataclass
class BoardColumn:
    """A workflow column on a board, with an optional WIP limit."""

    id: str
    title: str
    limit: int | None = None


@dataclass
class Board:
    """A board produced by an import."""

    id: str
    name: str
    key: str
    type: BoardType = BoardType.KANBAN
    columns: list[BoardColumn] = field(default_factory=list)


@dataclass
class Sprint:
    """A sprint produced by an import.

    Attributes:
        id: Generated sprint ID.
        board_id: Generated ID of the board the sprint was nested under.
        name: Sprint name.
        status: Lifecycle state.
        goal: Optional sprint goal, passed through as-is.
        start_date: Optional start date, passed through as-is.
        end_date: Optional end date, passed through as-is.
    """

    id: str
    board_id: str
    name: str
    status: SprintStatus = SprintStatus.FUTURE
    goal: str | None = None
    start_date: str | None = None
    end_date: str | None = None


@dataclass
class Ticket:
    """A ticket produced by an import.

    Attributes:
        id: Generated ticket ID.
        board_id: Resolved board ID, or None when no board context exists.
        sprint_id: Generated ID of a sprint from the same import, or None.
        title: Ticket title.
        description: Ticket description (markdown).
        status: Workflow status; free text since boards can define columns.
        type: Ticket type.
        priority: Ticket priority.
        story_points: Non-negative estimate, or None when absent or unparseable.
        labels: Distinct labels in first-seen order.
        is_flagged: Whether the ticket is flagged.
        parent_id: Generated ID of the parent ticket from the same import, or None.
        assignee_id: Always None; users are never imported.
        created_at: Time of import.
    """

    id: str
    board_id: str | None
    title: str
    created_at: datetime
    sprint_id: str | None = None
    description: str = ""
    status: str = "Todo"
    type: TicketType = TicketType.STORY
    priority: TicketPriority = TicketPriority.MEDIUM
    story_points: int | None = None
    labels: list[str] = field(default_factory=list)
    is_flagged: bool = False
    parent_id: str | None = None
    assignee_id: str | None = None


@dataclass(frozen=True)
class ImportStats:
    """Entity counts of an import batch, shown to the user before committing."""

    boards: int
    sprints: int
    tickets: int


@dataclass
class ImportResult:
    """A self-consistent batch of entities ready to be merged into the store."""

    boards: list[Board] = field(default_factory=list)
    sprints: list[Sprint] = field(default_factory=list)
    tickets: list[Ticket] = field(default_factory=list)

    @property
    def stats(self) -> ImportStats:
        """Counts matching the lengths of the entity lists."""
        return ImportStats(
            boards=len(self.boards),
            sprints=len(self.sprints),
            tickets=len(self.tickets),
        )
