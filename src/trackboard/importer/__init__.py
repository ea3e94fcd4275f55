"""Import Reconciler - Bulk JSON import of boards, sprints and tickets."""

from trackboard.importer.exceptions import ImporterError, ImportParseError
from trackboard.importer.models import (
    Board,
    BoardColumn,
    BoardType,
    ImportResult,
    ImportStats,
    Sprint,
    SprintStatus,
    Ticket,
    TicketPriority,
    TicketType,
)
from trackboard.importer.reconciler import generate_id, reconcile

__all__ = [
    "Board",
    "BoardColumn",
    "BoardType",
    "ImportParseError",
    "ImportResult",
    "ImportStats",
    "ImporterError",
    "Sprint",
    "SprintStatus",
    "Ticket",
    "TicketPriority",
    "TicketType",
    "generate_id",
    "reconcile",
]
