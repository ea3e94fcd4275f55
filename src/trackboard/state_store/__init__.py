"""State Store - Persistent storage for boards, sprints and tickets."""

from trackboard.state_store.exceptions import (
    BoardNotFoundError,
    ImportConflictError,
    InvalidImportError,
    SprintNotFoundError,
    StateStoreError,
    TicketNotFoundError,
)
from trackboard.state_store.models import Board, Sprint, Ticket
from trackboard.state_store.store import StateStore

__all__ = [
    "Board",
    "BoardNotFoundError",
    "ImportConflictError",
    "InvalidImportError",
    "Sprint",
    "SprintNotFoundError",
    "StateStore",
    "StateStoreError",
    "Ticket",
    "TicketNotFoundError",
]
