"""Custom exceptions for State Store."""


class StateStoreError(Exception):
    """Base exception for State Store errors."""


class BoardNotFoundError(StateStoreError):
    """Board with given ID does not exist."""


class SprintNotFoundError(StateStoreError):
    """Sprint with given ID does not exist."""


class TicketNotFoundError(StateStoreError):
    """Ticket with given ID does not exist."""


class InvalidImportError(StateStoreError):
    """Import batch cannot be stored as-is (e.g. a ticket without a board)."""


class ImportConflictError(StateStoreError):
    """Import batch collides with rows already in the store."""
