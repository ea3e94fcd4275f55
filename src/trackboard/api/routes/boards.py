"""Board endpoints."""

from fastapi import APIRouter, status

from trackboard.api.dependencies import StateStoreDep
from trackboard.api.models import (
    APIResponse,
    BoardResponse,
    SprintResponse,
    TicketResponse,
    board_to_response,
    sprint_to_response,
    ticket_to_response,
)

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("", response_model=APIResponse[list[BoardResponse]])
def list_boards(store: StateStoreDep) -> APIResponse[list[BoardResponse]]:
    """List all boards."""
    boards = store.list_boards()
    return APIResponse(data=[board_to_response(b) for b in boards])


@router.get("/{board_id}", response_model=APIResponse[BoardResponse])
def get_board(board_id: str, store: StateStoreDep) -> APIResponse[BoardResponse]:
    """Get a board by ID."""
    board = store.get_board(board_id)
    return APIResponse(data=board_to_response(board))


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_board(board_id: str, store: StateStoreDep) -> None:
    """Delete a board with its sprints and tickets."""
    store.delete_board(board_id)


@router.get("/{board_id}/sprints", response_model=APIResponse[list[SprintResponse]])
def list_board_sprints(board_id: str, store: StateStoreDep) -> APIResponse[list[SprintResponse]]:
    """List the sprints of a board."""
    # Raises BoardNotFoundError for unknown boards
    store.get_board(board_id)
    sprints = store.list_sprints(board_id=board_id)
    return APIResponse(data=[sprint_to_response(s) for s in sprints])


@router.get("/{board_id}/tickets", response_model=APIResponse[list[TicketResponse]])
def list_board_tickets(
    board_id: str, store: StateStoreDep, sprint_id: str | None = None
) -> APIResponse[list[TicketResponse]]:
    """List the tickets of a board, optionally only those in one sprint."""
    store.get_board(board_id)
    tickets = store.list_tickets(board_id=board_id, sprint_id=sprint_id)
    return APIResponse(data=[ticket_to_response(t) for t in tickets])
