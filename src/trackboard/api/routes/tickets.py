"""Ticket endpoints."""

from fastapi import APIRouter

from trackboard.api.dependencies import StateStoreDep
from trackboard.api.models import APIResponse, TicketResponse, ticket_to_response

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("/{ticket_id}", response_model=APIResponse[TicketResponse])
def get_ticket(ticket_id: str, store: StateStoreDep) -> APIResponse[TicketResponse]:
    """Get a ticket by ID."""
    ticket = store.get_ticket(ticket_id)
    return APIResponse(data=ticket_to_response(ticket))
