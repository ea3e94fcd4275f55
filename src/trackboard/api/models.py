"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from trackboard.importer.models import BoardType, SprintStatus, TicketPriority, TicketType

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Board models


class BoardColumnResponse(BaseModel):
    """Response model for a board column."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    limit: int | None = None


class BoardResponse(BaseModel):
    """Response model for a board."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    key: str
    type: BoardType
    columns: list[BoardColumnResponse]


def board_to_response(board: Any) -> BoardResponse:
    """Convert a Board (stored or imported) to BoardResponse."""
    return BoardResponse.model_validate(board)


# Sprint models


class SprintResponse(BaseModel):
    """Response model for a sprint."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    board_id: str
    name: str
    status: SprintStatus
    goal: str | None
    start_date: str | None
    end_date: str | None


def sprint_to_response(sprint: Any) -> SprintResponse:
    """Convert a Sprint (stored or imported) to SprintResponse."""
    return SprintResponse.model_validate(sprint)


# Ticket models


class TicketResponse(BaseModel):
    """Response model for a ticket."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    board_id: str | None
    sprint_id: str | None
    parent_id: str | None
    title: str
    description: str
    status: str
    type: TicketType
    priority: TicketPriority
    story_points: int | None
    labels: list[str]
    is_flagged: bool
    assignee_id: str | None
    created_at: datetime


def ticket_to_response(ticket: Any) -> TicketResponse:
    """Convert a Ticket (stored or imported) to TicketResponse."""
    return TicketResponse.model_validate(ticket)


# Import models


class ImportRequest(BaseModel):
    """Request model for previewing or committing a JSON import."""

    raw_text: str = Field(..., description="JSON document with boards and/or tickets")
    board_id: str | None = Field(
        default=None, description="Active board, used for tickets without a board of their own"
    )


class ImportStatsResponse(BaseModel):
    """Response model for import entity counts."""

    model_config = ConfigDict(from_attributes=True)

    boards: int
    sprints: int
    tickets: int


class ImportResponse(BaseModel):
    """Response model for a committed import."""

    model_config = ConfigDict(from_attributes=True)

    boards: list[BoardResponse]
    sprints: list[SprintResponse]
    tickets: list[TicketResponse]
    stats: ImportStatsResponse


def import_to_response(result: Any) -> ImportResponse:
    """Convert an ImportResult to ImportResponse."""
    return ImportResponse.model_validate(result)
