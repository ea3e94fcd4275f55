"""REST API for Trackboard."""

from trackboard.api.app import app, create_app
from trackboard.api.models import (
    APIResponse,
    BoardResponse,
    ImportRequest,
    ImportResponse,
    ImportStatsResponse,
    SprintResponse,
    TicketResponse,
)

__all__ = [
    "APIResponse",
    "BoardResponse",
    "ImportRequest",
    "ImportResponse",
    "ImportStatsResponse",
    "SprintResponse",
    "TicketResponse",
    "app",
    "create_app",
]
