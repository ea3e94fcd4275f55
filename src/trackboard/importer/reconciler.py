"""Import Reconciler - Turns a raw JSON document into a self-consistent batch.

Every entity gets a freshly generated ID, so importing the same document twice
never collides. IDs supplied in the document ("tokens") are only meaningful
inside that document; they are recorded in three token -> ID maps and used to
rewrite board, sprint and parent references.
"""

from __future__ import annotations

import json
import logging
import math
import re
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeVar

from trackboard.importer.exceptions import ImportParseError
from trackboard.importer.models import (
    Board,
    BoardColumn,
    BoardType,
    ImportResult,
    Sprint,
    SprintStatus,
    Ticket,
    TicketPriority,
    TicketType,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)

DEFAULT_BOARD_NAME = "Imported Project"
DEFAULT_BOARD_KEY = "IMP"
DEFAULT_SPRINT_NAME = "Imported Sprint"
DEFAULT_TICKET_TITLE = "Untitled Ticket"
DEFAULT_TICKET_STATUS = "Todo"
DEFAULT_COLUMN_TITLE = "Untitled"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Largest value an SQLite INTEGER column holds
MAX_STORY_POINTS = 2**63 - 1


def generate_id() -> str:
    """Generate a new random 128-bit ID."""
    return str(uuid.uuid4())


def reconcile(
    raw_text: str,
    fallback_board_id: str | None = None,
    *,
    id_factory: Callable[[], str] = generate_id,
    now: datetime | None = None,
) -> ImportResult:
    """Parse an import document and produce a batch of new entities.

    Args:
        raw_text: The JSON document as pasted by the user.
        fallback_board_id: Board active in the UI, used for tickets that carry
            no resolvable board reference of their own.
        id_factory: Generator for new entity IDs.
        now: Timestamp stamped on every ticket. Defaults to the current UTC time.

    Returns:
        ImportResult whose boards, sprints and tickets only reference each
        other (or fallback_board_id).

    Raises:
        ImportParseError: If raw_text is not valid JSON.
    """
    document = _parse(raw_text)
    created_at = now if now is not None else datetime.now(UTC)

    board_ids: dict[str, str] = {}
    sprint_ids: dict[str, str] = {}
    ticket_ids: dict[str, str] = {}
    result = ImportResult()

    # Nested tickets wait for the ticket stage, tagged with their board's token
    pending: list[tuple[str | None, dict[str, Any]]] = []

    for raw_board in _objects(document.get("boards")):
        board = _build_board(raw_board, id_factory)
        board_token = _token(raw_board.get("id"))
        if board_token is not None:
            board_ids[board_token] = board.id
        result.boards.append(board)

        for raw_sprint in _objects(raw_board.get("sprints")):
            sprint = _build_sprint(raw_sprint, board.id, id_factory)
            sprint_token = _token(raw_sprint.get("id"))
            if sprint_token is not None:
                sprint_ids[sprint_token] = sprint.id
            result.sprints.append(sprint)

        pending.extend((board_token, t) for t in _objects(raw_board.get("tickets")))

    pending.extend((None, t) for t in _objects(document.get("tickets")))

    # Pass 1: assign IDs; parent_id still holds the raw token
    for board_token, raw_ticket in pending:
        ticket = _build_ticket(raw_ticket, id_factory, created_at)
        ticket_token = _token(raw_ticket.get("id"))
        if ticket_token is not None:
            ticket_ids[ticket_token] = ticket.id

        ticket.board_id = _resolve_board_id(
            board_token,
            _token(raw_ticket.get("board_id")),
            board_ids,
            fallback_board_id,
            result.boards,
        )
        sprint_token = _token(raw_ticket.get("sprint_id"))
        ticket.sprint_id = sprint_ids.get(sprint_token) if sprint_token is not None else None
        ticket.parent_id = _token(raw_ticket.get("parent_id"))
        result.tickets.append(ticket)

    # Pass 2: parents may appear later in the list, so link only now
    orphaned = 0
    for ticket in result.tickets:
        if ticket.parent_id is None:
            continue
        parent_id = ticket_ids.get(ticket.parent_id)
        if parent_id is None or parent_id == ticket.id:
            orphaned += 1
            parent_id = None
        ticket.parent_id = parent_id

    stats = result.stats
    logger.info(
        "Reconciled import: %d boards, %d sprints, %d tickets",
        stats.boards,
        stats.sprints,
        stats.tickets,
    )
    if orphaned:
        logger.debug("Orphaned %d tickets whose parent is not in the import", orphaned)

    return result


def _parse(raw_text: str) -> dict[str, Any]:
    if not raw_text or not raw_text.strip():
        raise ImportParseError("Document is empty")
    try:
        document = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ImportParseError(f"{e.msg} (line {e.lineno}, column {e.colno})") from e
    except (ValueError, RecursionError) as e:
        # Oversized integer literals and nesting deeper than the decoder allows
        raise ImportParseError(str(e)) from e

    if not isinstance(document, dict):
        logger.info(
            "Import document is %s, not an object; nothing to import", type(document).__name__
        )
        return {}
    return document


def _resolve_board_id(
    board_token: str | None,
    own_token: str | None,
    board_ids: dict[str, str],
    fallback_board_id: str | None,
    boards: list[Board],
) -> str | None:
    """Pick a board by priority: enclosing board, own board_id, fallback, first board."""
    if board_token is not None and board_token in board_ids:
        return board_ids[board_token]
    if own_token is not None and own_token in board_ids:
        return board_ids[own_token]
    if fallback_board_id:
        return fallback_board_id
    if boards:
        return boards[0].id
    return None


def _build_board(raw: dict[str, Any], id_factory: Callable[[], str]) -> Board:
    return Board(
        id=id_factory(),
        name=_text(raw.get("name"), DEFAULT_BOARD_NAME),
        key=_text(raw.get("key"), DEFAULT_BOARD_KEY),
        type=_choice(raw.get("type"), BoardType, BoardType.KANBAN),
        columns=_columns(raw.get("columns"), id_factory),
    )


def _build_sprint(raw: dict[str, Any], board_id: str, id_factory: Callable[[], str]) -> Sprint:
    return Sprint(
        id=id_factory(),
        board_id=board_id,
        name=_text(raw.get("name"), DEFAULT_SPRINT_NAME),
        status=_choice(raw.get("status"), SprintStatus, SprintStatus.FUTURE),
        goal=_optional_text(raw.get("goal")),
        start_date=_optional_text(raw.get("start_date")),
        end_date=_optional_text(raw.get("end_date")),
    )


def _build_ticket(
    raw: dict[str, Any], id_factory: Callable[[], str], created_at: datetime
) -> Ticket:
    return Ticket(
        id=id_factory(),
        board_id=None,
        title=_text(raw.get("title"), DEFAULT_TICKET_TITLE),
        description=_optional_text(raw.get("description")) or "",
        status=_text(raw.get("status"), DEFAULT_TICKET_STATUS),
        type=_choice(raw.get("type"), TicketType, TicketType.STORY),
        priority=_choice(raw.get("priority"), TicketPriority, TicketPriority.MEDIUM),
        story_points=_story_points(raw.get("story_points")),
        labels=_labels(raw.get("labels")),
        is_flagged=bool(raw.get("is_flagged")),
        assignee_id=None,
        created_at=created_at,
    )


# --- Field coercion ---


def _objects(value: Any) -> list[dict[str, Any]]:
    """Keep only the object entries of a list; anything else is an empty list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _token(value: Any) -> str | None:
    """Normalize a document-local ID so that 1, 1.0 and "1" are the same token."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return None


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _choice(value: Any, enum_cls: type[E], default: E) -> E:
    """Match an enum value case-insensitively, falling back to default."""
    if not isinstance(value, str):
        return default
    wanted = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    return default


def _story_points(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        points = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        points = int(value)
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        try:
            points = int(match.group(1))
        except ValueError:
            # Beyond the interpreter's int conversion digit limit
            return None
    else:
        return None
    return points if 0 <= points <= MAX_STORY_POINTS else None


def _labels(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return list(dict.fromkeys(label for label in value if isinstance(label, str)))


def _columns(value: Any, id_factory: Callable[[], str]) -> list[BoardColumn]:
    columns = []
    for raw in _objects(value):
        limit = raw.get("limit")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            limit = None
        columns.append(
            BoardColumn(
                id=_token(raw.get("id")) or id_factory(),
                title=_text(raw.get("title"), DEFAULT_COLUMN_TITLE),
                limit=limit,
            )
        )
    return columns
