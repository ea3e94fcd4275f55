"""Bulk JSON import endpoints."""

import logging

from fastapi import APIRouter, status

from trackboard.api.dependencies import StateStoreDep
from trackboard.api.models import (
    APIResponse,
    ImportRequest,
    ImportResponse,
    ImportStatsResponse,
    import_to_response,
)
from trackboard.importer import reconcile
from trackboard.logging import import_excerpt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])


@router.post("/preview", response_model=APIResponse[ImportStatsResponse])
def preview_import(request: ImportRequest) -> APIResponse[ImportStatsResponse]:
    """Count what an import would create without storing anything."""
    result = reconcile(request.raw_text, request.board_id)
    stats = result.stats
    return APIResponse(
        data=ImportStatsResponse(boards=stats.boards, sprints=stats.sprints, tickets=stats.tickets)
    )


@router.post(
    "",
    response_model=APIResponse[ImportResponse],
    status_code=status.HTTP_201_CREATED,
)
def commit_import(request: ImportRequest, store: StateStoreDep) -> APIResponse[ImportResponse]:
    """Reconcile an import document and insert the resulting batch."""
    logger.debug(
        "Import requested (board=%s, %d chars): %s",
        request.board_id,
        len(request.raw_text),
        import_excerpt(request.raw_text),
    )
    result = reconcile(request.raw_text, request.board_id)
    store.import_batch(result)
    return APIResponse(data=import_to_response(result))
