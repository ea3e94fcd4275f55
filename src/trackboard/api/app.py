"""FastAPI application setup."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trackboard import __version__
from trackboard.api.dependencies import close_state_store, init_state_store
from trackboard.api.models import APIResponse
from trackboard.api.routes import boards, imports, tickets
from trackboard.importer import ImportParseError
from trackboard.state_store import (
    BoardNotFoundError,
    ImportConflictError,
    InvalidImportError,
    SprintNotFoundError,
    StateStoreError,
    TicketNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

DEFAULT_DB_PATH = "trackboard.db"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    init_state_store(app.state.db_path)
    yield
    close_state_store()


def create_app(db_path: str | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite database path. Defaults to TRACKBOARD_DB_PATH or
                 'trackboard.db'.
    """
    app = FastAPI(
        title="Trackboard API",
        description="REST API for Trackboard - boards, sprints, tickets and bulk import",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.db_path = db_path or os.environ.get("TRACKBOARD_DB_PATH", DEFAULT_DB_PATH)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(boards.router, prefix="/api/v1")
    app.include_router(tickets.router, prefix="/api/v1")
    app.include_router(imports.router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map importer and store errors to API responses."""

    @app.exception_handler(ImportParseError)
    async def import_parse_error_handler(_request: Request, exc: ImportParseError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, f"Invalid JSON: {exc}")

    @app.exception_handler(BoardNotFoundError)
    async def board_not_found_handler(
        _request: Request, _exc: BoardNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Board not found")

    @app.exception_handler(SprintNotFoundError)
    async def sprint_not_found_handler(
        _request: Request, _exc: SprintNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Sprint not found")

    @app.exception_handler(TicketNotFoundError)
    async def ticket_not_found_handler(
        _request: Request, _exc: TicketNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Ticket not found")

    @app.exception_handler(InvalidImportError)
    async def invalid_import_handler(_request: Request, exc: InvalidImportError) -> JSONResponse:
        return _error(422, str(exc))

    @app.exception_handler(ImportConflictError)
    async def import_conflict_handler(
        _request: Request, _exc: ImportConflictError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Import conflicts with existing data")

    @app.exception_handler(StateStoreError)
    async def state_store_error_handler(_request: Request, _exc: StateStoreError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn  # noqa: PLC0415

    from trackboard.logging import setup_logging  # noqa: PLC0415

    setup_logging()
    uvicorn.run(
        create_app(),
        host=os.environ.get("TRACKBOARD_HOST", "127.0.0.1"),
        port=int(os.environ.get("TRACKBOARD_PORT", "8000")),
    )


# Default app instance
app = create_app()
