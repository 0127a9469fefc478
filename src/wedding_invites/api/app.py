"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wedding_invites.api.admin import router as admin_router
from wedding_invites.api.editor import router as editor_router
from wedding_invites.app_logging import configure_logging
from wedding_invites.containers import AppContainer
from wedding_invites.domain.errors import (
    BackendError,
    InvitationError,
    NotFoundError,
    SaveBlockedError,
    UploadError,
    ValidationError,
)
from wedding_invites.domain.invitations import DraftRecord


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(editor_router)

    @app.exception_handler(InvitationError)
    async def invitation_error_handler(
        request: Request, exc: InvitationError
    ) -> JSONResponse:
        if isinstance(exc, ValidationError):
            return JSONResponse(
                status_code=422,
                content={"detail": str(exc), "missing_fields": exc.missing_fields},
            )
        if isinstance(exc, NotFoundError):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
            )
        if isinstance(exc, SaveBlockedError):
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT, content={"detail": exc.reason}
            )
        if isinstance(exc, UploadError | BackendError):
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
            )
        logger.exception("Unhandled invitation error on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/invitations/{slug}")
    async def public_invitation(slug: str, request: Request) -> dict[str, object]:
        """Return a published invitation for its public page."""
        state_container: AppContainer = request.app.state.container
        record = state_container.invitation_service.get_published(slug)
        return {"id": str(record.id), **DraftRecord.from_record(record).to_payload()}

    return app
