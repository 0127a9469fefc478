"""Admin dashboard endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from wedding_invites.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/invitations", dependencies=[Depends(require_admin)])
async def list_invitations(request: Request) -> dict[str, object]:
    """Return all invitations for the dashboard."""
    container: AppContainer = request.app.state.container
    return {"invitations": container.invitation_service.list_invitations()}


@router.delete(
    "/invitations/{invitation_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_invitation(invitation_id: UUID, request: Request) -> None:
    """Delete an invitation."""
    container: AppContainer = request.app.state.container
    container.invitation_service.delete_invitation(invitation_id)
