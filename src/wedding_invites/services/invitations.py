"""Invitation lookup for public pages and the admin dashboard."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from wedding_invites.domain.errors import BackendError, NotFoundError
from wedding_invites.domain.invitations import InvitationRecord, InvitationSummary

_logger = logging.getLogger(__name__)


class InvitationRepository(Protocol):
    """Persistence interface for invitation records."""

    def create_invitation(self, payload: dict[str, object]) -> UUID:
        """Insert a new invitation row and return its id."""

    def update_invitation(
        self, invitation_id: UUID, payload: dict[str, object]
    ) -> None:
        """Overwrite an existing invitation row."""

    def get_invitation(self, invitation_id: UUID) -> InvitationRecord | None:
        """Return an invitation by id, if present."""

    def get_by_slug(
        self, slug: str, published_only: bool = True
    ) -> InvitationRecord | None:
        """Return an invitation by slug, if present."""

    def list_invitations(self) -> list[InvitationSummary]:
        """Return all invitations, newest first."""

    def delete_invitation(self, invitation_id: UUID) -> None:
        """Delete an invitation row."""


@dataclass
class InvitationService:
    """Read and housekeeping operations outside the editor."""

    repository: InvitationRepository

    def get_published(self, slug: str) -> InvitationRecord:
        """Resolve a public slug to its published invitation."""
        try:
            record = self.repository.get_by_slug(slug, published_only=True)
        except Exception as exc:
            raise BackendError(f"Failed to load invitation {slug!r}") from exc
        if record is None:
            raise NotFoundError(f"No published invitation for slug {slug!r}")
        return record

    def list_invitations(self) -> list[dict[str, object]]:
        """Return dashboard rows."""
        try:
            summaries = self.repository.list_invitations()
        except Exception as exc:
            raise BackendError("Failed to list invitations") from exc
        return [
            {
                "id": str(summary.id),
                "slug": summary.slug,
                "groom_name": summary.groom_name,
                "bride_name": summary.bride_name,
                "wedding_date": summary.wedding_date,
                "is_published": summary.is_published,
                "created_at": (
                    summary.created_at.isoformat() if summary.created_at else None
                ),
            }
            for summary in summaries
        ]

    def delete_invitation(self, invitation_id: UUID) -> None:
        """Delete an invitation by id."""
        try:
            self.repository.delete_invitation(invitation_id)
        except Exception as exc:
            raise BackendError(f"Failed to delete invitation {invitation_id}") from exc
        _logger.info("Invitation deleted: id=%s", invitation_id)
