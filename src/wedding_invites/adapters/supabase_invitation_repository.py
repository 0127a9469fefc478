"""Supabase-backed invitation repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from wedding_invites.domain.errors import BackendError, NotFoundError
from wedding_invites.domain.invitations import InvitationRecord, InvitationSummary
from wedding_invites.services.invitations import InvitationRepository


@dataclass
class SupabaseInvitationRepository(InvitationRepository):
    """Supabase implementation for the ``invitations`` table."""

    client: Client

    def create_invitation(self, payload: dict[str, object]) -> UUID:
        """Insert an invitation row and return its id."""
        response = self.client.table("invitations").insert(payload).execute()
        if not response.data:
            raise BackendError("Failed to create invitation")
        return UUID(response.data[0]["id"])

    def update_invitation(
        self, invitation_id: UUID, payload: dict[str, object]
    ) -> None:
        """Overwrite an invitation row in one update."""
        response = (
            self.client.table("invitations")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(invitation_id))
            .execute()
        )
        if not response.data:
            raise NotFoundError(f"Invitation {invitation_id} no longer exists")

    def get_invitation(self, invitation_id: UUID) -> InvitationRecord | None:
        """Return an invitation by id, if present."""
        response = (
            self.client.table("invitations")
            .select("*")
            .eq("id", str(invitation_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return InvitationRecord.from_row(response.data[0])

    def get_by_slug(
        self, slug: str, published_only: bool = True
    ) -> InvitationRecord | None:
        """Return an invitation by slug, optionally only if published."""
        query = self.client.table("invitations").select("*").eq("slug", slug)
        if published_only:
            query = query.eq("is_published", True)
        response = query.limit(1).execute()
        if not response.data:
            return None
        return InvitationRecord.from_row(response.data[0])

    def list_invitations(self) -> list[InvitationSummary]:
        """Return dashboard summaries, newest first."""
        response = (
            self.client.table("invitations")
            .select(
                "id, slug, groom_name, bride_name, wedding_date, is_published, "
                "created_at"
            )
            .order("created_at", desc=True)
            .execute()
        )
        return [
            InvitationSummary(
                id=UUID(row["id"]),
                slug=row["slug"],
                groom_name=row["groom_name"],
                bride_name=row["bride_name"],
                wedding_date=str(row.get("wedding_date") or "")[:10],
                is_published=bool(row.get("is_published")),
                created_at=_parse_timestamp(row.get("created_at")),
            )
            for row in response.data or []
        ]

    def delete_invitation(self, invitation_id: UUID) -> None:
        """Delete an invitation row."""
        self.client.table("invitations").delete().eq("id", str(invitation_id)).execute()


def _parse_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
