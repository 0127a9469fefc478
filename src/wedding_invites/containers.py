"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from wedding_invites.adapters.supabase_invitation_repository import (
    SupabaseInvitationRepository,
)
from wedding_invites.adapters.supabase_storage_client import (
    HttpxSupabaseStorageClient,
)
from wedding_invites.config import Settings
from wedding_invites.services.editor import EditorService
from wedding_invites.services.invitations import InvitationService
from wedding_invites.services.registry import EditorSessionRegistry


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    invitation_service: InvitationService
    editor_service: EditorService
    editor_sessions: EditorSessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    invitation_repository = SupabaseInvitationRepository(supabase_client)
    storage_client = HttpxSupabaseStorageClient.create(
        supabase_url=resolved_settings.supabase_url,
        service_key=resolved_settings.supabase_service_key,
        bucket=resolved_settings.storage_bucket,
        timeout=resolved_settings.upload_timeout_seconds,
    )

    async def close_resources() -> None:
        await storage_client.close()

    return AppContainer(
        settings=resolved_settings,
        invitation_service=InvitationService(invitation_repository),
        editor_service=EditorService(
            repository=invitation_repository,
            upload_gateway=storage_client,
        ),
        editor_sessions=EditorSessionRegistry(
            ttl_seconds=resolved_settings.editor_session_ttl_seconds
        ),
        close_resources=close_resources,
    )
