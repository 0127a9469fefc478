"""In-memory registry of open editor sessions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from wedding_invites.services.editor import EditorSession


@dataclass
class _RegistryEntry:
    session: EditorSession
    expires_at: datetime


class EditorSessionRegistry:
    """Keeps editor sessions addressable between HTTP requests."""

    def __init__(self, ttl_seconds: int = 6 * 60 * 60) -> None:
        self._entries: dict[UUID, _RegistryEntry] = {}
        self._ttl = timedelta(seconds=ttl_seconds)

    def add(self, session: EditorSession) -> UUID:
        """Register a session and return its handle."""
        self._evict_expired()
        session_id = uuid4()
        self._entries[session_id] = _RegistryEntry(
            session=session, expires_at=datetime.now(tz=UTC) + self._ttl
        )
        return session_id

    def get(self, session_id: UUID) -> EditorSession | None:
        """Return an open session and extend its lifetime."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        now = datetime.now(tz=UTC)
        if now >= entry.expires_at:
            self._entries.pop(session_id, None)
            return None
        entry.expires_at = now + self._ttl
        return entry.session

    def discard(self, session_id: UUID) -> None:
        """Forget a session; its draft is dropped."""
        self._entries.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_expired(self) -> None:
        now = datetime.now(tz=UTC)
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]
