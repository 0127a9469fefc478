"""Invitation editor sessions: draft editing and atomic save."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from functools import partial
from uuid import UUID

from wedding_invites.domain.collections import OrderedCollection
from wedding_invites.domain.errors import (
    BackendError,
    InvitationError,
    NotFoundError,
    SaveBlockedError,
    ValidationError,
)
from wedding_invites.domain.gestures import ReorderGesture
from wedding_invites.domain.invitations import (
    FIELD_NAMES,
    CollectionName,
    DraftRecord,
    normalize_date,
    normalize_slug,
)
from wedding_invites.services.attachments import ImageAttachmentWorkflow
from wedding_invites.services.invitations import InvitationRepository
from wedding_invites.services.uploads import ImageBlob, UploadGateway

_logger = logging.getLogger(__name__)


class EditorMode(StrEnum):
    """Whether a save inserts a new row or overwrites an existing one."""

    CREATE = "create"
    EDIT = "edit"


@dataclass
class EditorSession:
    """Owns one draft for the lifetime of one editing visit."""

    repository: InvitationRepository
    attachments: ImageAttachmentWorkflow
    draft: DraftRecord = field(default_factory=DraftRecord)
    invitation_id: UUID | None = None
    last_saved_id: UUID | None = field(default=None, init=False)
    last_save_error: InvitationError | None = field(default=None, init=False)
    _saving: bool = field(default=False, init=False, repr=False)
    _gestures: dict[CollectionName, ReorderGesture] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def mode(self) -> EditorMode:
        return EditorMode.CREATE if self.invitation_id is None else EditorMode.EDIT

    @property
    def upload_pending(self) -> bool:
        return self.attachments.pending > 0

    @property
    def save_pending(self) -> bool:
        return self._saving

    def set_field(self, name: str, value: object) -> None:
        """Set a flat draft field; validation waits until save."""
        if name not in FIELD_NAMES:
            raise ValueError(f"Unknown invitation field: {name}")
        if name == "is_published":
            value = bool(value)
        elif name == "slug":
            value = normalize_slug(str(value or ""))
        elif name == "wedding_date":
            value = normalize_date(value)
        else:
            value = "" if value is None else str(value)
        setattr(self.draft.fields, name, value)

    def collection(self, which: CollectionName | str) -> OrderedCollection:
        """Return the named ordered collection of the draft."""
        return self.draft.collection(which)

    def reorder(self, which: CollectionName | str) -> ReorderGesture:
        """Return the drag gesture bound to the named collection."""
        name = CollectionName(which)
        gesture = self._gestures.get(name)
        if gesture is None:
            gesture = ReorderGesture(self.draft.collection(name))
            self._gestures[name] = gesture
        return gesture

    async def attach_image(
        self, which: CollectionName | str, key: int, blob: ImageBlob
    ) -> str:
        """Upload an image for one ceremony, addressed by key."""
        if CollectionName(which) is not CollectionName.CEREMONIES:
            raise ValueError(f"Items of {which} have no image")
        if key not in self.collection(which):
            raise ValueError(f"Unknown item key: {key}")
        return await self.attachments.attach(self.collection(which), key, blob)

    async def attach_cover_image(self, blob: ImageBlob) -> str:
        """Upload and set the cover image."""
        return await self.attachments.attach_cover(self.draft, blob)

    async def add_gallery_images(self, blobs: list[ImageBlob]) -> list[str]:
        """Upload several gallery images concurrently."""
        return await self.attachments.add_to_gallery(self.draft, blobs)

    def remove_gallery_image(self, index: int) -> None:
        """Drop a gallery image by index; out-of-range indices are ignored."""
        if 0 <= index < len(self.draft.gallery_images):
            del self.draft.gallery_images[index]

    async def save(self) -> UUID:
        """Validate and write the whole draft in a single create or update.

        Only one save runs at a time. The outcome of the latest finished write
        stays readable through ``last_saved_id`` and ``last_save_error``.
        """
        if self._saving:
            raise SaveBlockedError("A save is already in progress")
        if self.upload_pending:
            raise SaveBlockedError("Wait for image uploads to finish before saving")
        missing = self.draft.missing_required_fields()
        if missing:
            raise ValidationError(missing)

        payload = self.draft.to_payload()
        loop = asyncio.get_running_loop()
        self._saving = True
        try:
            if self.invitation_id is None:
                invitation_id = await loop.run_in_executor(
                    None, partial(self.repository.create_invitation, payload)
                )
            else:
                invitation_id = self.invitation_id
                await loop.run_in_executor(
                    None,
                    partial(self.repository.update_invitation, invitation_id, payload),
                )
        except InvitationError as exc:
            _logger.warning("Invitation save failed: slug=%s", payload["slug"])
            self.last_save_error = exc
            raise
        except Exception as exc:
            _logger.warning("Invitation save failed: slug=%s", payload["slug"])
            error = BackendError("Failed to save invitation")
            self.last_save_error = error
            raise error from exc
        finally:
            self._saving = False

        _logger.info(
            "Invitation saved: id=%s mode=%s slug=%s",
            invitation_id,
            self.mode,
            payload["slug"],
        )
        self.invitation_id = invitation_id
        self.last_saved_id = invitation_id
        self.last_save_error = None
        return invitation_id


@dataclass
class EditorService:
    """Opens editor sessions in create or edit mode."""

    repository: InvitationRepository
    upload_gateway: UploadGateway

    def new_session(self) -> EditorSession:
        """Start a session with an empty draft."""
        return EditorSession(
            repository=self.repository,
            attachments=ImageAttachmentWorkflow(self.upload_gateway),
        )

    def load_draft(self, invitation_id: UUID) -> DraftRecord:
        """Fetch an invitation once and hydrate a draft from it."""
        try:
            record = self.repository.get_invitation(invitation_id)
        except Exception as exc:
            raise BackendError(f"Failed to load invitation {invitation_id}") from exc
        if record is None:
            raise NotFoundError(f"Invitation {invitation_id} not found")
        return DraftRecord.from_record(record)

    def open_session(self, invitation_id: UUID) -> EditorSession:
        """Start a session editing an existing invitation."""
        draft = self.load_draft(invitation_id)
        _logger.info("Editor session opened: id=%s", invitation_id)
        return EditorSession(
            repository=self.repository,
            attachments=ImageAttachmentWorkflow(self.upload_gateway),
            draft=draft,
            invitation_id=invitation_id,
        )
