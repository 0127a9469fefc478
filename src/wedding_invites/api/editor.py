"""Invitation editor endpoints backed by in-memory editor sessions."""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Body,
    Depends,
    File,
    HTTPException,
    Request,
    UploadFile,
    status,
)

from wedding_invites.api.admin import require_admin
from wedding_invites.api.models import (
    FieldsPatch,
    ItemCreated,
    MoveRequest,
    OpenEditorRequest,
    SaveResult,
)
from wedding_invites.domain.invitations import Ceremony, CollectionName, FamilyMember
from wedding_invites.services.uploads import ImageBlob

if TYPE_CHECKING:
    from wedding_invites.containers import AppContainer
    from wedding_invites.services.editor import EditorSession

router = APIRouter(
    prefix="/admin/editor", tags=["editor"], dependencies=[Depends(require_admin)]
)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _session(request: Request, session_id: UUID) -> EditorSession:
    session = _container(request).editor_sessions.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Editor session not found"
        )
    return session


def _item_type(which: CollectionName) -> type[FamilyMember] | type[Ceremony]:
    return Ceremony if which is CollectionName.CEREMONIES else FamilyMember


def _checked_values(which: CollectionName, values: dict[str, str]) -> dict[str, str]:
    allowed = {item.name for item in fields(_item_type(which))}
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown item fields: {', '.join(unknown)}",
        )
    return values


def _require_key(session: EditorSession, which: CollectionName, key: int) -> None:
    if key not in session.collection(which):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Collection item not found"
        )


async def _to_blob(upload: UploadFile) -> ImageBlob:
    return ImageBlob(
        filename=upload.filename or "upload",
        content=await upload.read(),
        content_type=upload.content_type,
    )


def _session_view(session_id: UUID, session: EditorSession) -> dict[str, object]:
    draft = session.draft
    return {
        "session_id": str(session_id),
        "mode": session.mode.value,
        "invitation_id": str(session.invitation_id) if session.invitation_id else None,
        "upload_pending": session.upload_pending,
        "save_pending": session.save_pending,
        "last_saved_id": str(session.last_saved_id) if session.last_saved_id else None,
        "last_save_error": (
            str(session.last_save_error) if session.last_save_error else None
        ),
        "fields": dict(vars(draft.fields)),
        "groom_family": [
            {"key": key, **member.to_payload()}
            for key, member in draft.groom_family.entries()
        ],
        "bride_family": [
            {"key": key, **member.to_payload()}
            for key, member in draft.bride_family.entries()
        ],
        "ceremonies": [
            {"key": key, **vars(ceremony)}
            for key, ceremony in draft.ceremonies.entries()
        ],
        "gallery_images": list(draft.gallery_images),
        "love_story_images": list(draft.love_story_images),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def open_editor(
    request: Request, body: OpenEditorRequest | None = None
) -> dict[str, object]:
    """Open an editor session in create or edit mode."""
    container = _container(request)
    invitation_id = body.invitation_id if body else None
    if invitation_id is None:
        session = container.editor_service.new_session()
    else:
        session = container.editor_service.open_session(invitation_id)
    session_id = container.editor_sessions.add(session)
    return _session_view(session_id, session)


@router.get("/{session_id}")
async def get_editor(session_id: UUID, request: Request) -> dict[str, object]:
    """Return the current draft with item keys and pending flags."""
    return _session_view(session_id, _session(request, session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_editor(session_id: UUID, request: Request) -> None:
    """Discard a session and its unsaved draft."""
    _container(request).editor_sessions.discard(session_id)


@router.patch("/{session_id}/fields")
async def patch_fields(
    session_id: UUID, patch: FieldsPatch, request: Request
) -> dict[str, object]:
    """Apply flat field edits."""
    session = _session(request, session_id)
    for name, value in patch.model_dump(exclude_unset=True).items():
        session.set_field(name, value)
    return _session_view(session_id, session)


@router.post(
    "/{session_id}/collections/{which}", status_code=status.HTTP_201_CREATED
)
async def insert_item(
    session_id: UUID,
    which: CollectionName,
    request: Request,
    values: dict[str, str] | None = Body(default=None),
) -> ItemCreated:
    """Append an item to a collection."""
    session = _session(request, session_id)
    item = _item_type(which)(**_checked_values(which, values or {}))
    return ItemCreated(key=session.collection(which).insert(item))


@router.patch("/{session_id}/collections/{which}/{key}")
async def update_item(
    session_id: UUID,
    which: CollectionName,
    key: int,
    request: Request,
    values: dict[str, str] = Body(...),
) -> dict[str, object]:
    """Merge field values into one item."""
    session = _session(request, session_id)
    _require_key(session, which, key)
    session.collection(which).update(key, **_checked_values(which, values))
    return _session_view(session_id, session)


@router.delete(
    "/{session_id}/collections/{which}/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_item(
    session_id: UUID, which: CollectionName, key: int, request: Request
) -> None:
    """Remove one item; unknown keys are ignored."""
    _session(request, session_id).collection(which).remove(key)


@router.post("/{session_id}/collections/{which}/{key}/move")
async def move_item(
    session_id: UUID,
    which: CollectionName,
    key: int,
    move: MoveRequest,
    request: Request,
) -> dict[str, object]:
    """Move one item to a new position."""
    session = _session(request, session_id)
    _require_key(session, which, key)
    session.collection(which).move(key, move.position)
    return _session_view(session_id, session)


@router.post("/{session_id}/collections/ceremonies/{key}/image")
async def upload_ceremony_image(
    session_id: UUID,
    key: int,
    request: Request,
    file: UploadFile = File(...),
) -> dict[str, str]:
    """Upload an image for a ceremony."""
    session = _session(request, session_id)
    _require_key(session, CollectionName.CEREMONIES, key)
    blob = await _to_blob(file)
    url = await session.attach_image(CollectionName.CEREMONIES, key, blob)
    return {"image_url": url}


@router.post("/{session_id}/cover")
async def upload_cover_image(
    session_id: UUID, request: Request, file: UploadFile = File(...)
) -> dict[str, str]:
    """Upload the cover image."""
    session = _session(request, session_id)
    url = await session.attach_cover_image(await _to_blob(file))
    return {"cover_image_url": url}


@router.post("/{session_id}/gallery")
async def upload_gallery_images(
    session_id: UUID, request: Request, files: list[UploadFile] = File(...)
) -> dict[str, list[str]]:
    """Upload several gallery images at once."""
    session = _session(request, session_id)
    blobs = [await _to_blob(upload) for upload in files]
    urls = await session.add_gallery_images(blobs)
    return {"gallery_images": urls}


@router.delete(
    "/{session_id}/gallery/{index}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_gallery_image(session_id: UUID, index: int, request: Request) -> None:
    """Remove one gallery image by index."""
    _session(request, session_id).remove_gallery_image(index)


@router.post("/{session_id}/save")
async def save_draft(session_id: UUID, request: Request) -> SaveResult:
    """Write the whole draft in one create or update."""
    session = _session(request, session_id)
    return SaveResult(invitation_id=await session.save())
