"""Pydantic models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class OpenEditorRequest(BaseModel):
    """Open a create-mode session, or an edit-mode one for ``invitation_id``."""

    invitation_id: UUID | None = None


class FieldsPatch(BaseModel):
    """Flat field edits; only fields present in the body are applied."""

    model_config = ConfigDict(extra="forbid")

    slug: str | None = None
    groom_name: str | None = None
    bride_name: str | None = None
    wedding_date: date | str | None = None
    wedding_time: str | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    venue_map_link: str | None = None
    venue_map_embed_link: str | None = None
    cover_image_url: str | None = None
    love_story: str | None = None
    thank_you_message: str | None = None
    video_url: str | None = None
    is_published: bool | None = None


class MoveRequest(BaseModel):
    """Target position for a reorder."""

    position: int


class ItemCreated(BaseModel):
    """Key assigned to a newly inserted collection item."""

    key: int


class SaveResult(BaseModel):
    """Outcome of a successful save."""

    invitation_id: UUID
