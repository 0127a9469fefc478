"""Domain models for wedding invitations."""

import re
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from wedding_invites.domain.collections import OrderedCollection

REQUIRED_FIELDS = (
    "slug",
    "groom_name",
    "bride_name",
    "wedding_date",
    "wedding_time",
    "venue_name",
    "venue_address",
)

_SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9-]")


class CollectionName(StrEnum):
    """Ordered collections held by a draft."""

    GROOM_FAMILY = "groom_family"
    BRIDE_FAMILY = "bride_family"
    CEREMONIES = "ceremonies"


@dataclass(frozen=True)
class FamilyMember:
    """A family member listed under one side."""

    name: str = ""
    relation: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "FamilyMember":
        return cls(
            name=str(payload.get("name") or ""),
            relation=str(payload.get("relation") or ""),
        )

    def to_payload(self) -> dict[str, object]:
        return {"name": self.name, "relation": self.relation}


@dataclass(frozen=True)
class Ceremony:
    """A single ceremony (haldi, mehndi, reception, ...) of the wedding."""

    title: str = ""
    date: str = ""
    time: str = ""
    venue_name: str = ""
    venue_address: str = ""
    map_link: str = ""
    image_url: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Ceremony":
        values = {
            item.name: str(payload.get(item.name) or "") for item in fields(cls)
        }
        return cls(**values)

    def to_payload(self) -> dict[str, object]:
        return {
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "venue_name": self.venue_name,
            "venue_address": self.venue_address,
            "map_link": self.map_link or None,
            "image_url": self.image_url or None,
        }


@dataclass
class InvitationFields:
    """Flat, directly editable invitation fields."""

    slug: str = ""
    groom_name: str = ""
    bride_name: str = ""
    wedding_date: str = ""
    wedding_time: str = ""
    venue_name: str = ""
    venue_address: str = ""
    venue_map_link: str = ""
    venue_map_embed_link: str = ""
    cover_image_url: str = ""
    love_story: str = ""
    thank_you_message: str = ""
    video_url: str = ""
    is_published: bool = False


FIELD_NAMES = frozenset(item.name for item in fields(InvitationFields))


@dataclass(frozen=True)
class InvitationRecord:
    """A persisted invitation row."""

    id: UUID
    fields: InvitationFields
    groom_family: list[FamilyMember]
    bride_family: list[FamilyMember]
    ceremonies: list[Ceremony]
    gallery_images: list[str]
    love_story_images: list[str]

    @classmethod
    def from_row(cls, row: dict[str, object]) -> "InvitationRecord":
        """Build a record from an ``invitations`` table row."""
        values: dict[str, object] = {}
        for name in FIELD_NAMES:
            raw = row.get(name)
            if name == "is_published":
                values[name] = bool(raw)
            elif name == "wedding_date":
                values[name] = normalize_date(raw)
            else:
                values[name] = str(raw) if raw is not None else ""
        return cls(
            id=UUID(str(row["id"])),
            fields=InvitationFields(**values),
            groom_family=[
                FamilyMember.from_payload(item) for item in _dicts(row, "groom_family")
            ],
            bride_family=[
                FamilyMember.from_payload(item) for item in _dicts(row, "bride_family")
            ],
            ceremonies=[
                Ceremony.from_payload(item) for item in _dicts(row, "ceremonies")
            ],
            gallery_images=_strings(row, "gallery_images"),
            love_story_images=_strings(row, "love_story_images"),
        )


@dataclass(frozen=True)
class InvitationSummary:
    """Dashboard listing entry."""

    id: UUID
    slug: str
    groom_name: str
    bride_name: str
    wedding_date: str
    is_published: bool
    created_at: datetime | None


@dataclass
class DraftRecord:
    """The in-memory working copy of one invitation."""

    fields: InvitationFields = field(default_factory=InvitationFields)
    groom_family: OrderedCollection[FamilyMember] = field(
        default_factory=OrderedCollection
    )
    bride_family: OrderedCollection[FamilyMember] = field(
        default_factory=OrderedCollection
    )
    ceremonies: OrderedCollection[Ceremony] = field(default_factory=OrderedCollection)
    gallery_images: list[str] = field(default_factory=list)
    love_story_images: list[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: InvitationRecord) -> "DraftRecord":
        """Hydrate a draft from a persisted record."""
        return cls(
            fields=InvitationFields(**vars(record.fields)),
            groom_family=OrderedCollection.from_ordered_list(record.groom_family),
            bride_family=OrderedCollection.from_ordered_list(record.bride_family),
            ceremonies=OrderedCollection.from_ordered_list(record.ceremonies),
            gallery_images=list(record.gallery_images),
            love_story_images=list(record.love_story_images),
        )

    def collection(
        self, which: CollectionName | str
    ) -> OrderedCollection[FamilyMember] | OrderedCollection[Ceremony]:
        """Return one of the ordered collections by name."""
        name = CollectionName(which)
        if name is CollectionName.GROOM_FAMILY:
            return self.groom_family
        if name is CollectionName.BRIDE_FAMILY:
            return self.bride_family
        return self.ceremonies

    def missing_required_fields(self) -> list[str]:
        """Return required flat fields that are still blank."""
        return [
            name
            for name in REQUIRED_FIELDS
            if not str(getattr(self.fields, name)).strip()
        ]

    def to_payload(self) -> dict[str, object]:
        """Serialize the whole draft into one ``invitations`` row payload."""
        flat = self.fields
        return {
            "slug": normalize_slug(flat.slug),
            "groom_name": flat.groom_name,
            "bride_name": flat.bride_name,
            "wedding_date": normalize_date(flat.wedding_date),
            "wedding_time": flat.wedding_time,
            "venue_name": flat.venue_name,
            "venue_address": flat.venue_address,
            "venue_map_link": flat.venue_map_link or None,
            "venue_map_embed_link": flat.venue_map_embed_link or None,
            "cover_image_url": flat.cover_image_url or None,
            "love_story": flat.love_story or None,
            "love_story_images": list(self.love_story_images),
            "groom_family": [
                member.to_payload() for member in self.groom_family.to_ordered_list()
            ],
            "bride_family": [
                member.to_payload() for member in self.bride_family.to_ordered_list()
            ],
            "gallery_images": list(self.gallery_images),
            "video_url": flat.video_url or None,
            "thank_you_message": flat.thank_you_message or None,
            "ceremonies": [
                ceremony.to_payload() for ceremony in self.ceremonies.to_ordered_list()
            ],
            "is_published": flat.is_published,
        }


def normalize_slug(raw: str) -> str:
    """Lowercase a slug and replace characters outside ``[a-z0-9-]`` with dashes."""
    return _SLUG_INVALID_CHARS.sub("-", raw.lower())


def normalize_date(raw: object) -> str:
    """Return an ISO-8601 calendar date from a date, datetime or ISO string."""
    if raw is None:
        return ""
    if isinstance(raw, datetime):
        return raw.date().isoformat()
    if isinstance(raw, date):
        return raw.isoformat()
    text = str(raw).strip()
    # Timestamps such as "2025-02-14T00:00:00+00:00" keep only the date part.
    return text[:10] if len(text) > 10 and text[10] in "T " else text


def _dicts(row: dict[str, object], key: str) -> list[dict[str, object]]:
    value = row.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _strings(row: dict[str, object], key: str) -> list[str]:
    value = row.get(key)
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]
