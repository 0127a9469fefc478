"""Upload gateway interface for invitation images."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ImageBlob:
    """An uploaded file waiting to be stored."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot and ext else "bin"

    def is_image(self) -> bool:
        """Return whether the blob declares an image content type."""
        return bool(self.content_type and self.content_type.startswith("image/"))


class UploadGateway(Protocol):
    """Remote object store returning public references for uploads."""

    async def upload(self, blob: ImageBlob) -> str:
        """Store the blob and return its public URL."""
