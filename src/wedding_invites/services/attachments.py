"""Binding asynchronous image uploads to draft fields."""

import asyncio
import logging
from dataclasses import dataclass

from wedding_invites.domain.collections import OrderedCollection
from wedding_invites.domain.errors import UploadError
from wedding_invites.domain.invitations import DraftRecord
from wedding_invites.services.uploads import ImageBlob, UploadGateway

_logger = logging.getLogger(__name__)


@dataclass
class ImageAttachmentWorkflow:
    """Uploads images and writes the returned URL into exactly one target."""

    gateway: UploadGateway
    pending: int = 0

    async def attach(
        self, collection: OrderedCollection, key: int, blob: ImageBlob
    ) -> str:
        """Upload ``blob`` and store its URL as ``image_url`` of item ``key``."""
        url = await self._upload(blob)
        collection.update(key, image_url=url)
        return url

    async def attach_cover(self, draft: DraftRecord, blob: ImageBlob) -> str:
        """Upload ``blob`` and use it as the draft's cover image."""
        url = await self._upload(blob)
        draft.fields.cover_image_url = url
        return url

    async def add_to_gallery(
        self, draft: DraftRecord, blobs: list[ImageBlob]
    ) -> list[str]:
        """Upload image blobs concurrently and append each URL to the gallery.

        Non-image blobs are skipped. Successful uploads are kept even when a
        sibling upload fails; the first failure is raised afterwards.
        """
        images = [blob for blob in blobs if blob.is_image()]
        results = await asyncio.gather(
            *(self._upload(blob) for blob in images), return_exceptions=True
        )
        urls: list[str] = []
        failure: BaseException | None = None
        for result in results:
            if isinstance(result, BaseException):
                failure = failure or result
                continue
            draft.gallery_images.append(result)
            urls.append(result)
        if failure is not None:
            raise failure
        return urls

    async def _upload(self, blob: ImageBlob) -> str:
        self.pending += 1
        try:
            return await self.gateway.upload(blob)
        except UploadError:
            _logger.warning("Image upload failed: filename=%s", blob.filename)
            raise
        except Exception as exc:
            _logger.warning("Image upload failed: filename=%s", blob.filename)
            raise UploadError(f"Failed to upload {blob.filename}") from exc
        finally:
            self.pending -= 1
