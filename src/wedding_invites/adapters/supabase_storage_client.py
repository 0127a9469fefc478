"""Supabase Storage upload client."""

from dataclasses import dataclass
from uuid import uuid4

import httpx

from wedding_invites.domain.errors import UploadError
from wedding_invites.services.uploads import ImageBlob, UploadGateway


@dataclass
class HttpxSupabaseStorageClient(UploadGateway):
    """Uploads images to a public Supabase Storage bucket using httpx."""

    supabase_url: str
    service_key: str
    bucket: str
    http_client: httpx.AsyncClient
    timeout: float = 30

    @classmethod
    def create(
        cls, supabase_url: str, service_key: str, bucket: str, timeout: float = 30
    ) -> "HttpxSupabaseStorageClient":
        """Create a storage client with a managed httpx session."""
        return cls(
            supabase_url=supabase_url.rstrip("/"),
            service_key=service_key,
            bucket=bucket,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def upload(self, blob: ImageBlob) -> str:
        """Upload the blob under a random name and return its public URL."""
        path = f"{uuid4().hex}.{blob.extension}"
        url = f"{self.supabase_url}/storage/v1/object/{self.bucket}/{path}"
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
            "Content-Type": blob.content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        try:
            response = await self.http_client.post(
                url, content=blob.content, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UploadError(f"Storage upload failed for {blob.filename}") from exc
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        """Return the public URL of an object in the bucket."""
        return f"{self.supabase_url}/storage/v1/object/public/{self.bucket}/{path}"

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
