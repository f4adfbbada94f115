"""Supabase storage adapter for avatar images."""

from dataclasses import dataclass

import httpx
from storage3.utils import StorageException
from supabase import Client

from petmatch.domain.errors import AvatarUploadError
from petmatch.services.profiles import AvatarStorage


@dataclass
class SupabaseAvatarStorage(AvatarStorage):
    """Stores avatars in a public Supabase storage bucket."""

    client: Client
    bucket: str = "avatars"

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Upload an object to the bucket."""
        try:
            self.client.storage.from_(self.bucket).upload(
                path, content, {"content-type": content_type}
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise AvatarUploadError("Failed to upload avatar") from exc

    def public_url(self, path: str) -> str:
        """Return the public URL for an object in the bucket."""
        return self.client.storage.from_(self.bucket).get_public_url(path)
