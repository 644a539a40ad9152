"""Supabase Storage bucket for uploaded couple photos."""

from dataclasses import dataclass

from supabase import Client

from couple_space.services.couples import PhotoStorage
from couple_space.services.media import parse_data_url


@dataclass
class SupabasePhotoStorage(PhotoStorage):
    """Uploads photos to a public Supabase Storage bucket."""

    client: Client
    bucket: str = "couple-photos"

    def store(self, couple_id: str, photo_id: str, data_url: str) -> str:
        """Upload the decoded image and return its public URL."""
        image = parse_data_url(data_url)
        path = f"{couple_id}/{photo_id}{image.extension}"
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path,
            image.content,
            {"content-type": image.mime_type, "upsert": "true"},
        )
        return bucket.get_public_url(path)
