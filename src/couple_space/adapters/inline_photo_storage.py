"""Photo storage that keeps images inline as data URLs."""

from couple_space.services.couples import PhotoStorage
from couple_space.services.media import parse_data_url, to_data_url


class InlinePhotoStorage(PhotoStorage):
    """Stores nothing externally; a normalized data URL is the image URL.

    Used with the in-memory couple store, where records never leave the
    process anyway.
    """

    def store(self, couple_id: str, photo_id: str, data_url: str) -> str:
        image = parse_data_url(data_url)
        return to_data_url(image.content, image.mime_type)
