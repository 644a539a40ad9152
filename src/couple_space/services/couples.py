"""Couple space lookups and edit actions."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol

from couple_space.domain.couples import (
    MAX_PLAYLIST_SONGS,
    CoupleData,
    Photo,
    Song,
    SongDraft,
)
from couple_space.services.cache import Cache, page_paths

logger = logging.getLogger(__name__)

DETAIL_FIELDS = frozenset({"couple_name", "start_date"})


class CoupleRepository(Protocol):
    """Persistence interface for couple records."""

    def get_couple(self, couple_id: str) -> CoupleData | None:
        """Return the record for a couple id, if present."""

    def create_couple(self, couple_id: str) -> CoupleData:
        """Return the stored record, creating the default one if absent."""

    def update_couple(
        self, couple_id: str, fields: dict[str, object]
    ) -> CoupleData | None:
        """Merge fields into the stored record and return it."""


class PhotoStorage(Protocol):
    """Interface for persisting uploaded images."""

    def store(self, couple_id: str, photo_id: str, data_url: str) -> str:
        """Persist an image and return the URL it can be displayed from."""


@dataclass
class MonotonicIdFactory:
    """Millisecond-clock ids that never repeat within a process."""

    clock: Callable[[], int] = time.time_ns
    _last: int = 0

    def __call__(self) -> str:
        candidate = self.clock() // 1_000_000
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


@dataclass
class CoupleService:
    """Application service for reading and editing couple spaces."""

    repository: CoupleRepository
    photo_storage: PhotoStorage
    cache: Cache
    cache_ttl_seconds: int = 30
    new_id: Callable[[], str] = field(default_factory=MonotonicIdFactory)

    def get_couple(self, couple_id: str) -> CoupleData | None:
        """Return a couple for the read-only page without creating it."""
        page_key, _ = page_paths(couple_id)
        cached = self.cache.get(page_key)
        if isinstance(cached, CoupleData):
            return cached
        couple = self.repository.get_couple(couple_id)
        if couple is not None:
            self.cache.set(page_key, couple, self.cache_ttl_seconds)
        return couple

    def ensure_couple(self, couple_id: str) -> CoupleData:
        """Return the couple for the edit page, creating a default one."""
        existing = self.repository.get_couple(couple_id)
        if existing:
            return existing
        created = self.repository.create_couple(couple_id)
        logger.info("Created couple space", extra={"couple_id": couple_id})
        self._revalidate(couple_id)
        return created

    def save_details(
        self, couple_id: str, changes: dict[str, object]
    ) -> CoupleData | None:
        """Save the general settings, creating the space on first write.

        Only the keys present in ``changes`` are written; an empty dict
        leaves the record as it is.
        """
        unknown = set(changes) - DETAIL_FIELDS
        if unknown:
            raise ValueError(f"Not a general setting: {sorted(unknown)}")
        fields = dict(changes)
        start_date = fields.get("start_date")
        if "start_date" in fields:
            if not isinstance(start_date, datetime):
                raise ValueError("start_date must be a datetime")
            fields["start_date"] = _as_utc(start_date)
        self.ensure_couple(couple_id)
        return self._update(couple_id, fields)

    def add_photo(  # noqa: PLR0913
        self,
        couple_id: str,
        caption: str,
        *,
        url: str | None = None,
        photo_data_uri: str | None = None,
        data_ai_hint: str | None = None,
    ) -> CoupleData | None:
        """Append a new photo, uploading it first when given as a data URL."""
        couple = self.repository.get_couple(couple_id)
        if couple is None:
            return None
        photo_id = self.new_id()
        if photo_data_uri is not None:
            image_url = self.photo_storage.store(couple_id, photo_id, photo_data_uri)
        elif url is not None:
            image_url = url
        else:
            raise ValueError("A photo needs either a url or a data URI")
        photo = Photo(
            id=photo_id,
            url=image_url,
            caption=caption,
            uploaded_at=datetime.now(tz=UTC),
            data_ai_hint=data_ai_hint,
        )
        return self._update(couple_id, {"photos": [*couple.photos, photo]})

    def delete_photo(self, couple_id: str, photo_id: str) -> CoupleData | None:
        """Remove a photo; unknown photo ids leave the gallery untouched."""
        couple = self.repository.get_couple(couple_id)
        if couple is None:
            return None
        photos = [photo for photo in couple.photos if photo.id != photo_id]
        if len(photos) == len(couple.photos):
            logger.info(
                "Photo not found, nothing deleted",
                extra={"couple_id": couple_id, "photo_id": photo_id},
            )
            return couple
        return self._update(couple_id, {"photos": photos})

    def update_photo_caption(
        self, couple_id: str, photo_id: str, caption: str
    ) -> CoupleData | None:
        """Replace the caption of one photo."""
        couple = self.repository.get_couple(couple_id)
        if couple is None:
            return None
        photos = [
            replace(photo, caption=caption) if photo.id == photo_id else photo
            for photo in couple.photos
        ]
        return self._update(couple_id, {"photos": photos})

    def replace_playlist(
        self, couple_id: str, songs: list[SongDraft]
    ) -> CoupleData | None:
        """Replace the whole playlist, keeping song ids by position."""
        if len(songs) > MAX_PLAYLIST_SONGS:
            raise ValueError(
                f"Playlist can have a maximum of {MAX_PLAYLIST_SONGS} songs."
            )
        couple = self.repository.get_couple(couple_id)
        if couple is None:
            return None
        playlist = [
            Song(
                id=_existing_song_id(couple.playlist, index) or self.new_id(),
                title=draft.title,
                artist=draft.artist,
                url=draft.url,
            )
            for index, draft in enumerate(songs)
        ]
        return self._update(couple_id, {"playlist": playlist})

    def _update(
        self, couple_id: str, fields: dict[str, object]
    ) -> CoupleData | None:
        updated = self.repository.update_couple(couple_id, fields)
        if updated is not None:
            self._revalidate(couple_id)
        return updated

    def _revalidate(self, couple_id: str) -> None:
        for path in page_paths(couple_id):
            self.cache.delete(path)


def _existing_song_id(playlist: list[Song], index: int) -> str | None:
    if index < len(playlist):
        return playlist[index].id
    return None


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
