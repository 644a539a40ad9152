"""Supabase-backed couple repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from couple_space.domain.couples import CoupleData, Photo, Song, default_couple
from couple_space.services.couples import CoupleRepository

_COLUMNS = "id, couple_name, start_date, photos, playlist"


@dataclass
class SupabaseCoupleRepository(CoupleRepository):
    """Supabase implementation storing one row per couple.

    Photos and the playlist live in JSON columns and are always written
    as whole lists.
    """

    client: Client
    table_name: str = "couples"

    def get_couple(self, couple_id: str) -> CoupleData | None:
        """Return the couple row for an id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", couple_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_couple(response.data[0])

    def create_couple(self, couple_id: str) -> CoupleData:
        """Insert the default row unless one already exists."""
        default = default_couple(couple_id, now=datetime.now(tz=UTC))
        self.client.table(self.table_name).upsert(
            _to_row(default), ignore_duplicates=True
        ).execute()
        stored = self.get_couple(couple_id)
        if stored is None:
            raise RuntimeError("Failed to create couple space in Supabase")
        return stored

    def update_couple(
        self, couple_id: str, fields: dict[str, object]
    ) -> CoupleData | None:
        """Write the given fields and return the updated row."""
        payload = _fields_to_row(fields)
        if not payload:
            return self.get_couple(couple_id)
        response = (
            self.client.table(self.table_name)
            .update(payload)
            .eq("id", couple_id)
            .execute()
        )
        if not response.data:
            return None
        return _to_couple(response.data[0])


def _fields_to_row(fields: dict[str, object]) -> dict[str, object]:
    row: dict[str, object] = {}
    for name, value in fields.items():
        if name == "couple_name":
            row["couple_name"] = value
        elif name == "start_date" and isinstance(value, datetime):
            row["start_date"] = value.isoformat()
        elif name == "photos" and isinstance(value, list):
            row["photos"] = [_photo_to_json(photo) for photo in value]
        elif name == "playlist" and isinstance(value, list):
            row["playlist"] = [_song_to_json(song) for song in value]
        else:
            raise ValueError(f"Cannot update couple field: {name}")
    return row


def _to_row(couple: CoupleData) -> dict[str, object]:
    return {
        "id": couple.id,
        "couple_name": couple.couple_name,
        "start_date": couple.start_date.isoformat(),
        "photos": [_photo_to_json(photo) for photo in couple.photos],
        "playlist": [_song_to_json(song) for song in couple.playlist],
    }


def _to_couple(row: dict[str, object]) -> CoupleData:
    return CoupleData(
        id=str(row["id"]),
        couple_name=row.get("couple_name"),
        start_date=datetime.fromisoformat(str(row["start_date"])),
        photos=[_photo_from_json(item) for item in row.get("photos") or []],
        playlist=[_song_from_json(item) for item in row.get("playlist") or []],
    )


def _photo_to_json(photo: Photo) -> dict[str, object]:
    return {
        "id": photo.id,
        "url": photo.url,
        "caption": photo.caption,
        "uploaded_at": photo.uploaded_at.isoformat(),
        "data_ai_hint": photo.data_ai_hint,
    }


def _photo_from_json(item: dict[str, object]) -> Photo:
    return Photo(
        id=str(item["id"]),
        url=str(item["url"]),
        caption=str(item.get("caption") or ""),
        uploaded_at=datetime.fromisoformat(str(item["uploaded_at"])),
        data_ai_hint=item.get("data_ai_hint"),
    )


def _song_to_json(song: Song) -> dict[str, object]:
    return {"id": song.id, "title": song.title, "artist": song.artist, "url": song.url}


def _song_from_json(item: dict[str, object]) -> Song:
    return Song(
        id=str(item["id"]),
        title=str(item["title"]),
        artist=str(item["artist"]),
        url=str(item["url"]),
    )
