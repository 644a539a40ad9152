"""Domain models for couple spaces."""

from dataclasses import dataclass, field
from datetime import datetime

MAX_PLAYLIST_SONGS = 10


@dataclass(frozen=True)
class Photo:
    """A captioned photo in a couple's gallery."""

    id: str
    url: str
    caption: str
    uploaded_at: datetime
    data_ai_hint: str | None = None


@dataclass(frozen=True)
class Song:
    """A playlist entry."""

    id: str
    title: str
    artist: str
    url: str


@dataclass(frozen=True)
class SongDraft:
    """Song submitted from the playlist form, before it has an id."""

    title: str
    artist: str
    url: str


@dataclass(frozen=True)
class CoupleData:
    """The single record behind a couple's page."""

    id: str
    start_date: datetime
    couple_name: str | None = None
    photos: list[Photo] = field(default_factory=list)
    playlist: list[Song] = field(default_factory=list)


@dataclass(frozen=True)
class RelationshipDuration:
    """Elapsed time since the relationship started, broken into units."""

    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int


DEFAULT_SONG = Song(
    id="1",
    title="Coffee Shop Lofi",
    artist="Various Artists",
    url="https://www.youtube.com/watch?v=jfKfPfyJRdk",
)


def default_couple(couple_id: str, now: datetime) -> CoupleData:
    """Build the record a brand new couple space starts with."""
    return CoupleData(
        id=couple_id,
        start_date=now,
        couple_name=None,
        photos=[],
        playlist=[DEFAULT_SONG],
    )
