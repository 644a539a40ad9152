"""Request and response models for the couple space API."""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    model_validator,
)

from couple_space.domain.couples import (
    MAX_PLAYLIST_SONGS,
    CoupleData,
    Photo,
    RelationshipDuration,
    Song,
    SongDraft,
)

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate an http(s) URL but keep the text exactly as submitted."""
    _HTTP_URL.validate_python(value)
    return value


RawHttpUrl = Annotated[str, AfterValidator(_check_http_url)]


class CoupleDetailsUpdate(BaseModel):
    """General settings form; only the fields sent are saved."""

    couple_name: str | None = None
    start_date: datetime | None = None

    @model_validator(mode="after")
    def _start_date_not_cleared(self) -> "CoupleDetailsUpdate":
        if "start_date" in self.model_fields_set and self.start_date is None:
            raise ValueError("start_date cannot be cleared")
        return self

    def changes(self) -> dict[str, object]:
        """Return only the settings present in the request body."""
        return self.model_dump(exclude_unset=True)


class PhotoCreate(BaseModel):
    """New photo, given either as a URL or as an uploaded data URL."""

    caption: str = ""
    url: RawHttpUrl | None = None
    photo_data_uri: str | None = None
    data_ai_hint: str | None = None

    @model_validator(mode="after")
    def _one_image_source(self) -> "PhotoCreate":
        if (self.url is None) == (self.photo_data_uri is None):
            raise ValueError("Provide exactly one of url or photo_data_uri")
        return self


class PhotoCaptionUpdate(BaseModel):
    """Caption edit for an existing photo."""

    caption: str


class SongIn(BaseModel):
    """Song row from the playlist form."""

    title: str = Field(min_length=1)
    artist: str = Field(min_length=1)
    url: RawHttpUrl

    def to_draft(self) -> SongDraft:
        return SongDraft(title=self.title, artist=self.artist, url=self.url)


class PlaylistUpdate(BaseModel):
    """Playlist form; rejects more songs than a playlist may hold."""

    songs: list[SongIn] = Field(max_length=MAX_PLAYLIST_SONGS)


class CaptionSuggestionRequest(BaseModel):
    """Photo (as a data URL) plus optional context for caption ideas."""

    photo_data_uri: str
    context: str = ""


class CaptionSuggestionResponse(BaseModel):
    captions: list[str]


class PhotoOut(BaseModel):
    id: str
    url: str
    caption: str
    uploaded_at: datetime
    data_ai_hint: str | None = None

    @classmethod
    def from_domain(cls, photo: Photo) -> "PhotoOut":
        return cls(
            id=photo.id,
            url=photo.url,
            caption=photo.caption,
            uploaded_at=photo.uploaded_at,
            data_ai_hint=photo.data_ai_hint,
        )


class SongOut(BaseModel):
    id: str
    title: str
    artist: str
    url: str

    @classmethod
    def from_domain(cls, song: Song) -> "SongOut":
        return cls(id=song.id, title=song.title, artist=song.artist, url=song.url)


class CoupleOut(BaseModel):
    """Serialized couple record."""

    id: str
    couple_name: str | None
    start_date: datetime
    photos: list[PhotoOut]
    playlist: list[SongOut]

    @classmethod
    def from_domain(cls, couple: CoupleData) -> "CoupleOut":
        return cls(
            id=couple.id,
            couple_name=couple.couple_name,
            start_date=couple.start_date,
            photos=[PhotoOut.from_domain(photo) for photo in couple.photos],
            playlist=[SongOut.from_domain(song) for song in couple.playlist],
        )


class DurationOut(BaseModel):
    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_domain(cls, duration: RelationshipDuration) -> "DurationOut":
        return cls(
            years=duration.years,
            months=duration.months,
            days=duration.days,
            hours=duration.hours,
            minutes=duration.minutes,
            seconds=duration.seconds,
        )


class CouplePageOut(BaseModel):
    """Everything the read-only couple page renders."""

    title: str
    couple: CoupleOut
    duration: DurationOut
    share_url: str


class ShareLinkOut(BaseModel):
    url: str
