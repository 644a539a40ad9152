"""In-process couple repository for local runs and demos."""

from dataclasses import replace
from datetime import UTC, datetime

from couple_space.domain.couples import CoupleData, Photo, Song, default_couple
from couple_space.services.couples import CoupleRepository

DEMO_COUPLE_ID = "demo-id"

UPDATABLE_FIELDS = frozenset({"couple_name", "start_date", "photos", "playlist"})


class InMemoryCoupleRepository(CoupleRepository):
    """Couple records held in a dict owned by the app container."""

    def __init__(self, couples: dict[str, CoupleData] | None = None) -> None:
        self._couples: dict[str, CoupleData] = dict(couples or {})

    def get_couple(self, couple_id: str) -> CoupleData | None:
        return self._couples.get(couple_id)

    def create_couple(self, couple_id: str) -> CoupleData:
        existing = self._couples.get(couple_id)
        if existing is not None:
            return existing
        created = default_couple(couple_id, now=datetime.now(tz=UTC))
        self._couples[couple_id] = created
        return created

    def update_couple(
        self, couple_id: str, fields: dict[str, object]
    ) -> CoupleData | None:
        _check_fields(fields)
        current = self._couples.get(couple_id)
        if current is None:
            return None
        updated = replace(current, **fields)
        self._couples[couple_id] = updated
        return updated

    def close(self) -> None:
        """Forget every stored record."""
        self._couples.clear()


def _check_fields(fields: dict[str, object]) -> None:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update couple fields: {sorted(unknown)}")


def demo_couple() -> CoupleData:
    """Return the sample space shown on the landing page."""
    uploaded_at = datetime.now(tz=UTC)
    photos = [
        Photo(
            id=str(index),
            url=url,
            caption=caption,
            uploaded_at=uploaded_at,
            data_ai_hint=hint,
        )
        for index, (url, caption, hint) in enumerate(
            [
                (
                    "https://placehold.co/600x400.png",
                    "Our first cherished memory together.",
                    "couple beach",
                ),
                (
                    "https://placehold.co/400x600.png",
                    "Celebrating a special milestone.",
                    "couple celebration",
                ),
                (
                    "https://placehold.co/800x500.png",
                    "A quiet, lovely evening.",
                    "couple sunset",
                ),
                (
                    "https://placehold.co/500x700.png",
                    "Adventure awaits!",
                    "couple hiking",
                ),
            ],
            start=1,
        )
    ]
    playlist = [
        Song(
            id="1",
            title="Coffee Shop Lofi",
            artist="Various Artists",
            url="https://www.youtube.com/watch?v=jfKfPfyJRdk",
        ),
        Song(
            id="2",
            title="Chillhop Essentials",
            artist="Chillhop Music",
            url="https://www.youtube.com/watch?v=5qap5aO4i9A",
        ),
        Song(
            id="3",
            title="Epic Cinematic Music",
            artist="Alexis",
            url="https://www.youtube.com/watch?v=DWcJFNfaw9c",
        ),
    ]
    return CoupleData(
        id=DEMO_COUPLE_ID,
        couple_name="Alex & Jamie",
        start_date=datetime(2020, 6, 15, 10, 0, tzinfo=UTC),
        photos=photos,
        playlist=playlist,
    )
