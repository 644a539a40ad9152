"""Tests for the page cache."""

from datetime import UTC, datetime, timedelta

from couple_space.services.cache import InMemoryCache, page_paths


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


def test_set_get_and_delete() -> None:
    cache = InMemoryCache()

    cache.set("/couple/a", "page", ttl_seconds=60)
    assert cache.get("/couple/a") == "page"

    cache.delete("/couple/a")
    assert cache.get("/couple/a") is None


def test_expired_entries_are_dropped() -> None:
    cache = InMemoryCache()

    cache.set("/couple/a", "page", ttl_seconds=0)

    assert cache.get("/couple/a") is None


def test_set_prunes_entries_that_were_never_read_again() -> None:
    clock = _Clock()
    cache = InMemoryCache(clock=clock)
    for index in range(5):
        cache.set(f"/couple/{index}", "page", ttl_seconds=30)
    assert len(cache) == 5

    clock.now += timedelta(seconds=31)
    cache.set("/couple/fresh", "page", ttl_seconds=30)

    assert len(cache) == 1
    assert cache.get("/couple/fresh") == "page"


def test_entry_expires_at_its_deadline() -> None:
    clock = _Clock()
    cache = InMemoryCache(clock=clock)
    cache.set("/couple/a", "page", ttl_seconds=30)

    clock.now += timedelta(seconds=29)
    assert cache.get("/couple/a") == "page"

    clock.now += timedelta(seconds=1)
    assert cache.get("/couple/a") is None


def test_page_paths_cover_view_and_edit() -> None:
    assert page_paths("our-story") == ("/couple/our-story", "/couple/our-story/edit")
