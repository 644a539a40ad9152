"""Tests for the in-memory couple store."""

from dataclasses import replace

import pytest

from couple_space.adapters.memory_couple_repository import (
    DEMO_COUPLE_ID,
    InMemoryCoupleRepository,
    demo_couple,
)
from couple_space.domain.couples import DEFAULT_SONG
from tests.conftest import make_couple


def test_get_then_empty_update_returns_equal_record() -> None:
    repository = InMemoryCoupleRepository({"our-story": make_couple()})

    original = repository.get_couple("our-story")
    updated = repository.update_couple("our-story", {})

    assert updated == original


def test_create_is_idempotent() -> None:
    repository = InMemoryCoupleRepository()

    first = repository.create_couple("new-pair")
    second = repository.create_couple("new-pair")

    assert second is first
    assert first.playlist == [DEFAULT_SONG]


def test_create_keeps_existing_record() -> None:
    couple = make_couple()
    repository = InMemoryCoupleRepository({"our-story": couple})

    assert repository.create_couple("our-story") == couple


def test_update_unknown_couple_returns_none() -> None:
    repository = InMemoryCoupleRepository()

    assert repository.update_couple("nobody", {"couple_name": "X"}) is None


def test_update_replaces_lists_wholesale() -> None:
    couple = make_couple()
    repository = InMemoryCoupleRepository({"our-story": couple})
    kept = [replace(couple.photos[1], caption="only one left")]

    updated = repository.update_couple("our-story", {"photos": kept})

    assert updated is not None
    assert updated.photos == kept
    assert updated.playlist == couple.playlist


def test_update_refuses_to_change_id() -> None:
    repository = InMemoryCoupleRepository({"our-story": make_couple()})

    with pytest.raises(ValueError):
        repository.update_couple("our-story", {"id": "stolen"})


def test_close_forgets_records() -> None:
    repository = InMemoryCoupleRepository({"our-story": make_couple()})

    repository.close()

    assert repository.get_couple("our-story") is None


def test_demo_couple_has_gallery_and_playlist() -> None:
    couple = demo_couple()

    assert couple.id == DEMO_COUPLE_ID
    assert couple.couple_name == "Alex & Jamie"
    assert len(couple.photos) == 4
    assert len(couple.playlist) == 3
    assert len({photo.id for photo in couple.photos}) == 4
