from __future__ import annotations

import pytest

from echoes_tui.datamodels import Failed, Loaded, Loading, Story, StoryCollection
from echoes_tui.errors import InvalidFormat, NetworkError
from echoes_tui.sources.base import StorySource
from echoes_tui.store import StoryStore


class StubSource(StorySource):
    def __init__(self, result):
        self.result = result

    @property
    def label(self) -> str:
        return "stub"

    def load(self) -> StoryCollection:
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _collection(*ids: str) -> StoryCollection:
    return StoryCollection.of(
        [Story(id=i, position=n, title=i.upper()) for n, i in enumerate(ids, start=1)]
    )


@pytest.fixture
def store():
    return StoryStore()


@pytest.fixture
def events(store):
    seen = []
    store.subscribe(lambda state, first_load: seen.append((state, first_load)))
    return seen


def test_starts_loading(store):
    assert store.state == Loading()
    assert store.collection is None


def test_load_transitions_to_loaded_once(store, events):
    collection = _collection("a1", "a2")
    store.load(StubSource(collection))
    assert store.state == Loaded(collection)
    assert [s.id for s in store.collection] == ["a1", "a2"]
    loaded = [e for e in events if isinstance(e[0], Loaded)]
    assert loaded == [(Loaded(collection), True)]


def test_failed_load_never_populates(store):
    with pytest.raises(NetworkError):
        store.load(StubSource(NetworkError("down")))
    assert isinstance(store.state, Failed)
    assert store.state.message == NetworkError.default_user_message
    assert store.collection is None


def test_failure_keeps_existing_collection(store, events):
    collection = _collection("a1")
    store.load(StubSource(collection))
    events.clear()
    with pytest.raises(InvalidFormat):
        store.load(StubSource(InvalidFormat("no stories array")))
    assert store.state == Loaded(collection)
    assert events == []


def test_replacement_is_not_a_first_load(store, events):
    store.load(StubSource(_collection("a1")))
    replacement = _collection("b1", "b2")
    store.load(StubSource(replacement))
    assert events[-1] == (Loaded(replacement), False)


def test_superseded_result_is_dropped(store):
    old = store.begin()
    new = store.begin()
    newer_collection = _collection("new")
    assert store.complete(new, newer_collection)
    assert not store.complete(old, _collection("old"))
    assert store.collection is newer_collection


def test_superseded_failure_is_dropped(store):
    old = store.begin()
    store.begin()
    assert not store.fail(old, NetworkError("late"))
    assert store.state == Loading()
