from __future__ import annotations

import pytest

from echoes_tui.datamodels import (
    Failed,
    Home,
    Loaded,
    Loading,
    Story,
    StoryCollection,
    StoryView,
)
from echoes_tui.errors import NetworkError
from echoes_tui.location import Location, normalize_fragment
from echoes_tui.router import ViewRouter, resolve
from echoes_tui.store import StoryStore


def _collection(*ids: str) -> StoryCollection:
    return StoryCollection.of(
        [Story(id=i, position=n, title=f"T{n}") for n, i in enumerate(ids, start=1)]
    )


LOADED = Loaded(_collection("a1", "a2", "a3", "a4"))


@pytest.mark.parametrize("story_id", ["a1", "a2", "a3", "a4"])
def test_resolve_existing_id(story_id):
    view = resolve(story_id, LOADED)
    assert isinstance(view, StoryView)
    assert view.story is LOADED.collection.get(story_id)


@pytest.mark.parametrize("fragment", ["", "#", "zzz", "A1", " "])
def test_resolve_falls_back_to_home(fragment):
    assert resolve(fragment, LOADED) == Home()


@pytest.mark.parametrize("state", [Loading(), Failed("boom")])
def test_resolve_before_load_is_home(state):
    assert resolve("a1", state) == Home()


def test_resolve_accepts_hash_prefix():
    assert resolve("#a4", LOADED).story_id == "a4"


def test_resolve_duplicate_id_takes_first():
    collection = StoryCollection.of(
        [Story(id="d", position=1, title="first"), Story(id="d", position=2, title="second")]
    )
    assert resolve("d", Loaded(collection)).story.title == "first"


def test_normalize_fragment():
    assert normalize_fragment("#abc") == "abc"
    assert normalize_fragment("  abc ") == "abc"
    assert normalize_fragment("#") == ""
    assert normalize_fragment(None) == ""


class TestLocation:
    def test_assign_notifies_on_change_only(self):
        location = Location()
        seen = []
        location.subscribe(seen.append)
        location.assign("#a1")
        location.assign("a1")
        assert seen == ["a1"]
        assert location.fragment == "a1"

    def test_back_and_forward(self):
        location = Location("a1")
        location.assign("a2")
        location.assign("a3")
        assert location.back()
        assert location.fragment == "a2"
        assert location.back()
        assert location.fragment == "a1"
        assert not location.back()
        assert location.forward()
        assert location.fragment == "a2"

    def test_assign_drops_forward_history(self):
        location = Location()
        location.assign("a1")
        location.back()
        location.assign("a2")
        assert not location.can_go_forward
        location.back()
        assert location.fragment == ""


class TestViewRouter:
    @pytest.fixture
    def store(self):
        return StoryStore()

    def _load(self, store, collection):
        store.complete(store.begin(), collection)

    def test_navigate_to_story_goes_through_fragment(self, store):
        location = Location()
        router = ViewRouter(location, store)
        self._load(store, LOADED.collection)
        router.navigate_to_story("a2")
        assert location.fragment == "a2"
        assert router.view == StoryView("a2", LOADED.collection.get("a2"))

    def test_navigate_to_home_clears_fragment(self, store):
        location = Location()
        router = ViewRouter(location, store)
        self._load(store, LOADED.collection)
        router.navigate_to_story("a2")
        router.navigate_to_home()
        assert location.fragment == ""
        assert router.view == Home()

    def test_unknown_fragment_falls_back_home(self, store):
        location = Location()
        router = ViewRouter(location, store)
        self._load(store, LOADED.collection)
        location.assign("a4")
        assert router.view.story_id == "a4"
        location.assign("zzz")
        assert router.view == Home()

    def test_deep_link_before_load_is_retried_after_load(self, store):
        location = Location("#a3")
        router = ViewRouter(location, store)
        router.start()
        assert router.view == Home()
        assert router.pending
        self._load(store, LOADED.collection)
        assert not router.pending
        assert router.view.story_id == "a3"

    def test_deep_link_still_pending_after_failure(self, store):
        location = Location("a3")
        router = ViewRouter(location, store)
        router.start()
        store.fail(store.begin(), NetworkError("down"))
        assert router.view == Home()
        assert router.pending

    def test_replaced_collection_re_resolves(self, store):
        location = Location("a1")
        router = ViewRouter(location, store)
        router.start()
        self._load(store, LOADED.collection)
        assert router.view.story_id == "a1"
        self._load(store, _collection("b1"))
        assert router.view == Home()

    def test_listeners_only_see_real_changes(self, store):
        location = Location()
        router = ViewRouter(location, store)
        views = []
        router.subscribe(views.append)
        self._load(store, LOADED.collection)
        location.assign("zzz")
        location.assign("a1")
        location.back()
        assert views == [StoryView("a1", LOADED.collection.get("a1")), Home()]

    def test_history_back_returns_to_story(self, store):
        location = Location()
        router = ViewRouter(location, store)
        self._load(store, LOADED.collection)
        router.navigate_to_story("a1")
        router.navigate_to_home()
        location.back()
        assert router.view.story_id == "a1"
