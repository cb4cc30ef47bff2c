from __future__ import annotations

import logging
from typing import Callable, List

from .datamodels import Home, Loaded, LoadState, StoryView, ViewState
from .location import Location, normalize_fragment
from .store import StoryStore

logger = logging.getLogger("echoes")

ViewListener = Callable[[ViewState], None]


def resolve(fragment: str, state: LoadState) -> ViewState:
    """Map a fragment to a view.

    Anything that does not name a story in a loaded collection, including
    an empty fragment, resolves to Home.
    """
    fragment = normalize_fragment(fragment)
    if not fragment or not isinstance(state, Loaded):
        return Home()
    story = state.collection.get(fragment)
    if story is None:
        logger.debug("No story with id %r, falling back to home", fragment)
        return Home()
    return StoryView(story.id, story)


class ViewRouter:
    """Keeps ``view`` in step with the location fragment and the store.

    The view is re-resolved whenever the fragment changes and whenever a
    collection is swapped in. A deep link that arrives before the first load
    finishes resolves to Home and is marked pending; the load completing
    resolves it again without waiting for another fragment change.
    """

    def __init__(self, location: Location, store: StoryStore):
        self.location = location
        self.store = store
        self.view: ViewState = Home()
        self.pending = False
        self._listeners: List[ViewListener] = []
        location.subscribe(self._on_fragment_changed)
        store.subscribe(self._on_store_changed)

    def subscribe(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    def start(self) -> None:
        self._reresolve()

    def navigate_to_story(self, story_id: str) -> None:
        # only the fragment changes here; the view follows from re-resolution
        self.location.assign(story_id)

    def navigate_to_home(self) -> None:
        self.location.assign("")
        self._set_view(Home())

    def _on_fragment_changed(self, fragment: str) -> None:
        self._reresolve()

    def _on_store_changed(self, state: LoadState, first_load: bool) -> None:
        if not isinstance(state, Loaded):
            return
        if first_load and self.pending:
            logger.debug("Retrying deferred fragment %r", self.location.fragment)
        self.pending = False
        self._reresolve()

    def _reresolve(self) -> None:
        fragment = self.location.fragment
        if fragment and not self.store.is_loaded:
            self.pending = True
        self._set_view(resolve(fragment, self.store.state))

    def _set_view(self, view: ViewState) -> None:
        if view == self.view:
            return
        logger.debug("View changed: %s -> %s", self.view, view)
        self.view = view
        for listener in list(self._listeners):
            listener(view)
