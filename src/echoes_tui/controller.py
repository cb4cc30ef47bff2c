from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .datamodels import StoryCollection, StoryView, ViewState
from .errors import StoryLoadError
from .guard import ContentGuard, GuardSurface, PlainSurface
from .location import Location
from .render import Page, render
from .router import ViewRouter
from .sources.base import StorySource
from .sources.local import FileSource
from .store import StoryStore

logger = logging.getLogger("echoes")


@dataclass(frozen=True)
class LoadOutcome:
    ticket: int
    source: StorySource
    collection: Optional[StoryCollection] = None
    error: Optional[StoryLoadError] = None


@dataclass(frozen=True)
class LoadJob:
    """One load, ready to run off the UI thread.

    ``run`` never raises a StoryLoadError; the error travels back in the
    outcome so the controller sees exactly one completion per job.
    """

    ticket: int
    source: StorySource

    def run(self) -> LoadOutcome:
        try:
            collection = self.source.load()
        except StoryLoadError as e:
            return LoadOutcome(self.ticket, self.source, error=e)
        return LoadOutcome(self.ticket, self.source, collection=collection)


class StoryController:
    """Owns the store, location, router and content guard for one session."""

    def __init__(self, surface: Optional[GuardSurface] = None, fragment: str = ""):
        self.store = StoryStore()
        self.location = Location(fragment)
        self.router = ViewRouter(self.location, self.store)
        self.guard = ContentGuard(surface or PlainSurface())
        self.source_label = ""
        self._change_listeners: List[Callable[[], None]] = []
        self._error_listeners: List[Callable[[str], None]] = []
        self.router.subscribe(self._on_view_changed)
        self.store.subscribe(lambda state, first_load: self._changed())
        self.router.start()

    @property
    def view(self) -> ViewState:
        return self.router.view

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._change_listeners.append(listener)

    def subscribe_errors(self, listener: Callable[[str], None]) -> None:
        self._error_listeners.append(listener)

    # --- Loading ---
    def start(self, source: StorySource) -> LoadJob:
        logger.info("Loading stories from %s", source.label)
        return LoadJob(self.store.begin(), source)

    def finish(self, outcome: LoadOutcome) -> None:
        """Apply the single completion signal of a load job."""
        if outcome.error is None:
            if self.store.is_current(outcome.ticket):
                self.source_label = outcome.source.label
            self.store.complete(outcome.ticket, outcome.collection)
            return

        replaced = self.store.fail(outcome.ticket, outcome.error)
        if not replaced and self.store.is_current(outcome.ticket):
            # a collection is already on screen; report without replacing it
            for listener in list(self._error_listeners):
                listener(outcome.error.user_message)

    def load(self, source: StorySource) -> None:
        """Run a load to completion on the calling thread."""
        self.finish(self.start(source).run())

    def upload(self, path: str) -> LoadJob:
        return self.start(FileSource(path))

    # --- Navigation ---
    def navigate_to_story(self, story_id: str) -> None:
        self.router.navigate_to_story(story_id)

    def navigate_to_home(self) -> None:
        self.router.navigate_to_home()

    def go_to(self, fragment: str) -> None:
        self.location.assign(fragment)

    def back(self) -> bool:
        return self.location.back()

    def forward(self) -> bool:
        return self.location.forward()

    def current_page(self) -> Page:
        return render(self.router.view, self.store.state)

    def teardown(self) -> None:
        self.guard.deactivate()

    def _on_view_changed(self, view: ViewState) -> None:
        if isinstance(view, StoryView):
            self.guard.activate()
        else:
            self.guard.deactivate()
        self._changed()

    def _changed(self) -> None:
        for listener in list(self._change_listeners):
            listener()
