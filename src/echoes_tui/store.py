from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .datamodels import Failed, Loaded, Loading, LoadState, StoryCollection
from .errors import StoryLoadError
from .sources.base import StorySource

logger = logging.getLogger("echoes")

StoreListener = Callable[[LoadState, bool], None]


class StoryStore:
    """Holds the active story collection and its load state.

    State only ever changes by swapping in a whole new value, so readers see
    either the previous collection or the new one, never a mix.  Each load is
    tagged with a generation ticket; a result from a load that has since been
    superseded by a newer one is dropped.
    """

    def __init__(self) -> None:
        self.state: LoadState = Loading()
        self._generation = 0
        self._listeners: List[StoreListener] = []

    @property
    def collection(self) -> Optional[StoryCollection]:
        if isinstance(self.state, Loaded):
            return self.state.collection
        return None

    @property
    def is_loaded(self) -> bool:
        return isinstance(self.state, Loaded)

    def subscribe(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def begin(self) -> int:
        """Register a new load and return its ticket."""
        self._generation += 1
        # an already visible collection stays up while the replacement loads
        if not self.is_loaded:
            self._swap(Loading(), first_load=False)
        return self._generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self._generation

    def complete(self, ticket: int, collection: StoryCollection) -> bool:
        if not self.is_current(ticket):
            logger.debug("Dropping superseded load result (ticket %d)", ticket)
            return False
        first_load = not self.is_loaded
        self._swap(Loaded(collection), first_load=first_load)
        return True

    def fail(self, ticket: int, error: StoryLoadError) -> bool:
        """Record a failed load.

        Returns True when the failure replaced the visible state, False when
        it was dropped or a loaded collection was kept in place.
        """
        if not self.is_current(ticket):
            logger.debug("Dropping superseded load failure (ticket %d)", ticket)
            return False
        if self.is_loaded:
            logger.warning("Load failed, keeping current collection: %s", error)
            return False
        logger.error("Load failed: %s", error)
        self._swap(Failed(error.user_message), first_load=False)
        return True

    def load(self, source: StorySource) -> StoryCollection:
        """Load ``source`` synchronously, re-raising any StoryLoadError."""
        ticket = self.begin()
        try:
            collection = source.load()
        except StoryLoadError as e:
            self.fail(ticket, e)
            raise
        self.complete(ticket, collection)
        return collection

    def _swap(self, state: LoadState, first_load: bool) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state, first_load)
