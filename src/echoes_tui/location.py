from __future__ import annotations

import logging
from typing import Callable, List

logger = logging.getLogger("echoes")

FragmentListener = Callable[[str], None]


def normalize_fragment(fragment: str) -> str:
    """``"#a1"`` and ``"a1"`` name the same place; ``"#"`` is home."""
    fragment = (fragment or "").strip()
    if fragment.startswith("#"):
        fragment = fragment[1:]
    return fragment


class Location:
    """The current fragment plus a browser-style back/forward history.

    Subscribers are told about every change of fragment, whichever way it
    happened: assignment or history traversal.
    """

    def __init__(self, fragment: str = ""):
        self._entries: List[str] = [normalize_fragment(fragment)]
        self._cursor = 0
        self._listeners: List[FragmentListener] = []

    @property
    def fragment(self) -> str:
        return self._entries[self._cursor]

    @property
    def can_go_back(self) -> bool:
        return self._cursor > 0

    @property
    def can_go_forward(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def subscribe(self, listener: FragmentListener) -> None:
        self._listeners.append(listener)

    def assign(self, fragment: str) -> None:
        fragment = normalize_fragment(fragment)
        if fragment == self.fragment:
            return
        # a new entry drops whatever was ahead of the cursor
        del self._entries[self._cursor + 1 :]
        self._entries.append(fragment)
        self._cursor += 1
        self._changed()

    def back(self) -> bool:
        if not self.can_go_back:
            return False
        self._cursor -= 1
        self._changed()
        return True

    def forward(self) -> bool:
        if not self.can_go_forward:
            return False
        self._cursor += 1
        self._changed()
        return True

    def _changed(self) -> None:
        logger.debug("Fragment is now %r", self.fragment)
        for listener in list(self._listeners):
            listener(self.fragment)
