"""A deterrent against casual copying while a story is open.

This is cosmetic. Anyone who wants the text can read stories.json or the
terminal scrollback; nothing here is a security boundary.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from textual.app import App, ScreenStackError

logger = logging.getLogger("echoes")


class GuardSurface(ABC):
    """Whatever the guard switches selection and copy actions off on."""

    @property
    @abstractmethod
    def selection_enabled(self) -> bool:
        pass

    @selection_enabled.setter
    @abstractmethod
    def selection_enabled(self, value: bool) -> None:
        pass

    @property
    @abstractmethod
    def context_actions_enabled(self) -> bool:
        pass

    @context_actions_enabled.setter
    @abstractmethod
    def context_actions_enabled(self, value: bool) -> None:
        pass


class PlainSurface(GuardSurface):
    """Surface with nothing behind it; used outside the TUI."""

    def __init__(self, selection_enabled: bool = True, context_actions_enabled: bool = True):
        self._selection = selection_enabled
        self._context_actions = context_actions_enabled

    @property
    def selection_enabled(self) -> bool:
        return self._selection

    @selection_enabled.setter
    def selection_enabled(self, value: bool) -> None:
        self._selection = value

    @property
    def context_actions_enabled(self) -> bool:
        return self._context_actions

    @context_actions_enabled.setter
    def context_actions_enabled(self, value: bool) -> None:
        self._context_actions = value


class TextualSurface(PlainSurface):
    """Toggles Textual's app-wide text selection.

    Context actions (copy, right click) are only recorded here; the story
    screen consults ``context_actions_enabled`` before running them.
    """

    def __init__(self, app: App):
        super().__init__()
        self.app = app

    @property
    def selection_enabled(self) -> bool:
        return self.app.ALLOW_SELECT

    @selection_enabled.setter
    def selection_enabled(self, value: bool) -> None:
        self.app.ALLOW_SELECT = value
        if value:
            return
        try:
            self.app.screen.clear_selection()
        except ScreenStackError:
            pass


class ContentGuard:
    def __init__(self, surface: GuardSurface):
        self.surface = surface
        self._saved: Optional[Tuple[bool, bool]] = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def activate(self) -> None:
        if self.active:
            return
        self._saved = (
            self.surface.selection_enabled,
            self.surface.context_actions_enabled,
        )
        self.surface.selection_enabled = False
        self.surface.context_actions_enabled = False
        logger.debug("Content guard on")

    def deactivate(self) -> None:
        if self._saved is None:
            return
        selection, context_actions = self._saved
        self._saved = None
        self.surface.selection_enabled = selection
        self.surface.context_actions_enabled = context_actions
        logger.debug("Content guard off")
