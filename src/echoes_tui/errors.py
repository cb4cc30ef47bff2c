from __future__ import annotations

from typing import Optional

LOAD_FAILED_MESSAGE = "Failed to load stories. Please try again later."
UPLOAD_FAILED_MESSAGE = 'Failed to load custom file. Make sure it has a "stories" array.'


class StoryLoadError(Exception):
    """Base class for everything that can go wrong while loading stories.

    ``user_message`` is what ends up on screen; the exception text itself is
    only written to the log.
    """

    default_user_message = LOAD_FAILED_MESSAGE

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or self.default_user_message


class NetworkError(StoryLoadError):
    """The fetch failed or came back with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message, user_message)
        self.status = status


class ParseError(StoryLoadError):
    """Malformed JSON, or JSON that is not a stories document."""


class InvalidFormat(StoryLoadError):
    """A user-supplied file without the required ``stories`` array."""

    default_user_message = UPLOAD_FAILED_MESSAGE
