from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type

from ..datamodels import Story, StoryCollection
from ..errors import ParseError, StoryLoadError

logger = logging.getLogger("echoes")


class StorySource(ABC):
    """Abstract base class for a place stories can be loaded from."""

    @property
    @abstractmethod
    def label(self) -> str:
        """Short description of the source for the status bar."""
        pass

    @abstractmethod
    def load(self) -> StoryCollection:
        """Return the stories, or raise a StoryLoadError."""
        pass


def _optional_text(record: dict, key: str) -> Optional[str]:
    value = record.get(key)
    return value if isinstance(value, str) else None


def _story_id(value: Any) -> Optional[str]:
    # bool is an int subclass, but True is not an id
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def parse_document(
    text: str | bytes,
    shape_error: Type[StoryLoadError] = ParseError,
    user_message: Optional[str] = None,
) -> StoryCollection:
    """Parse a ``{"stories": [...]}`` document into a StoryCollection.

    Malformed JSON always raises ParseError. A document of the wrong shape
    raises ``shape_error``, so file uploads can report InvalidFormat while
    remote loads report ParseError.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Malformed JSON: {e}", user_message) from e

    if not isinstance(data, dict) or not isinstance(data.get("stories"), list):
        raise shape_error(
            f"Expected an object with a 'stories' array, got {type(data).__name__}",
            user_message,
        )

    stories: List[Story] = []
    for position, record in enumerate(data["stories"], start=1):
        if not isinstance(record, dict):
            raise shape_error(f"Story #{position} is not an object", user_message)
        story_id = _story_id(record.get("id"))
        if story_id is None:
            raise shape_error(
                f"Story #{position} has no usable 'id': {record.get('id')!r}",
                user_message,
            )
        stories.append(
            Story(
                id=story_id,
                position=position,
                title=_optional_text(record, "title"),
                subtitle=_optional_text(record, "subtitle"),
                thumbnail_url=_optional_text(record, "thumbnailUrl"),
                story_text=_optional_text(record, "storyText"),
            )
        )

    logger.debug("Parsed %d stories", len(stories))
    return StoryCollection.of(stories)
