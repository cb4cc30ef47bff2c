from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Sequence, Tuple, Union


# --- Data models ---
@dataclass(frozen=True)
class Story:
    id: str
    position: int
    title: Optional[str] = None
    subtitle: Optional[str] = None
    thumbnail_url: Optional[str] = None
    story_text: Optional[str] = None


@dataclass(frozen=True)
class StoryCollection:
    """Ordered, immutable set of stories from one load."""

    stories: Tuple[Story, ...] = ()
    _index: Dict[str, Story] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index: Dict[str, Story] = {}
        for story in self.stories:
            # first occurrence wins for duplicate ids
            index.setdefault(story.id, story)
        object.__setattr__(self, "_index", index)

    @classmethod
    def of(cls, stories: Sequence[Story]) -> "StoryCollection":
        return cls(tuple(stories))

    def get(self, story_id: str) -> Optional[Story]:
        return self._index.get(story_id)

    def featured(self, count: int) -> Tuple[Story, ...]:
        return self.stories[:count]

    def __len__(self) -> int:
        return len(self.stories)

    def __iter__(self) -> Iterator[Story]:
        return iter(self.stories)


# --- Load states ---
@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded:
    collection: StoryCollection


@dataclass(frozen=True)
class Failed:
    message: str


LoadState = Union[Loading, Loaded, Failed]


# --- View states ---
@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class StoryView:
    story_id: str
    story: Optional[Story] = None


ViewState = Union[Home, StoryView]
