from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from .config import FEATURED_COUNT, WORDS_PER_MINUTE
from .datamodels import (
    Failed,
    Home,
    Loaded,
    Loading,
    LoadState,
    Story,
    ViewState,
)

LOADING_MESSAGE = "Loading stories..."
EMPTY_MESSAGE = "No stories found. Check back soon!"
NOT_FOUND_MESSAGE = "Story not found."
UNKNOWN_AUTHOR = "Unknown"
NO_CONTENT = "No content provided."


# --- View models ---
@dataclass(frozen=True)
class StoryCard:
    id: str
    title: str
    subtitle: str
    thumbnail_url: Optional[str]


@dataclass(frozen=True)
class HomePage:
    featured: Tuple[StoryCard, ...]
    stories: Tuple[StoryCard, ...]

    @property
    def total(self) -> int:
        return len(self.stories)


@dataclass(frozen=True)
class StoryPage:
    id: str
    title: str
    subtitle: str
    thumbnail_url: Optional[str]
    body: str
    reading_minutes: int


@dataclass(frozen=True)
class StatusPage:
    kind: str  # "loading", "error", "empty" or "not_found"
    message: str


Page = Union[HomePage, StoryPage, StatusPage]


def story_title(story: Story) -> str:
    return story.title or f"Untitled Story #{story.position}"


def reading_minutes(text: str) -> int:
    return max(1, round(len(text.split()) / WORDS_PER_MINUTE))


def _card(story: Story) -> StoryCard:
    return StoryCard(
        id=story.id,
        title=story_title(story),
        subtitle=story.subtitle or UNKNOWN_AUTHOR,
        thumbnail_url=story.thumbnail_url,
    )


def render_home(state: LoadState) -> Union[HomePage, StatusPage]:
    if isinstance(state, Loading):
        return StatusPage("loading", LOADING_MESSAGE)
    if isinstance(state, Failed):
        return StatusPage("error", state.message)
    if not state.collection:
        return StatusPage("empty", EMPTY_MESSAGE)
    featured = tuple(_card(s) for s in state.collection.featured(FEATURED_COUNT))
    return HomePage(featured=featured, stories=tuple(_card(s) for s in state.collection))


def render_story(story: Optional[Story]) -> Union[StoryPage, StatusPage]:
    if story is None:
        return StatusPage("not_found", NOT_FOUND_MESSAGE)
    body = story.story_text or NO_CONTENT
    return StoryPage(
        id=story.id,
        title=story_title(story),
        subtitle=story.subtitle or UNKNOWN_AUTHOR,
        thumbnail_url=story.thumbnail_url,
        body=body,
        reading_minutes=reading_minutes(body),
    )


def render(view: ViewState, state: LoadState) -> Page:
    """Project a view and load state onto a page.

    Loading and failure take precedence over whatever view is active.
    """
    if not isinstance(state, Loaded) or isinstance(view, Home):
        return render_home(state)
    return render_story(view.story)


# --- Targets ---
class RenderTarget(Protocol):
    def show_status(self, page: StatusPage) -> None: ...

    def show_home(self, page: HomePage) -> None: ...

    def show_story(self, page: StoryPage) -> None: ...


def paint(page: Page, target: RenderTarget) -> None:
    if isinstance(page, HomePage):
        target.show_home(page)
    elif isinstance(page, StoryPage):
        target.show_story(page)
    else:
        target.show_status(page)


class ConsoleTarget:
    """Draws pages straight to a rich Console, for non-interactive use."""

    STATUS_STYLES = {
        "loading": "dim",
        "error": "bold red",
        "empty": "dim",
        "not_found": "yellow",
    }

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_status(self, page: StatusPage) -> None:
        style = self.STATUS_STYLES.get(page.kind, "")
        self.console.print(Text(page.message, style=style))

    def show_home(self, page: HomePage) -> None:
        self.console.print(Rule("Featured Echoes"))
        for card in page.featured:
            body = Text(card.subtitle, style="dim")
            body.append(f"\n#{card.id}", style="cyan")
            self.console.print(Panel(body, title=card.title, title_align="left"))
        self.console.print(
            Text(f"View All Stories ({page.total})", style="bold"), justify="center"
        )

    def show_story(self, page: StoryPage) -> None:
        header = Text(page.title, style="bold")
        header.append(f"\n{page.subtitle}", style="italic")
        header.append(f"\n~{page.reading_minutes} min read", style="dim")
        parts = [header]
        if page.thumbnail_url:
            parts.append(Text(page.thumbnail_url, style="blue underline"))
        parts.append(Rule())
        parts.append(Text(page.body))
        self.console.print(Group(*parts))
