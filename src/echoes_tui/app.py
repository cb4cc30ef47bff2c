from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Button,
    Header,
    ListView,
    LoadingIndicator,
    Static,
)

from .config import DEFAULT_THEME, UI_DEFAULTS, load_themes
from .controller import LoadJob, LoadOutcome, StoryController
from .errors import StoryLoadError
from .guard import TextualSurface
from .messages import ControllerChanged
from .render import HomePage, StatusPage, StoryPage, paint
from .screens import PromptScreen, StoryScreen
from .sources.base import StorySource
from .widgets import StatusBar, StatusMessage, StoryCardItem

logger = logging.getLogger("echoes")

HERO_TEXT = (
    "[b]Where Moments Transcend Time[/b]\n\n"
    "Explore a collection of flash fiction, weaving tales of past, present, "
    "and future in a single, captivating breath."
)


class EchoesApp(App):
    """The storytelling site as a terminal app.

    The app is a render target for the controller: every controller change
    is painted through ``show_status`` / ``show_home`` / ``show_story``.
    """

    TITLE = "Temporal Echoes"
    SUB_TITLE = "Flash fiction across time"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Reload"),
        Binding("u", "upload", "Upload file"),
        Binding("g", "go_to", "Go to #id"),
        Binding("a", "toggle_all", "All stories"),
        Binding("left_square_bracket", "history_back", "Back", show=False),
        Binding("right_square_bracket", "history_forward", "Forward", show=False),
    ]

    def __init__(
        self,
        source: StorySource,
        theme: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
        fragment: str = "",
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.config = config or {}
        self._theme_name = theme or DEFAULT_THEME
        self.source = source
        self.surface = TextualSurface(self)
        self.controller = StoryController(self.surface, fragment)
        self.show_all = False
        self._home_page: Optional[HomePage] = None
        self._jobs: Dict[Worker, LoadJob] = {}

    @property
    def theme_name(self) -> str:
        return self._theme_name

    def get_keybinding_style(self) -> str:
        return "$accent"

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="home"):
            with Vertical(id="hero"):
                yield Static(HERO_TEXT, id="hero-text")
                yield Button("Begin Your Journey", id="begin", variant="primary")
            yield Static("Featured Echoes", classes="pane-title")
            yield LoadingIndicator(id="home-loading")
            yield StatusMessage(id="home-status")
            yield ListView(id="featured-list")
            yield Button("View All Stories", id="view-all")
            yield ListView(id="all-list")
        yield StatusBar()

    def on_mount(self) -> None:
        themes = load_themes(self.config)
        for theme in themes.values():
            self.register_theme(theme)
        if self._theme_name not in themes:
            logger.warning("Theme '%s' not found, using %s", self._theme_name, DEFAULT_THEME)
            self._theme_name = DEFAULT_THEME
        self.theme = self._theme_name

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.query_one(StatusBar).set_keybindings(
            keybindings_text.format(color=self.get_keybinding_style())
        )

        self.controller.subscribe(lambda: self.post_message(ControllerChanged()))
        self.controller.subscribe_errors(
            lambda message: self.notify(message, severity="error")
        )
        self._paint()
        self._run_job(self.controller.start(self.source))

    def on_unmount(self) -> None:
        self.controller.teardown()

    # --- Loading ---
    def _run_job(self, job: LoadJob) -> None:
        self.query_one(StatusBar).loading_status = f"Loading {job.source.label}..."
        worker = self.run_worker(
            job.run,
            name="stories_loader",
            thread=True,
            exit_on_error=False,
        )
        self._jobs[worker] = job

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        job = self._jobs.get(event.worker)
        if job is None or event.state in (WorkerState.PENDING, WorkerState.RUNNING):
            return
        del self._jobs[event.worker]
        if not self._jobs:
            self.query_one(StatusBar).loading_status = ""

        if event.state is WorkerState.SUCCESS:
            self.controller.finish(event.worker.result)
        elif event.state is WorkerState.ERROR:
            error = event.worker.error
            logger.error("Stories worker failed: %s", error)
            self.controller.finish(
                LoadOutcome(job.ticket, job.source, error=StoryLoadError(str(error)))
            )

    # --- Rendering ---
    def on_controller_changed(self, message: ControllerChanged) -> None:
        self._paint()

    def _paint(self) -> None:
        self.query_one(StatusBar).source_label = self.controller.source_label
        paint(self.controller.current_page(), self)

    def show_status(self, page: StatusPage) -> None:
        if page.kind == "not_found":
            self._present_story(page)
            return
        self._close_story()
        self._home_page = None
        self.query_one("#home-loading").display = page.kind == "loading"
        self.query_one("#home-status", StatusMessage).show(page.kind, page.message)
        for widget_id in ("#featured-list", "#view-all", "#all-list", "#begin"):
            self.query_one(widget_id).display = False

    def show_home(self, page: HomePage) -> None:
        self._close_story()
        self.query_one("#home-loading").display = False
        self.query_one("#home-status").display = False
        self.query_one("#begin").display = True
        self.query_one("#featured-list").display = True
        self.query_one("#view-all").display = True
        self.query_one("#all-list").display = self.show_all
        if page == self._home_page:
            return
        self._home_page = page

        featured = self.query_one("#featured-list", ListView)
        featured.clear()
        featured.extend(StoryCardItem(card) for card in page.featured)

        all_list = self.query_one("#all-list", ListView)
        all_list.clear()
        all_list.extend(StoryCardItem(card) for card in page.stories)
        self.query_one("#view-all", Button).label = f"View All Stories ({page.total})"

    def show_story(self, page: StoryPage) -> None:
        self._present_story(page)

    def _present_story(self, page) -> None:
        screen = self.screen
        if isinstance(screen, StoryScreen):
            if screen.page == page:
                return
            self.switch_screen(StoryScreen(page))
            return
        # a story left under a modal is closed along with the modal
        self._close_story()
        self.push_screen(StoryScreen(page))

    def _close_story(self) -> None:
        stack = self.screen_stack
        lowest = next(
            (i for i, screen in enumerate(stack) if isinstance(screen, StoryScreen)), None
        )
        if lowest is None:
            return
        for _ in range(len(stack) - lowest):
            self.pop_screen()

    # --- Events & actions ---
    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, StoryCardItem):
            self.controller.navigate_to_story(event.item.card.id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "begin":
            if self._home_page and self._home_page.featured:
                self.controller.navigate_to_story(self._home_page.featured[0].id)
        elif event.button.id == "view-all":
            self.action_toggle_all()

    def action_toggle_all(self) -> None:
        self.show_all = not self.show_all
        if self._home_page is not None:
            self.query_one("#all-list").display = self.show_all

    def action_refresh(self) -> None:
        self._run_job(self.controller.start(self.source))

    def action_upload(self) -> None:
        self.push_screen(
            PromptScreen("Load stories from a local JSON file", "~/stories.json"),
            self._on_upload_path,
        )

    def _on_upload_path(self, path: Optional[str]) -> None:
        if path:
            self._run_job(self.controller.upload(path))

    def action_go_to(self) -> None:
        self.push_screen(PromptScreen("Go to story", "#story-id"), self._on_go_to)

    def _on_go_to(self, fragment: Optional[str]) -> None:
        if fragment is not None:
            self.controller.go_to(fragment)

    def action_history_back(self) -> None:
        self.controller.back()

    def action_history_forward(self) -> None:
        self.controller.forward()
