from __future__ import annotations

from typing import Optional, Union

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Header, Input, Label, Static
from rich.text import Text

from .render import StatusPage, StoryPage
from .widgets import StatusBar, StatusMessage


# --- Story screen ---
class StoryScreen(Screen):
    """A single story, or the not-found page for a dangling deep link.

    The app pushes and pops this screen to follow the router; the screen
    never changes the view itself except by asking the controller to go home.
    """

    BINDINGS = [
        Binding("escape,b,left", "go_home", "Back to Home"),
        Binding("down", "scroll_down", "Scroll Down", show=False),
        Binding("up", "scroll_up", "Scroll Up", show=False),
    ]

    def __init__(self, page: Union[StoryPage, StatusPage]):
        super().__init__()
        self.page = page

    @property
    def story_id(self) -> Optional[str]:
        return self.page.id if isinstance(self.page, StoryPage) else None

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="story-scroll"):
            if isinstance(self.page, StoryPage):
                yield Static(Text("← Back to Home"), classes="back-link")
                yield Static(self.page.title, id="story-title")
                yield Static(self.page.subtitle, id="story-subtitle")
                if self.page.thumbnail_url:
                    yield Static(
                        Text(self.page.thumbnail_url, style="underline"),
                        id="story-thumbnail",
                    )
                yield Static(self.page.body, id="story-body")
            else:
                yield StatusMessage(id="story-status")
        yield StatusBar()

    def on_mount(self) -> None:
        if isinstance(self.page, StoryPage):
            self.title = self.page.title
            self.sub_title = f"~{self.page.reading_minutes} min read"
        else:
            self.query_one(StatusMessage).show(self.page.kind, self.page.message)
        self.query_one("#story-scroll").focus()
        self.query_one(StatusBar).set_keybindings(
            f"[b {self.app.get_keybinding_style()}]esc[/] back to home"
        )

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action == "copy_text" and not self.app.surface.context_actions_enabled:
            return False
        return True

    def action_go_home(self) -> None:
        self.app.controller.navigate_to_home()

    def action_scroll_down(self) -> None:
        self.query_one("#story-scroll").scroll_down()

    def action_scroll_up(self) -> None:
        self.query_one("#story-scroll").scroll_up()


class PromptScreen(ModalScreen[Optional[str]]):
    """Ask for one line of text; dismisses with None on escape."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, prompt: str, placeholder: str = ""):
        super().__init__()
        self.prompt = prompt
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-dialog"):
            yield Label(self.prompt, classes="prompt-label")
            yield Input(placeholder=self.placeholder, id="prompt-input")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss(None)
