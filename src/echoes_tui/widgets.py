from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import ListItem, Static
from textual.reactive import reactive
from rich.text import Text

from .render import StoryCard


# --- UI Widgets ---
class StoryCardItem(ListItem):
    def __init__(self, card: StoryCard):
        super().__init__()
        self.card = card

    def compose(self) -> ComposeResult:
        with Vertical(classes="card-container"):
            yield Static(self.card.title, classes="card-title")
            yield Static(self.card.subtitle, classes="card-subtitle")
            yield Static(Text("Read More →", style="bold"), classes="card-link")


class StatusBar(Static):
    source_label = reactive("")
    loading_status = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        """Set the keybinding hint text."""
        self.keybinding_hint = hint

    def update_display(self) -> None:
        """Update the status bar display."""
        status_items = []
        if self.loading_status:
            status_items.append(self.loading_status)
        elif self.source_label:
            status_items.append(self.source_label)

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_source_label(self, source_label: str) -> None:
        self.update_display()

    def watch_loading_status(self, loading_status: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()


class StatusMessage(Static):
    STYLES = {
        "error": "bold red",
        "not_found": "bold yellow",
    }

    message = ""

    def show(self, kind: str, message: str) -> None:
        self.message = message
        self.update(Text(message, style=self.STYLES.get(kind, "dim")))
        self.display = True
