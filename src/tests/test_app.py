from __future__ import annotations

import json

from textual.widgets import Input, ListView

from echoes_tui.app import EchoesApp
from echoes_tui.datamodels import StoryView
from echoes_tui.errors import NetworkError
from echoes_tui.screens import PromptScreen, StoryScreen
from echoes_tui.sources.base import StorySource, parse_document
from echoes_tui.widgets import StatusMessage

SCENARIO = {
    "stories": [
        {"id": "a1", "title": "T1", "storyText": "First."},
        {"id": "a2", "title": "T2"},
        {"id": "a3", "title": "T3"},
        {"id": "a4", "title": "T4", "subtitle": "Fourth"},
    ]
}


class DocumentSource(StorySource):
    label = "test://stories.json"

    def __init__(self, document):
        self.document = document

    def load(self):
        return parse_document(json.dumps(self.document))


class BrokenSource(StorySource):
    label = "test://broken"

    def load(self):
        raise NetworkError("HTTP error! status: 503", status=503)


async def _settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()
    await pilot.pause()


async def test_home_lists_three_featured_stories():
    app = EchoesApp(DocumentSource(SCENARIO), config={})
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        featured = app.query_one("#featured-list", ListView)
        assert [item.card.id for item in featured.children] == ["a1", "a2", "a3"]
        assert not app.query_one("#all-list").display
        assert app.query_one("#featured-list").display


async def test_fragment_navigation_scenario():
    app = EchoesApp(DocumentSource(SCENARIO), config={})
    async with app.run_test() as pilot:
        await _settle(app, pilot)

        app.controller.go_to("a4")
        await pilot.pause()
        assert isinstance(app.screen, StoryScreen)
        assert app.screen.story_id == "a4"
        assert app.screen.page.title == "T4"
        assert not app.ALLOW_SELECT

        app.controller.go_to("zzz")
        await pilot.pause()
        assert not isinstance(app.screen, StoryScreen)
        assert app.ALLOW_SELECT


async def test_deep_link_opens_after_load():
    app = EchoesApp(DocumentSource(SCENARIO), config={}, fragment="#a2")
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        assert isinstance(app.controller.view, StoryView)
        assert isinstance(app.screen, StoryScreen)
        assert app.screen.story_id == "a2"


async def test_escape_returns_home():
    app = EchoesApp(DocumentSource(SCENARIO), config={}, fragment="a1")
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        assert isinstance(app.screen, StoryScreen)
        await pilot.press("escape")
        await pilot.pause()
        assert not isinstance(app.screen, StoryScreen)
        assert app.controller.location.fragment == ""


async def test_load_failure_shows_message():
    app = EchoesApp(BrokenSource(), config={})
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        status = app.query_one("#home-status", StatusMessage)
        assert status.display
        assert not app.query_one("#featured-list").display
        assert status.message == NetworkError.default_user_message


async def test_view_all_toggles_full_listing():
    app = EchoesApp(DocumentSource(SCENARIO), config={})
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        await pilot.press("a")
        await pilot.pause()
        all_list = app.query_one("#all-list", ListView)
        assert all_list.display
        assert len(all_list.children) == 4


async def test_upload_prompt_with_bad_file_keeps_stories(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1,2,3]", encoding="utf-8")
    app = EchoesApp(DocumentSource(SCENARIO), config={})
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        await pilot.press("u")
        await pilot.pause()
        assert isinstance(app.screen, PromptScreen)
        app.screen.query_one(Input).value = str(path)
        await pilot.press("enter")
        await _settle(app, pilot)
        assert [s.id for s in app.controller.store.collection] == ["a1", "a2", "a3", "a4"]
        assert app.query_one("#featured-list").display


async def test_going_home_under_a_prompt_closes_the_story():
    app = EchoesApp(DocumentSource(SCENARIO), config={}, fragment="a1")
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        assert isinstance(app.screen, StoryScreen)
        await pilot.press("g")
        await pilot.pause()
        assert isinstance(app.screen, PromptScreen)

        app.controller.navigate_to_home()
        await pilot.pause()

        assert not any(isinstance(s, StoryScreen) for s in app.screen_stack)
        assert app.ALLOW_SELECT
