import asyncio
import logging

import pytest

from permalink import ClipboardError, PermalinkService, page_url
from session import SessionController
from state_codec import SessionState


class StaticController:
    def __init__(self, state):
        self.state = state

    def read_from_ui(self):
        return self.state


class FakeClipboard:
    def __init__(self, events, error=None):
        self.events = events
        self.error = error

    async def write_text(self, text):
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        self.events.append(("copy", text))


class FakeNavigator:
    def __init__(self, events):
        self.events = events

    def assign(self, url):
        self.events.append(("navigate", url))


STATE = SessionState(2, "(+ 1 2)\n", "3\n4")
LINK = "https://example.org/hbl/?f=2&p=KCsgMSAyKQo_&a=Mwo0"


def make_service(events, error=None, base="https://example.org/hbl/", state=STATE):
    return PermalinkService(StaticController(state), base,
                            FakeClipboard(events, error), FakeNavigator(events))


@pytest.mark.parametrize("url, expected", [
    ("https://example.org/hbl/", "https://example.org/hbl/"),
    ("https://example.org/hbl/?f=1&p=YQ__", "https://example.org/hbl/"),
    ("http://localhost:8501/#top", "http://localhost:8501/"),
])
def test_page_url(url, expected):
    assert page_url(url) == expected


def test_build_link():
    assert make_service([]).build_link() == LINK


def test_build_link_ignores_existing_query():
    service = make_service([], base="https://example.org/hbl/?f=0&p=YQ__")
    assert service.build_link() == LINK


def test_build_link_drops_unencodable_field(caplog):
    service = make_service([], state=SessionState(0, "\udfff", ""))
    with caplog.at_level(logging.WARNING):
        assert service.build_link() == "https://example.org/hbl/?f=0"
    assert "Error while encoding" in caplog.text


def test_share_copies_then_navigates():
    events = []
    link = asyncio.run(make_service(events).share())
    assert link == LINK
    assert events == [("copy", LINK), ("navigate", LINK)]


@pytest.mark.parametrize("error", [ClipboardError("denied"), OSError("no display"), RuntimeError("odd")])
def test_share_navigates_when_clipboard_fails(error):
    events = []
    link = asyncio.run(make_service(events, error).share())
    assert events == [("navigate", LINK)]
    assert link == LINK


class ControlsView:
    format_index = 1
    code_text = "x"
    args_text = ""

    def show_result(self, text):
        pass


def test_share_uses_current_controls():
    controller = SessionController(ControlsView(), ("Pretty", "Hex", "Binary"), lambda *a: "")
    events = []
    service = PermalinkService(controller, "http://localhost:8501/", FakeClipboard(events), FakeNavigator(events))
    asyncio.run(service.share())
    assert events[-1] == ("navigate", "http://localhost:8501/?f=1&p=eA__")
