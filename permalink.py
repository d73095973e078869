# permalink.py
# Builds the shareable URL for the current session and "shares" it:
# copy the link to the clipboard, then (whether the copy worked or not)
# go to the link.

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import urlsplit, urlunsplit

from state_codec import encode_state, log_errors

logger = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    pass


class Clipboard(Protocol):
    async def write_text(self, text: str) -> None: ...


class Navigator(Protocol):
    def assign(self, url: str) -> None: ...


def page_url(url: str) -> str:
    """Origin + path of ``url``, without query string or fragment."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class PermalinkService:
    def __init__(self, controller, base_url: str, clipboard: Clipboard, navigator: Navigator):
        self.controller = controller
        self.base_url = page_url(base_url)
        self.clipboard = clipboard
        self.navigator = navigator

    def build_link(self) -> str:
        result = encode_state(self.controller.read_from_ui())
        log_errors(result, "encoding")
        return self.base_url + result.value

    async def share(self) -> str:
        permalink = self.build_link()
        try:
            await self.clipboard.write_text(permalink)
        except (ClipboardError, OSError) as e:
            logger.warning("Could not copy permalink to clipboard: %s", e)
        except Exception:
            logger.exception("Unexpected clipboard failure")
        self.navigator.assign(permalink)
        return permalink
