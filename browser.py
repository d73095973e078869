# browser.py
# Streamlit side of the page: widget state as a SessionView, and the small
# client-side script that does what only the browser can do (clipboard,
# top-level navigation, Ctrl+Enter).

from __future__ import annotations

import json
import logging
from typing import MutableMapping, Optional, Sequence

import streamlit as st
from streamlit.components.v1 import html

logger = logging.getLogger(__name__)

# widget keys, same names as the controls of the original page
FORMAT_WIDGET = "code-format"
CODE_WIDGET = "code"
ARGS_WIDGET = "args"
RESULT_WIDGET = "result"

RUN_LABEL = "Run"
_STEPS_KEY = "_browser_steps"
_RENDERED_KEY = "_browser_rendered"


def current_pairs(params) -> list:
    """All ``(key, value)`` pairs of ``st.query_params``, repeated keys included.

    Values are already unescaped, so they are handed to the codec as they are
    instead of being joined back into a query string.
    """
    get_all = getattr(params, "get_all", None)
    pairs = []
    for key in params:
        values = get_all(key) if get_all is not None else params[key]
        if isinstance(values, str):
            values = [values]
        pairs.extend((key, value) for value in values)
    return pairs


class StreamlitView:
    """SessionView over the page's widget state."""

    def __init__(self, formats: Sequence[str], state: Optional[MutableMapping] = None):
        self.formats = list(formats)
        self.state = st.session_state if state is None else state

    @property
    def format_index(self) -> int:
        selected = self.state.get(FORMAT_WIDGET)
        return self.formats.index(selected) if selected in self.formats else 0

    @format_index.setter
    def format_index(self, index: int) -> None:
        self.state[FORMAT_WIDGET] = self.formats[index]

    @property
    def code_text(self) -> str:
        return self.state.get(CODE_WIDGET, "")

    @code_text.setter
    def code_text(self, text: str) -> None:
        self.state[CODE_WIDGET] = text

    @property
    def args_text(self) -> str:
        return self.state.get(ARGS_WIDGET, "")

    @args_text.setter
    def args_text(self, text: str) -> None:
        self.state[ARGS_WIDGET] = text

    def show_result(self, text: str) -> None:
        self.state[RESULT_WIDGET] = text


_BRIDGE_JS = r"""
<script>
(async () => {
  async function copyToClipboard(text){
    try {
      await navigator.clipboard.writeText(text);
      return true;
    } catch (e) {
      // clipboard API refused inside the component frame
      const ta = document.createElement("textarea");
      ta.value = text;
      document.body.appendChild(ta);
      ta.select();
      const ok = document.execCommand("copy");
      ta.remove();
      return ok;
    }
  }

  function navigate(url){
    try {
      window.top.location.assign(url);
    } catch (e) {
      window.parent.location.assign(url);
    }
  }

  const steps = __STEPS__;
  for (const [kind, value] of steps) {
    try {
      if (kind === "copy") {
        if (!(await copyToClipboard(value))) console.log("Clipboard write failed for " + value);
      } else if (kind === "navigate") {
        navigate(value);
      }
    } catch (error) {
      console.log(error);
    }
  }
})();
</script>
"""

_SHORTCUT_JS = r"""
<script>
(() => {
  const doc = window.parent.document;
  if (doc.__hblShortcut) return;
  doc.__hblShortcut = true;
  doc.addEventListener('keyup', (e) => {
    if (e.key === "Enter" && e.ctrlKey) {
      const label = __LABEL__;
      const btn = Array.from(doc.querySelectorAll('button'))
        .find(b => b.innerText.trim() === label);
      if (btn) btn.click();
    }
  });
})();
</script>
"""


def _js_literal(value) -> str:
    # keep "</script>" inside strings from closing the tag
    return json.dumps(value).replace("</", "<\\/")


def shortcut_script(label: str = RUN_LABEL) -> str:
    return _SHORTCUT_JS.replace("__LABEL__", _js_literal(label))


class BrowserBridge:
    """Clipboard and Navigator backed by a script embedded in the page.

    Steps are queued in the session state (they are usually queued from a
    widget callback, before the page run that renders them) and run in
    order by :meth:`render`.
    """

    def __init__(self, state: Optional[MutableMapping] = None):
        self.state = st.session_state if state is None else state

    def _queue(self, kind: str, value: str) -> None:
        steps = list(self.state.get(_STEPS_KEY, []))
        steps.append([kind, value])
        self.state[_STEPS_KEY] = steps

    async def write_text(self, text: str) -> None:
        self._queue("copy", text)

    def assign(self, url: str) -> None:
        self._queue("navigate", url)

    def pending(self) -> list:
        return list(self.state.get(_STEPS_KEY, []))

    def script(self) -> str:
        return _BRIDGE_JS.replace("__STEPS__", _js_literal(self.pending()))

    def render(self) -> None:
        if not self.pending():
            return
        logger.debug("Rendering %d browser steps", len(self.pending()))
        html(self.script(), height=0)
        self.state[_RENDERED_KEY] = self.pending()
        self.state[_STEPS_KEY] = []

    def rendered(self) -> list:
        """Steps handed to the page by the last :meth:`render`."""
        return list(self.state.get(_RENDERED_KEY, []))
