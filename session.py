# session.py
# Moves a SessionState between the page controls and the interpreter.

from __future__ import annotations

import logging
from typing import Callable, List, Protocol, Sequence

from state_codec import SessionState, decode_pairs, log_errors, query_pairs

logger = logging.getLogger(__name__)

# run(code, format_id, args, debug) -> result text
InterpreterFn = Callable[[str, str, List[str], bool], str]


class SessionView(Protocol):
    """The controls of one page: format selector, code, args and result."""

    format_index: int
    code_text: str
    args_text: str

    def show_result(self, text: str) -> None: ...


def lines_of(args_text: str) -> List[str]:
    return args_text.split("\n") if args_text else []


class SessionController:
    def __init__(self, view: SessionView, formats: Sequence[str],
                 interpreter: InterpreterFn, debug: bool = False):
        if not formats:
            raise ValueError("at least one code format is required")
        self.view = view
        self.formats = list(formats)
        self.interpreter = interpreter
        self.debug = debug

    def valid_index(self, index) -> int:
        if isinstance(index, int) and 0 <= index < len(self.formats):
            return index
        return 0

    def format_identifier_for(self, index: int) -> str:
        return self.formats[self.valid_index(index)].lower()

    def read_from_ui(self) -> SessionState:
        return SessionState(
            format_index=self.valid_index(self.view.format_index),
            code_text=self.view.code_text or "",
            args_text=self.view.args_text or "",
        )

    def write_to_ui(self, state: SessionState) -> None:
        self.view.format_index = self.valid_index(state.format_index)
        self.view.code_text = state.code_text
        self.view.args_text = state.args_text

    def load(self, query_string: str) -> SessionState:
        """Populate the controls from a permalink query string."""
        return self.load_pairs(query_pairs(query_string))

    def load_pairs(self, pairs) -> SessionState:
        """Same as :meth:`load`, for query parameters that are already split."""
        result = decode_pairs(pairs, len(self.formats))
        log_errors(result, "decoding")
        self.write_to_ui(result.value)
        return result.value

    def run(self) -> str:
        state = self.read_from_ui()
        format_id = self.format_identifier_for(state.format_index)
        args = lines_of(state.args_text)
        logger.debug("Running %d chars of %s code with %d args",
                     len(state.code_text), format_id, len(args))
        try:
            result = self.interpreter(state.code_text, format_id, args, self.debug)
        except Exception as e:
            logger.exception("Interpreter raised")
            result = f"{type(e).__name__}: {e}"
        result = "" if result is None else str(result)
        self.view.show_result(result)
        return result
