# state_codec.py
# Session state <-> URL query string.
#
# Text fields are carried as URL-safe tokens: UTF-8 bytes, standard base64,
# with every padding "=" swapped for "_" so a token never collides with the
# "&" / "=" syntax of the query string.
#
#   ?f=<format index>&p=<code token>&a=<args token>

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple, Tuple

logger = logging.getLogger(__name__)

FORMAT_KEY = "f"
CODE_KEY = "p"
ARGS_KEY = "a"

PAD = "="
PAD_SUBSTITUTE = "_"


class StateCodecError(ValueError):
    """Base class for codec failures."""


class EncodingError(StateCodecError):
    pass


class DecodingError(StateCodecError):
    pass


@dataclass(frozen=True)
class SessionState:
    format_index: int = 0
    code_text: str = ""
    args_text: str = ""


class CodecResult(NamedTuple):
    """A value with defaults already applied, plus what went wrong getting it.

    ``errors`` holds ``(key, exception)`` pairs, one per field that had to
    fall back to its default.
    """
    value: Any
    errors: Tuple[Tuple[str, StateCodecError], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def encode_text(text: str) -> str:
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"text is not representable as UTF-8: {e}") from e
    return base64.b64encode(raw).decode("ascii").replace(PAD, PAD_SUBSTITUTE)


def decode_text(token: str) -> str:
    """Inverse of :func:`encode_text`.

    Accepts tokens whose "+" came back as a space after form-style query
    decoding, and tokens with their trailing padding stripped.
    """
    s = token.replace(PAD_SUBSTITUTE, PAD).replace(" ", "+")
    s = s.rstrip(PAD)
    if len(s) % 4 == 1:
        raise DecodingError(f"invalid token length: {token!r}")
    s += PAD * (-len(s) % 4)
    try:
        raw = base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodingError(f"invalid token {token!r}: {e}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodingError(f"token {token!r} is not UTF-8 text: {e}") from e


def encode_state(state: SessionState) -> CodecResult:
    """Build the query string for ``state``.

    ``f`` is always written, so the default state encodes to ``?f=0``.
    Empty text fields, and fields that cannot be encoded, are left out.
    """
    params = []
    errors = []
    if state.format_index is not None:
        params.append((FORMAT_KEY, str(state.format_index)))
    for key, text in ((CODE_KEY, state.code_text), (ARGS_KEY, state.args_text)):
        try:
            token = encode_text(text)
        except EncodingError as e:
            errors.append((key, e))
            token = ""
        if token != "":
            params.append((key, token))
    query = "?" + "&".join(f"{k}={v}" for k, v in params) if params else ""
    return CodecResult(query, tuple(errors))


def _parse_format_index(raw: str, format_count: int) -> int:
    try:
        index = int(raw)
    except ValueError:
        raise DecodingError(f"format index {raw!r} is not an integer") from None
    if not 0 <= index < format_count:
        raise DecodingError(f"format index {index} out of range (0..{format_count - 1})")
    return index


def query_pairs(query_string: str) -> list:
    """Split a query string into ``(key, value)`` pairs; pairs without "=" are dropped."""
    pairs = []
    for param in (query_string or "").lstrip("?").split("&"):
        key, sep, value = param.partition("=")
        if sep:
            pairs.append((key, value))
    return pairs


def first_values(pairs: Iterable[Tuple[str, str]]) -> dict:
    # first occurrence of a key wins
    values = {}
    for key, value in pairs:
        values.setdefault(key, value)
    return values


def parse_query(query_string: str) -> dict:
    return first_values(query_pairs(query_string))


def decode_state(query_string: str, format_count: int) -> CodecResult:
    """Parse a query string into a :class:`SessionState`. Never raises."""
    return decode_pairs(query_pairs(query_string), format_count)


def decode_pairs(pairs: Iterable[Tuple[str, str]], format_count: int) -> CodecResult:
    """Like :func:`decode_state`, for a query that is already split and unescaped."""
    values = first_values(pairs)
    errors = []

    format_index = 0
    if FORMAT_KEY in values:
        try:
            format_index = _parse_format_index(values[FORMAT_KEY], format_count)
        except DecodingError as e:
            errors.append((FORMAT_KEY, e))

    texts = {CODE_KEY: "", ARGS_KEY: ""}
    for key in texts:
        if key not in values:
            continue
        try:
            texts[key] = decode_text(values[key])
        except DecodingError as e:
            errors.append((key, e))

    state = SessionState(format_index, texts[CODE_KEY], texts[ARGS_KEY])
    return CodecResult(state, tuple(errors))


def log_errors(result: CodecResult, action: str) -> None:
    for key, error in result.errors:
        logger.warning("Error while %s %r: %s", action, key, error)
