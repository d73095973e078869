# interpreter.py
# Finds the external interpreter function named in the settings.
#
# The interpreter lives in its own package; this page only needs a callable
#   run(code: str, format_id: str, args: list[str], debug: bool) -> str
# given as "package.module:callable".

from __future__ import annotations

import importlib
import logging

logger = logging.getLogger(__name__)


class InterpreterNotFound(LookupError):
    pass


def load_interpreter(target: str):
    module_name, sep, attr = (target or "").strip().partition(":")
    if not sep or not module_name or not attr:
        raise InterpreterNotFound(f"expected 'module:callable', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InterpreterNotFound(f"cannot import {module_name!r}: {e}") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise InterpreterNotFound(f"{module_name!r} has no attribute {attr!r}") from None
    if not callable(obj):
        raise InterpreterNotFound(f"{target!r} is not callable")
    logger.info("Using interpreter %s", target)
    return obj


def unavailable_interpreter(reason: str):
    """Stand-in used when no interpreter could be loaded."""
    def run(code, format_id, args, debug):
        return f"Interpreter unavailable: {reason}"
    return run
