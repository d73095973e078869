import os.path

import pytest

from interpreter import InterpreterNotFound, load_interpreter, unavailable_interpreter


def test_load_interpreter():
    assert load_interpreter("os.path:join") is os.path.join


def test_load_nested_attribute():
    assert load_interpreter("os:path.join") is os.path.join


@pytest.mark.parametrize("target", [
    "",
    "os.path.join",
    ":join",
    "os.path:",
    "no_such_module_for_hbl:run",
    "os.path:no_such_function",
    "os:sep",
])
def test_bad_targets(target):
    with pytest.raises(InterpreterNotFound):
        load_interpreter(target)


def test_unavailable_interpreter():
    run = unavailable_interpreter("HBL_INTERPRETER is not set")
    assert run("(+ 1 2)", "pretty", [], False) == "Interpreter unavailable: HBL_INTERPRETER is not set"
