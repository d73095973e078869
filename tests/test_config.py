import pytest

from config import DEFAULT_CODE_FORMATS, _parse_formats, load_settings

HBL_VARS = ["HBL_INTERPRETER", "HBL_CODE_FORMATS", "HBL_DEBUG",
            "HBL_PUBLIC_URL", "HBL_PAGE_TITLE", "HBL_LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch):
    for name in HBL_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()
    assert s.INTERPRETER == ""
    assert s.CODE_FORMATS == DEFAULT_CODE_FORMATS
    assert s.DEBUG is False
    assert s.PUBLIC_URL == "http://localhost:8501/"
    assert s.LOG_LEVEL == "INFO"


def test_from_environment(clean_env):
    clean_env.setenv("HBL_INTERPRETER", " hbl.interpreter:run_hbl ")
    clean_env.setenv("HBL_CODE_FORMATS", "Nibbles, Bytes")
    clean_env.setenv("HBL_DEBUG", "yes")
    clean_env.setenv("HBL_LOG_LEVEL", "debug")
    s = load_settings()
    assert s.INTERPRETER == "hbl.interpreter:run_hbl"
    assert s.CODE_FORMATS == ("Nibbles", "Bytes")
    assert s.DEBUG is True
    assert s.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("raw, expected", [
    ("A,B", ("A", "B")),
    (" A , ,B,", ("A", "B")),
    ("", DEFAULT_CODE_FORMATS),
    (" , ", DEFAULT_CODE_FORMATS),
])
def test_parse_formats(raw, expected):
    assert _parse_formats(raw) == expected
