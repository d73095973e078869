# config.py
# Page settings from the environment (and a .env file next to this module).

from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

DEFAULT_CODE_FORMATS = ("Pretty", "Hex", "Binary")

def _getenv_bool(name: str, default: bool) -> bool:
    v = os.getenv(name, str(default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")

def _parse_formats(s: str) -> tuple[str, ...]:
    """
    'Pretty, Hex,Binary' -> ('Pretty', 'Hex', 'Binary').
    Empty entries are dropped; an empty list falls back to the defaults.
    """
    formats = tuple(part.strip() for part in (s or "").split(",") if part.strip())
    return formats or DEFAULT_CODE_FORMATS

@dataclass(frozen=True)
class Settings:
    # interpreter
    INTERPRETER: str
    CODE_FORMATS: tuple[str, ...]
    DEBUG: bool

    # page
    PUBLIC_URL: str
    PAGE_TITLE: str
    LOG_LEVEL: str

def load_settings() -> Settings:
    env_path = Path(__file__).resolve().parent / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()

    INTERPRETER = os.getenv("HBL_INTERPRETER", "").strip()
    CODE_FORMATS = _parse_formats(os.getenv("HBL_CODE_FORMATS", ",".join(DEFAULT_CODE_FORMATS)))
    DEBUG = _getenv_bool("HBL_DEBUG", False)

    PUBLIC_URL = os.getenv("HBL_PUBLIC_URL", "http://localhost:8501/").strip()
    PAGE_TITLE = os.getenv("HBL_PAGE_TITLE", "Half-Byte Lisp").strip()
    LOG_LEVEL = os.getenv("HBL_LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        INTERPRETER=INTERPRETER,
        CODE_FORMATS=CODE_FORMATS,
        DEBUG=DEBUG,
        PUBLIC_URL=PUBLIC_URL,
        PAGE_TITLE=PAGE_TITLE,
        LOG_LEVEL=LOG_LEVEL,
    )
