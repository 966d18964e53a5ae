from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


# Defaults
_DEFAULT_PROMPT = "λ> "
_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def path_from_env(var: str) -> Optional[Path]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


def get_prompt() -> str:
    return os.environ.get('TAILSCHEME_PROMPT', _DEFAULT_PROMPT)


def get_history_path() -> Optional[Path]:
    # None means history lives in memory for the session only
    return path_from_env('TAILSCHEME_HISTORY_FILE')


def get_prelude_path() -> Optional[Path]:
    return path_from_env('TAILSCHEME_PRELUDE_PATH')


def get_log_level() -> str:
    level = os.environ.get('TAILSCHEME_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    return level if level in _LOG_LEVELS else _DEFAULT_LOG_LEVEL


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('TAILSCHEME_RECURSION_LIMIT')
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        return None
    return limit if limit > 0 else None


def normalize_log_level(value: str | None) -> str:
    """Upper-case a user-supplied level name, falling back to the configured one."""
    if value and value.strip().upper() in _LOG_LEVELS:
        return value.strip().upper()
    return get_log_level()
