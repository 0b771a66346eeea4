from __future__ import annotations
import os
from typing import Any, Optional


_DEFAULT_DEBOUNCE_MS = 100
_DEFAULT_LOG_LEVEL = 'WARNING'

RANGE_FORMAT_CHECK = 'check'
RANGE_FORMAT_TEXT = 'text'


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_debounce_ms() -> int:
    return max(0, int_from_env('LUATOOL_DEBOUNCE_MS', _DEFAULT_DEBOUNCE_MS))


_LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def get_log_level() -> str:
    level = os.environ.get('LUATOOL_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    return level if level in _LOG_LEVELS else _DEFAULT_LOG_LEVEL


def get_range_format_mode() -> str:
    mode = os.environ.get('LUATOOL_RANGE_FORMAT', RANGE_FORMAT_CHECK).strip().lower()
    return mode if mode in (RANGE_FORMAT_CHECK, RANGE_FORMAT_TEXT) else RANGE_FORMAT_CHECK


def get_tool_path_override(tool: str) -> Optional[str]:
    # e.g. LUATOOL_SELENE_PATH
    raw = os.environ.get(f'LUATOOL_{tool.upper()}_PATH')
    return raw.strip() if raw and raw.strip() else None


def tool_path_from_settings(settings: Any, tool: str) -> Optional[str]:
    """Return the override executable path for *tool* from client settings.

    Accepts ``{"<tool>BinFilePath": path}`` or ``{"<tool>": {"binFilePath": path}}``.
    Everything else in the settings object is ignored.
    """
    if not isinstance(settings, dict):
        return None
    value = settings.get(f'{tool}BinFilePath')
    if value is None:
        section = settings.get(tool)
        if isinstance(section, dict):
            value = section.get('binFilePath')
    return value if isinstance(value, str) and value else None
