"""Boolean environment flags.

Every on/off setting uses one rule: "1", "true", "yes", "on" enable and
"0", "false", "no", "off" disable (case-insensitive, surrounding blanks
ignored). Anything else leaves the default in place.

Usage:
    from a1s.utils.env_flags import is_truthy_env
    if is_truthy_env('A1S_LOG_CONSOLE'):
        ...
"""
from __future__ import annotations

import os
from collections.abc import Mapping

TRUE_SET: frozenset[str] = frozenset({"1", "true", "yes", "on"})
FALSE_SET: frozenset[str] = frozenset({"0", "false", "no", "off"})


def parse_flag(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    if v in TRUE_SET:
        return True
    if v in FALSE_SET:
        return False
    return default


def is_truthy(value: str | None) -> bool:
    return parse_flag(value, False)


def is_truthy_env(name: str, default: bool = False, environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return parse_flag(env.get(name), default)


__all__ = [
    'TRUE_SET',
    'FALSE_SET',
    'parse_flag',
    'is_truthy',
    'is_truthy_env',
]
