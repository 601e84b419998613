"""Formatting helpers shared by per-resource renderers.

Everything here returns plain strings so the output drops straight into
`Row.fields`. `human_duration` emits a single compact unit ("5d", "3h"),
which the duration comparator in `a1s.model1.sorting` parses back.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone

from ..model1.types import MISSING_VALUE, NA_VALUE, UNKNOWN_VALUE

_DAY = 24 * 60 * 60
_SIZE_UNITS = "KMGTPE"


def human_duration(d: float | timedelta) -> str:
    """Largest whole unit of `d` (seconds or timedelta): "2y", "5d", "3h", "12m", "40s"."""
    secs = int(d.total_seconds() if isinstance(d, timedelta) else d)
    if secs < 1:
        return "0s"
    days = secs // _DAY
    if days > 365:
        return f"{days // 365}y"
    if days > 0:
        return f"{days}d"
    hours = secs // 3600
    if hours > 0:
        return f"{hours}h"
    minutes = secs // 60
    if minutes > 0:
        return f"{minutes}m"
    return f"{secs}s"


def to_age(ts: datetime | None, now: datetime | None = None) -> str:
    """Age of `ts` relative to `now`; naive datetimes are taken as UTC."""
    if ts is None:
        return UNKNOWN_VALUE
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return human_duration(now - ts)


def na(s: str | None) -> str:
    return s if s else NA_VALUE


def missing(s: str | None) -> str:
    return s if s else MISSING_VALUE


def bool_to_yes_no(b: bool | None) -> str:
    if b is None:
        return NA_VALUE
    return "Yes" if b else "No"


def int_to_str(i: int | None) -> str:
    return NA_VALUE if i is None else str(i)


def format_size(n: int) -> str:
    """Binary units with one decimal: 1536 -> "1.5 KiB"."""
    unit = 1024
    if n < unit:
        return f"{n} B"
    div, exp = unit, 0
    q = n // unit
    while q >= unit:
        div *= unit
        exp += 1
        q //= unit
    return f"{n / div:.1f} {_SIZE_UNITS[exp]}iB"


def format_size_gb(size_gb: int) -> str:
    return f"{size_gb} GiB"


def truncate(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= 3:
        return s[:max_len]
    return s[:max_len - 3] + "..."


def get_tag(tags: Mapping[str, str] | None, key: str) -> str:
    return (tags or {}).get(key, "")


def extract_name_tag(tags: Mapping[str, str] | None) -> str:
    return get_tag(tags, "Name")


def join_strings(sep: str, *parts: str) -> str:
    """Join the non-empty parts."""
    return sep.join(p for p in parts if p)


def map_to_str(m: Mapping[str, str] | None) -> str:
    """Sorted k=v pairs joined by commas."""
    if not m:
        return ""
    return ",".join(f"{k}={v}" for k, v in sorted(m.items()))


def tags_from_list(items: Iterable[Mapping[str, str]] | None) -> dict[str, str]:
    """Provider tag lists ([{"Key": k, "Value": v}, ...]) as a plain dict."""
    out: dict[str, str] = {}
    for it in items or ():
        k = it.get("Key")
        if k:
            out[k] = it.get("Value", "")
    return out


__all__ = [
    "human_duration",
    "to_age",
    "na",
    "missing",
    "bool_to_yes_no",
    "int_to_str",
    "format_size",
    "format_size_gb",
    "truncate",
    "get_tag",
    "extract_name_tag",
    "join_strings",
    "map_to_str",
    "tags_from_list",
]
