"""Column-aware ordering.

`less` picks a comparison mode from the column's semantics:

* number   - grouping separators stripped, then natural ordering ("9" < "10")
* duration - compact durations ("2d", "5h", "1h30m") compared as total seconds
* capacity - natural ordering of the formatted value ("10 GiB"); mixed units
             are not normalised, so "2 GiB" vs "500 MiB" is not a true
             magnitude comparison
* default  - natural ordering

Values that compare equal fall back to a natural comparison of the row ids,
which makes the order total and independent of sort stability.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from functools import cmp_to_key

from .header import Header
from .row_event import RowEvent
from .types import MISSING_VALUE, NA_VALUE, UNKNOWN_VALUE

_UNITS = {
    "y": 365 * 24 * 60 * 60,
    "d": 24 * 60 * 60,
    "h": 60 * 60,
    "m": 60,
    "s": 1,
}
_DURATION_RE = re.compile(r"(?:\d+[ydhms])+")
_DURATION_PART_RE = re.compile(r"(\d+)([ydhms])")
_NUMBER_RE = re.compile(r"[-+]?\d[\d,]*(?:\.\d+)?")
_PLACEHOLDERS = frozenset({"", NA_VALUE, MISSING_VALUE, UNKNOWN_VALUE})


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def natural_less(a: str, b: str) -> bool:
    """Digit-aware string ordering: "item9" < "item10"."""
    i = j = 0
    la, lb = len(a), len(b)
    while i < la and j < lb:
        ca, cb = a[i], b[j]
        if _is_digit(ca) and _is_digit(cb):
            zi, zj = i, j
            while i < la and a[i] == "0":
                i += 1
            while j < lb and b[j] == "0":
                j += 1
            ei, ej = i, j
            while ei < la and _is_digit(a[ei]):
                ei += 1
            while ej < lb and _is_digit(b[ej]):
                ej += 1
            na, nb = a[i:ei], b[j:ej]
            if len(na) != len(nb):
                return len(na) < len(nb)
            if na != nb:
                return na < nb
            # same magnitude: fewer leading zeros first
            if (i - zi) != (j - zj):
                return (i - zi) < (j - zj)
            i, j = ei, ej
            continue
        if ca != cb:
            return ca < cb
        i += 1
        j += 1
    return (la - i) < (lb - j)


def natural_cmp(a: str, b: str) -> int:
    if natural_less(a, b):
        return -1
    if natural_less(b, a):
        return 1
    return 0


def duration_to_seconds(value: str) -> int:
    """Parse "1y2d", "5h", "90m", "3s" into seconds; placeholders and junk are 0."""
    v = (value or "").strip()
    if v in _PLACEHOLDERS or not _DURATION_RE.fullmatch(v):
        return 0
    return sum(int(n) * _UNITS[u] for n, u in _DURATION_PART_RE.findall(v))


def _cmp_number(a: str, b: str) -> int:
    return natural_cmp(a.replace(",", ""), b.replace(",", ""))


def _cmp_duration(a: str, b: str) -> int:
    da, db = duration_to_seconds(a), duration_to_seconds(b)
    return (da > db) - (da < db)


def _cmp_capacity(a: str, b: str) -> int:
    return natural_cmp(a, b)


def compare(is_number: bool, is_duration: bool, is_capacity: bool,
            id_a: str, id_b: str, a: str, b: str) -> int:
    if is_number:
        c = _cmp_number(a, b)
    elif is_duration:
        c = _cmp_duration(a, b)
    elif is_capacity:
        c = _cmp_capacity(a, b)
    else:
        c = natural_cmp(a, b)
    if c == 0:
        return natural_cmp(id_a, id_b)
    return c


def less(is_number: bool, is_duration: bool, is_capacity: bool,
         id_a: str, id_b: str, a: str, b: str) -> bool:
    return compare(is_number, is_duration, is_capacity, id_a, id_b, a, b) < 0


def is_number_value(value: str) -> bool:
    return bool(_NUMBER_RE.fullmatch(value.strip()))


def column_sort_mode(header: Header, col: int, values: Iterable[str]) -> tuple[bool, bool, bool]:
    """(is_number, is_duration, is_capacity) for column `col`.

    A column is numeric when every non-placeholder value looks like a number
    and it carries no time/capacity attribute.
    """
    is_duration = header.is_time_col(col)
    is_capacity = header.is_capacity_col(col)
    if is_duration or is_capacity:
        return False, is_duration, is_capacity
    seen = False
    for v in values:
        if v.strip() in _PLACEHOLDERS:
            continue
        if not is_number_value(v):
            return False, False, False
        seen = True
    return seen, False, False


def sort_row_events(events: Sequence[RowEvent], header: Header, col_name: str,
                    ascending: bool = True) -> list[RowEvent]:
    """Return `events` ordered by the named column; unknown names keep order."""
    col = header.index_of(col_name)
    if col is None:
        return list(events)

    def cell(re: RowEvent) -> str:
        f = re.row.fields
        return f[col] if col < len(f) else ""

    is_number, is_duration, is_capacity = column_sort_mode(header, col, (cell(e) for e in events))

    def _cmp(x: RowEvent, y: RowEvent) -> int:
        return compare(is_number, is_duration, is_capacity, x.row.id, y.row.id, cell(x), cell(y))

    return sorted(events, key=cmp_to_key(_cmp), reverse=not ascending)


__all__ = [
    "natural_less",
    "natural_cmp",
    "duration_to_seconds",
    "compare",
    "less",
    "is_number_value",
    "column_sort_mode",
    "sort_row_events",
]
