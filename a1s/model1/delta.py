"""Row deltas.

A `DeltaRow` holds, per column index, the *previous* value of a cell that
changed between two snapshots, or "" where nothing meaningful changed. Time
columns are never recorded: an age column moves on every tick and would
otherwise flag every row as modified.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .header import Header
    from .row import Row


def fields_differ(a: Sequence[str], b: Sequence[str], age_col: int | None) -> bool:
    """Field-by-field comparison that ignores the cell at `age_col`."""
    if len(a) != len(b):
        return True
    if age_col is None or age_col < 0 or age_col >= len(a):
        return tuple(a) != tuple(b)
    if tuple(a[:age_col]) != tuple(b[:age_col]):
        return True
    return tuple(a[age_col + 1:]) != tuple(b[age_col + 1:])


class DeltaRow(tuple[str, ...]):
    """Previous cell values aligned by column index ("" = unchanged)."""

    def __new__(cls, values: Iterable[str] = ()) -> DeltaRow:
        return super().__new__(cls, tuple(values))

    @classmethod
    def compute(cls, old: Row, new: Row, header: Header) -> DeltaRow:
        deltas = [""] * len(old.fields)
        for i, prev in enumerate(old.fields):
            if i >= len(new.fields):
                continue
            if prev != "" and prev != new.fields[i] and not header.is_time_col(i):
                deltas[i] = prev
        return cls(deltas)

    def is_blank(self) -> bool:
        return all(v == "" for v in self)

    def diff(self, other: Sequence[str], age_col: int | None = None) -> bool:
        return fields_differ(self, other, age_col)

    def customize(self, cols: Sequence[int]) -> DeltaRow:
        """Project onto `cols`; a blank delta stays blank (and empty)."""
        if self.is_blank():
            return DeltaRow()
        return DeltaRow(self[c] if 0 <= c < len(self) else "" for c in cols)

    def clone(self) -> DeltaRow:
        return DeltaRow(self)


__all__ = ["DeltaRow", "fields_differ"]
