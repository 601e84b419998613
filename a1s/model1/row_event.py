"""Row events and the indexed row-event collection.

`RowEvents` keeps insertion order in a list and a secondary id -> position
index so lookups and upserts are O(1). Every mutating call leaves the list
and the index consistent; deletion rebuilds the index from scratch so no
stale position survives.

A frozen collection (the one inside a published snapshot) refuses every
mutation; `clone()` returns a writable copy.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from ..utils.exceptions import RowNotFoundError, SnapshotPublishedError
from .delta import DeltaRow
from .row import Row
from .types import ResEvent


@dataclass(frozen=True, slots=True)
class RowEvent:
    kind: ResEvent
    row: Row
    deltas: DeltaRow = field(default_factory=DeltaRow)

    def __post_init__(self) -> None:
        if not isinstance(self.deltas, DeltaRow):
            object.__setattr__(self, "deltas", DeltaRow(self.deltas))
        if len(self.deltas) and len(self.deltas) != len(self.row.fields):
            raise ValueError(
                f"delta length {len(self.deltas)} does not match row {self.row.id!r} "
                f"field count {len(self.row.fields)}"
            )

    @classmethod
    def with_deltas(cls, row: Row, deltas: DeltaRow) -> RowEvent:
        return cls(ResEvent.UPDATE, row, deltas)

    @property
    def id(self) -> str:
        return self.row.id

    def clone(self) -> RowEvent:
        return RowEvent(self.kind, self.row.clone(), self.deltas.clone())

    def customize(self, cols: Sequence[int]) -> RowEvent:
        return RowEvent(self.kind, self.row.customize(cols), self.deltas.customize(cols))

    def diff(self, other: RowEvent, age_col: int | None = None) -> bool:
        if self.kind != other.kind:
            return True
        if self.deltas.diff(other.deltas, age_col):
            return True
        return self.row.diff(other.row, age_col)


class RowEvents:
    """Insertion-ordered row events with an id index."""

    def __init__(self, events: Iterable[RowEvent] = ()) -> None:
        self._events: list[RowEvent] = []
        self._index: dict[str, int] = {}
        self._frozen = False
        for e in events:
            self.add(e)

    def freeze(self) -> RowEvents:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self, what: str) -> None:
        if self._frozen:
            raise SnapshotPublishedError(f"cannot {what} rows of a published snapshot")

    def _reindex(self) -> None:
        self._index = {e.row.id: i for i, e in enumerate(self._events)}

    def at(self, i: int) -> RowEvent | None:
        if i < 0 or i >= len(self._events):
            return None
        return self._events[i]

    def set(self, i: int, re: RowEvent) -> None:
        """Replace the event at position i."""
        self._check_writable("set")
        if i < 0 or i >= len(self._events):
            raise IndexError(f"row event index {i} out of range")
        prev = self._events[i]
        if prev.row.id != re.row.id:
            other = self._index.get(re.row.id)
            if other is not None and other != i:
                raise ValueError(f"row id {re.row.id!r} already present at {other}")
            self._index.pop(prev.row.id, None)
        self._events[i] = re
        self._index[re.row.id] = i

    def add(self, re: RowEvent) -> None:
        """Append; an existing id is replaced in place to keep ids unique."""
        self._check_writable("add")
        i = self._index.get(re.row.id)
        if i is not None:
            self._events[i] = re
            return
        self._events.append(re)
        self._index[re.row.id] = len(self._events) - 1

    def upsert(self, re: RowEvent) -> None:
        self._check_writable("upsert")
        i = self._index.get(re.row.id)
        if i is None:
            self.add(re)
        else:
            self._events[i] = re

    def delete(self, row_id: str) -> None:
        self._check_writable("delete")
        victim = self._index.get(row_id)
        if victim is None:
            raise RowNotFoundError(f"unable to delete row with id: {row_id!r}")
        del self._events[victim]
        self._reindex()

    def get(self, row_id: str) -> RowEvent | None:
        i = self._index.get(row_id)
        return None if i is None else self._events[i]

    def find_index(self, row_id: str) -> int | None:
        return self._index.get(row_id)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._index

    def clear(self) -> None:
        self._check_writable("clear")
        self._events.clear()
        self._index.clear()

    def empty(self) -> bool:
        return not self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[RowEvent]:
        return iter(self._events)

    def ids(self) -> list[str]:
        return [e.row.id for e in self._events]

    def clone(self) -> RowEvents:
        # events are immutable; copying the containers is enough
        out = RowEvents()
        out._events = list(self._events)
        out._index = dict(self._index)
        return out

    def __repr__(self) -> str:
        return f"RowEvents({self.ids()!r})"


__all__ = ["RowEvent", "RowEvents"]
