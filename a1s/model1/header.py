"""Column header model.

A `Header` is an ordered, immutable sequence of `HeaderColumn` descriptors.
Column order is significant; column *names* are the only stable
cross-reference (sort state, cell styling and age detection all go through
`index_of`). Well-known semantic roles are looked up through `ColumnRole`
so hot paths do not repeat string comparisons, while arbitrary column names
keep working through the plain name lookup.
"""
from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import cached_property

from .types import DecoratorFunc


class ColumnRole(str, enum.Enum):
    AGE = "AGE"
    STATE = "STATE"
    STATUS = "STATUS"
    NAME = "NAME"
    ID = "ID"
    VALID = "VALID"
    REGION = "REGION"


@dataclass(frozen=True, slots=True)
class Attrs:
    """Semantic column attributes.

    * align: rich justify value ("left", "right", "center"); empty means default
    * wide: hidden in narrow layouts
    * time: age/duration column (excluded from deltas, duration sort)
    * capacity: magnitude column (capacity sort)
    * hide: never shown
    * decorator: display-only transform of the cell text; ignored by equality
    """
    align: str = ""
    wide: bool = False
    time: bool = False
    capacity: bool = False
    hide: bool = False
    decorator: DecoratorFunc | None = field(default=None, compare=False)

    def merge(self, other: Attrs) -> Attrs:
        """Fill unset attributes of self from other."""
        return Attrs(
            align=self.align or other.align,
            wide=self.wide or other.wide,
            time=self.time or other.time,
            capacity=self.capacity or other.capacity,
            hide=self.hide or other.hide,
            decorator=self.decorator if self.decorator is not None else other.decorator,
        )


@dataclass(frozen=True, slots=True)
class HeaderColumn:
    name: str
    attrs: Attrs = Attrs()

    @property
    def wide(self) -> bool:
        return self.attrs.wide

    @property
    def time(self) -> bool:
        return self.attrs.time

    @property
    def capacity(self) -> bool:
        return self.attrs.capacity

    @property
    def hide(self) -> bool:
        return self.attrs.hide

    @property
    def align(self) -> str:
        return self.attrs.align

    def __str__(self) -> str:
        return f"{self.name} [{self.align or '-'}::{self.wide}::{self.time}]"


def col(name: str, **attrs: object) -> HeaderColumn:
    """Shorthand used by renderers: col("AGE", time=True)."""
    return HeaderColumn(name, Attrs(**attrs))  # type: ignore[arg-type]


class Header(tuple[HeaderColumn, ...]):
    """Ordered column descriptors for one resource type's view."""

    def __new__(cls, columns: Iterable[HeaderColumn] = ()) -> Header:
        return super().__new__(cls, tuple(columns))

    @cached_property
    def _index(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for i, c in enumerate(self):
            out.setdefault(c.name, i)
        return out

    def clone(self) -> Header:
        # columns are frozen; a new tuple is a full copy
        return Header(self)

    def diff(self, other: Header) -> bool:
        """True when headers differ in length, names or attributes."""
        if len(self) != len(other):
            return True
        return tuple(self) != tuple(other)

    def index_of(self, name: str | ColumnRole, include_wide: bool = True) -> int | None:
        key = name.value if isinstance(name, ColumnRole) else name
        i = self._index.get(key)
        if i is None:
            return None
        if self[i].wide and not include_wide:
            return None
        return i

    def role_index(self, role: ColumnRole) -> int | None:
        return self.index_of(role, include_wide=True)

    def has_age(self) -> bool:
        return self.age_index() is not None

    def age_index(self) -> int | None:
        """Index of the AGE column, or of the first time column if none is named AGE."""
        i = self.role_index(ColumnRole.AGE)
        if i is not None:
            return i
        for j, c in enumerate(self):
            if c.time:
                return j
        return None

    def is_time_col(self, col: int) -> bool:
        if col < 0 or col >= len(self):
            return False
        return self[col].time

    def is_capacity_col(self, col: int) -> bool:
        if col < 0 or col >= len(self):
            return False
        return self[col].capacity

    def column_names(self, wide: bool = True) -> list[str]:
        return [c.name for c in self if wide or not c.wide]

    def visible_indices(self, wide: bool = True) -> list[int]:
        """Column indices shown in the given layout; hidden columns never are."""
        return [i for i, c in enumerate(self) if not c.hide and (wide or not c.wide)]

    def __repr__(self) -> str:
        return f"Header({[c.name for c in self]!r})"


__all__ = ["ColumnRole", "Attrs", "HeaderColumn", "Header", "col"]
