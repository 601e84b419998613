"""Row value objects."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .delta import fields_differ


@dataclass(frozen=True, slots=True)
class Row:
    """One resource rendered as strings, one field per header column.

    `id` is unique within a snapshot (e.g. "us-east-1/i-0abc").
    """
    id: str
    fields: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))

    @classmethod
    def blank(cls, size: int, id: str = "") -> Row:
        return cls(id, ("",) * size)

    def __len__(self) -> int:
        return len(self.fields)

    def customize(self, cols: Sequence[int]) -> Row:
        """Project onto a subset/reordering of column indices."""
        return Row(self.id, tuple(self.fields[c] if 0 <= c < len(self.fields) else "" for c in cols))

    def diff(self, other: Row, age_col: int | None = None) -> bool:
        if self.id != other.id:
            return True
        return fields_differ(self.fields, other.fields, age_col)

    def clone(self) -> Row:
        return Row(self.id, self.fields)


__all__ = ["Row"]
