"""Fakes shared by the test modules: provider objects, renderer, lister, listener, clock."""
from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from a1s.model1 import Header, Row, col


@dataclass
class Obj:
    """Synthetic provider object."""
    id: str
    name: str = ""
    state: str = "running"
    age: str = "1m"


class FakeRenderer:
    def __init__(self, fail_ids: Sequence[str] = ()) -> None:
        self.fail_ids = set(fail_ids)

    def header(self, region: str) -> Header:
        return Header([col("ID"), col("NAME"), col("STATE"), col("AGE", time=True)])

    def render(self, obj: Obj, region: str) -> Row:
        if obj.id in self.fail_ids:
            raise ValueError(f"malformed {obj.id}")
        return Row(obj.id, (obj.id, obj.name, obj.state, obj.age))


class FakeLister:
    """Returns `items` (or raises `error`) and counts calls."""

    def __init__(self, items: Sequence[Any] = ()) -> None:
        self.items = list(items)
        self.error: Exception | None = None
        self.calls = 0
        self.regions: list[str] = []
        self.hook: Callable[[Any], None] | None = None

    def list(self, ctx, region: str):
        self.calls += 1
        self.regions.append(region)
        if self.hook is not None:
            self.hook(ctx)
        if self.error is not None:
            raise self.error
        return list(self.items)


class RecordingListener:
    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []
        self.changed = threading.Event()

    def table_data_changed(self, data) -> None:
        self.events.append(("changed", data))
        self.changed.set()

    def table_no_data(self, data) -> None:
        self.events.append(("no_data", data))
        self.changed.set()

    def table_load_failed(self, err) -> None:
        self.events.append(("failed", err))
        self.changed.set()

    def kinds(self) -> list[str]:
        return [k for k, _ in self.events]


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, secs: float) -> None:
        self.now += secs
