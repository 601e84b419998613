from __future__ import annotations

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests._helpers import FakeClock, FakeLister, FakeRenderer, Obj, RecordingListener  # noqa: E402


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture()
def lister() -> FakeLister:
    return FakeLister([Obj("i-1", "web"), Obj("i-2", "db"), Obj("i-3", "cache")])


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()
