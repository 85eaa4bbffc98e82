"""Shared fixtures for slidedeck tests."""

import pytest

from slidedeck.definition import Author, PresentationDefinition
from slidedeck.services.elements import Element
from slidedeck.services.scheduling import TypesetRequests
from slidedeck.services.timeline import Timegroup


class ManualClock:
    """Monotonic time source the test advances by hand."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class RecordingScheduler:
    """Stands in for the asyncio scheduler; callbacks fire only via `fire()`."""

    def __init__(self):
        self.scheduled = []
        self.cancelled = []
        self.active = {}
        self._next = 0

    def schedule(self, period_seconds, callback):
        self._next += 1
        handle = self._next
        self.scheduled.append((handle, period_seconds))
        self.active[handle] = callback
        return handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.active.pop(handle, None)

    def fire(self):
        for callback in list(self.active.values()):
            callback()


def make_slides(n):
    return tuple(Element("div", {"class": "test-slide"}, [f"Slide {i}"]) for i in range(1, n + 1))


@pytest.fixture()
def manual_clock():
    return ManualClock()


@pytest.fixture()
def scheduler():
    return RecordingScheduler()


@pytest.fixture()
def typesetter():
    return TypesetRequests()


@pytest.fixture()
def definition():
    """5 slides: 3 in a 40s group, 2 in a 30s group."""
    return PresentationDefinition(
        title="Timing talk",
        author=Author(name="Ada", email="ada@example.com"),
        occasion="Test meetup",
        slides=make_slides(5),
        timegroups=(
            Timegroup(start=0, duration=40, start_slide_index=0, slide_count=3),
            Timegroup(start=40, duration=30, start_slide_index=3, slide_count=2),
        ),
    )
