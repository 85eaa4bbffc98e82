from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

PAUSED_COLOR = (0.8, 0.8, 0.3)
RUNNING_COLOR = (0.4, 0.8, 0.4)
HIGHLIGHT_COLOR = (1.0, 0.0, 0.0)


class TimelineError(ValueError):
    pass


class EmptyTimelineError(TimelineError):
    """No timegroups, or their durations add up to zero."""


class InvalidTimegroupsError(TimelineError):
    pass


@dataclass(frozen=True)
class Timegroup:
    start: float
    duration: float
    start_slide_index: int
    slide_count: int

    def to_payload(self) -> dict:
        return {
            "start": self.start,
            "duration": self.duration,
            "startSlideIndex": self.start_slide_index,
            "slideCount": self.slide_count,
        }


@dataclass(frozen=True)
class TimelineSegment:
    x: float
    width: float
    shade: float


@dataclass(frozen=True)
class TimelineHighlight:
    x: float
    width: float


@dataclass(frozen=True)
class TimelineElapsedBar:
    width: float
    color: tuple[float, float, float]


@dataclass(frozen=True)
class TimelineLayout:
    """All positions and widths are fractions of the total planned duration."""

    segments: tuple[TimelineSegment, ...]
    highlight: TimelineHighlight | None
    elapsed: TimelineElapsedBar


def total_duration(timegroups: Sequence[Timegroup]) -> float:
    return float(sum(g.duration for g in timegroups))


def format_duration(seconds: float) -> str:
    """`m:ss`, e.g. 605 -> `10:05`."""
    s = int(seconds)
    return f"{s // 60}:{s % 60:02d}"


def group_shade(group_index: int) -> float:
    # Alternating grey so neighbouring groups are told apart.
    return 0.3 * (1 + 1.5 * (group_index % 2))


def validate_timegroups(timegroups: Sequence[Timegroup], slide_count: int | None = None) -> None:
    """
    Reject timegroup sequences the timeline cannot draw.

    Groups must be contiguous in time and in slide indices, start at zero,
    and (when `slide_count` is given) cover every slide exactly once.
    """
    if not timegroups:
        raise EmptyTimelineError("Timeline needs at least one timegroup")

    expected_start = 0.0
    expected_slide = 0
    for i, g in enumerate(timegroups):
        if not math.isfinite(g.duration) or g.duration < 0:
            raise InvalidTimegroupsError(f"Timegroup {i}: duration must be a finite non-negative number (got {g.duration!r})")
        if g.slide_count < 0:
            raise InvalidTimegroupsError(f"Timegroup {i}: slide_count must be >= 0 (got {g.slide_count!r})")
        if not math.isclose(g.start, expected_start, rel_tol=1e-9, abs_tol=1e-9):
            raise InvalidTimegroupsError(f"Timegroup {i}: start {g.start!r} does not follow previous group (expected {expected_start!r})")
        if g.start_slide_index != expected_slide:
            raise InvalidTimegroupsError(
                f"Timegroup {i}: start_slide_index {g.start_slide_index} does not match cumulative slide count {expected_slide}"
            )
        expected_start = g.start + g.duration
        expected_slide += g.slide_count

    if total_duration(timegroups) <= 0:
        raise EmptyTimelineError("Timeline total duration must be positive")
    if slide_count is not None and expected_slide != slide_count:
        raise InvalidTimegroupsError(f"Timegroups cover {expected_slide} slides but the presentation has {slide_count}")


def build_timegroups(durations_and_counts: Sequence[tuple[float, int]]) -> tuple[Timegroup, ...]:
    """Lay out `(duration, slide_count)` pairs back to back."""
    out: list[Timegroup] = []
    start = 0.0
    first_slide = 0
    for duration, count in durations_and_counts:
        out.append(Timegroup(start=start, duration=float(duration), start_slide_index=first_slide, slide_count=int(count)))
        start += float(duration)
        first_slide += int(count)
    return tuple(out)


def layout_timeline(
    timegroups: Sequence[Timegroup],
    elapsed_seconds: float,
    highlighted_index: int,
    running: bool,
) -> TimelineLayout:
    """
    Map elapsed time and the highlighted (zero-based) slide onto the timeline.

    Every slide of a group gets an equal share of that group's planned time,
    so the highlight marks where the slide should be, not where it was.
    """
    total = total_duration(timegroups)
    if total <= 0:
        raise EmptyTimelineError("Timeline total duration must be positive")

    segments: list[TimelineSegment] = []
    highlight: TimelineHighlight | None = None
    current = 0.0
    for group_index, group in enumerate(timegroups):
        segments.append(TimelineSegment(x=current / total, width=group.duration / total, shade=group_shade(group_index)))
        offset = highlighted_index - group.start_slide_index
        if highlight is None and group.slide_count > 0 and 0 <= offset < group.slide_count:
            share = group.duration / group.slide_count / total
            highlight = TimelineHighlight(x=current / total + share * offset, width=share)
        current += group.duration

    bar = TimelineElapsedBar(width=elapsed_seconds / total, color=RUNNING_COLOR if running else PAUSED_COLOR)
    return TimelineLayout(segments=tuple(segments), highlight=highlight, elapsed=bar)
