"""Tests for the timeline layout and its SVG component."""

import pytest

from slidedeck.services.components import TimelineComponent, TimelineState
from slidedeck.services.timeline import (
    PAUSED_COLOR,
    RUNNING_COLOR,
    EmptyTimelineError,
    InvalidTimegroupsError,
    Timegroup,
    TimelineError,
    build_timegroups,
    format_duration,
    layout_timeline,
    validate_timegroups,
)

GROUPS = (
    Timegroup(start=0, duration=40, start_slide_index=0, slide_count=3),
    Timegroup(start=40, duration=30, start_slide_index=3, slide_count=2),
)


class TestLayout:
    def test_reference_scenario(self):
        layout = layout_timeline(GROUPS, 20, 1, False)
        assert layout.elapsed.width == pytest.approx(20 / 70)
        assert layout.elapsed.color == PAUSED_COLOR
        assert layout.highlight.x == pytest.approx((40 / 3) / 70)
        assert layout.highlight.width == pytest.approx((40 / 3) / 70)

    def test_segments_are_proportional_and_alternate(self):
        layout = layout_timeline(GROUPS, 0, 0, True)
        assert [s.x for s in layout.segments] == pytest.approx([0.0, 40 / 70])
        assert [s.width for s in layout.segments] == pytest.approx([40 / 70, 30 / 70])
        assert layout.segments[0].shade == pytest.approx(0.3)
        assert layout.segments[1].shade == pytest.approx(0.75)

    def test_highlight_in_second_group(self):
        layout = layout_timeline(GROUPS, 0, 4, True)
        assert layout.highlight.x == pytest.approx(40 / 70 + 15 / 70)
        assert layout.highlight.width == pytest.approx(15 / 70)

    def test_running_color(self):
        assert layout_timeline(GROUPS, 5, 0, True).elapsed.color == RUNNING_COLOR

    def test_highlight_outside_groups_is_omitted(self):
        assert layout_timeline(GROUPS, 0, 99, False).highlight is None
        assert layout_timeline(GROUPS, 0, -1, False).highlight is None

    def test_overtime_is_not_clamped(self):
        assert layout_timeline(GROUPS, 140, 0, True).elapsed.width == pytest.approx(2.0)

    def test_layout_is_idempotent(self):
        assert layout_timeline(GROUPS, 33.3, 2, True) == layout_timeline(GROUPS, 33.3, 2, True)

    def test_zero_total_duration_rejected(self):
        groups = (Timegroup(start=0, duration=0, start_slide_index=0, slide_count=1),)
        with pytest.raises(EmptyTimelineError):
            layout_timeline(groups, 0, 0, False)


class TestValidation:
    def test_valid_groups_pass(self):
        validate_timegroups(GROUPS, 5)

    def test_empty_rejected(self):
        with pytest.raises(EmptyTimelineError):
            validate_timegroups(())

    def test_zero_total_rejected(self):
        with pytest.raises(EmptyTimelineError):
            validate_timegroups(build_timegroups([(0, 2), (0, 1)]))

    def test_gap_rejected(self):
        groups = (GROUPS[0], Timegroup(start=45, duration=30, start_slide_index=3, slide_count=2))
        with pytest.raises(InvalidTimegroupsError):
            validate_timegroups(groups)

    def test_slide_index_mismatch_rejected(self):
        groups = (GROUPS[0], Timegroup(start=40, duration=30, start_slide_index=2, slide_count=2))
        with pytest.raises(InvalidTimegroupsError):
            validate_timegroups(groups)

    def test_slide_total_mismatch_rejected(self):
        with pytest.raises(InvalidTimegroupsError):
            validate_timegroups(GROUPS, 6)

    def test_negative_duration_rejected(self):
        groups = build_timegroups([(50, 2), (-10, 1)])
        with pytest.raises(InvalidTimegroupsError):
            validate_timegroups(groups)

    def test_errors_are_value_errors(self):
        assert issubclass(TimelineError, ValueError)

    def test_build_timegroups_is_contiguous(self):
        assert build_timegroups([(40, 3), (30, 2)]) == GROUPS


class TestFormatDuration:
    @pytest.mark.parametrize("seconds,expected", [(0, "0:00"), (70, "1:10"), (605, "10:05"), (59.9, "0:59")])
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected


class TestTimelineComponent:
    def _rects(self, component):
        return [c for c in component.element.children if c.tag == "rect"]

    def test_draws_segments_highlight_and_bar(self):
        timeline = TimelineComponent(GROUPS)
        timeline.render(TimelineState(20, 1, False))
        rects = self._rects(timeline)
        assert len(rects) == 4
        assert float(rects[0].get("width").rstrip("%")) == pytest.approx(100 * 40 / 70, abs=1e-5)
        assert rects[0].get("style") == "fill:rgb(76.5, 76.5, 76.5); stroke:none"
        assert rects[2].get("class") == "timeline-highlight"
        assert rects[2].get("style") == "fill:rgb(255, 0, 0); stroke:none"
        bar = rects[3]
        assert bar.get("class") == "timeline-elapsed"
        assert float(bar.get("width").rstrip("%")) == pytest.approx(100 * 20 / 70)
        assert bar.get("style") == "fill:rgb(204, 204, 76.5); stroke:none"

    def test_tick_updates_bar_in_place(self):
        timeline = TimelineComponent(GROUPS)
        timeline.render(TimelineState(20, 1, False))
        bar = self._rects(timeline)[-1]
        timeline.render(TimelineState(30, 1, True))
        assert self._rects(timeline)[-1] is bar
        assert float(bar.get("width").rstrip("%")) == pytest.approx(100 * 30 / 70)
        assert bar.get("style") == "fill:rgb(102, 204, 102); stroke:none"

    def test_slide_change_rebuilds_without_stale_marks(self):
        timeline = TimelineComponent(GROUPS)
        timeline.render(TimelineState(0, 0, False))
        timeline.render(TimelineState(0, 4, False))
        highlights = [r for r in self._rects(timeline) if r.get("class") == "timeline-highlight"]
        assert len(highlights) == 1
        assert float(highlights[0].get("x").rstrip("%")) == pytest.approx(100 * 55 / 70)

    def test_same_state_twice_renders_identically(self):
        timeline = TimelineComponent(GROUPS)
        timeline.render(TimelineState(12, 3, True))
        first = timeline.to_html()
        timeline.render(TimelineState(12, 3, True))
        assert timeline.to_html() == first

    def test_rejects_empty_timeline_at_construction(self):
        with pytest.raises(EmptyTimelineError):
            TimelineComponent(())
