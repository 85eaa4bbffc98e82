"""Tests for the front page -> presenting lifecycle."""

import asyncio
import json

import pytest

from slidedeck.services.presentation_service import (
    PHASE_FRONT_PAGE,
    PHASE_PRESENTING,
    PresentationService,
    presentation_sse_events,
)
from slidedeck.services.scheduling import AsyncioRepeatingScheduler


@pytest.fixture()
def service(definition, scheduler, manual_clock):
    return PresentationService(definition, scheduler=scheduler, now=manual_clock)


class TestFrontPage:
    def test_starts_on_front_page(self, service):
        assert service.phase == PHASE_FRONT_PAGE
        payload = service.state_payload()
        assert payload["title"] == "Timing talk"
        assert "front-page" in payload["html"]["frontPage"]

    def test_only_right_key_starts(self, service):
        assert service.handle_key(37) is False
        assert service.handle_key(32) is False
        assert service.phase == PHASE_FRONT_PAGE
        assert service.handle_key(39) is True
        assert service.phase == PHASE_PRESENTING

    def test_start_runs_the_clock(self, service, scheduler, manual_clock):
        session = service.start()
        assert session.clock.running
        assert len(scheduler.active) == 1
        manual_clock.advance(5)
        assert session.clock.elapsed_seconds() == pytest.approx(5)

    def test_start_is_idempotent(self, service, scheduler):
        first = service.start()
        assert service.start() is first
        assert len(scheduler.scheduled) == 1

    def test_first_key_after_start_goes_to_session(self, service):
        service.handle_key(39)
        service.handle_key(39)
        assert service.session.navigator.current_index == 2


class TestRestart:
    def test_restart_returns_to_front_page(self, service, scheduler):
        service.start()
        service.restart()
        assert service.phase == PHASE_FRONT_PAGE
        assert scheduler.active == {}

    def test_restart_without_session_is_noop(self, service):
        service.restart()
        assert service.phase == PHASE_FRONT_PAGE


class TestStream:
    def test_first_event_is_current_state(self, service):
        async def first_event():
            events = presentation_sse_events(service, min_interval_ms=1)
            try:
                return await events.__anext__()
            finally:
                await events.aclose()

        event = asyncio.run(first_event())
        assert event.startswith("data: ")
        payload = json.loads(event[len("data: "):])
        assert payload["phase"] == PHASE_FRONT_PAGE


class TestAsyncioScheduler:
    def test_repeats_until_cancelled(self):
        async def run():
            scheduler = AsyncioRepeatingScheduler()
            ticks = []
            handle = scheduler.schedule(0.005, lambda: ticks.append(1))
            await asyncio.sleep(0.06)
            scheduler.cancel(handle)
            count = len(ticks)
            await asyncio.sleep(0.03)
            return count, len(ticks)

        count, later = asyncio.run(run())
        assert count >= 2
        assert later == count
