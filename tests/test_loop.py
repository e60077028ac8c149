"""Tests for frame scheduling and the animation lifecycle."""

import logging

import pytest

from particlefield.loop import Animation, FrameScheduler


class TestFrameScheduler:
    """Tests for the requestAnimationFrame-style scheduler."""

    def test_runs_requested_callback_once(self):
        """A requested callback runs on the next drain only."""
        scheduler = FrameScheduler()
        calls = []
        scheduler.request(lambda: calls.append(1))

        assert scheduler.run_pending() == 1
        assert scheduler.run_pending() == 0
        assert calls == [1]

    def test_cancel_drops_callback(self):
        """A cancelled handle never runs."""
        scheduler = FrameScheduler()
        calls = []
        handle = scheduler.request(lambda: calls.append(1))

        scheduler.cancel(handle)

        assert scheduler.run_pending() == 0
        assert calls == []

    def test_cancel_unknown_handle_is_harmless(self):
        """Cancelling twice or cancelling garbage does nothing."""
        scheduler = FrameScheduler()
        scheduler.cancel(12345)

        assert scheduler.pending() == 0

    def test_requests_during_run_wait_for_next_frame(self):
        """A callback that re-requests itself runs once per drain."""
        scheduler = FrameScheduler()
        calls = []

        def tick():
            calls.append(len(calls))
            scheduler.request(tick)

        scheduler.request(tick)
        scheduler.run_pending()
        scheduler.run_pending()

        assert calls == [0, 1]
        assert scheduler.pending() == 1


class TestAnimation:
    """Tests for Animation start, stop and fault isolation."""

    def test_start_schedules_one_frame(self, field):
        """Starting queues exactly one step."""
        scheduler = FrameScheduler()
        animation = Animation(field, scheduler)

        animation.start()
        animation.start()

        assert scheduler.pending() == 1

    def test_each_frame_steps_and_reschedules(self, field):
        """A drained frame steps the field and queues the next one."""
        scheduler = FrameScheduler()
        animation = Animation(field, scheduler)
        animation.start()

        scheduler.run_pending()
        scheduler.run_pending()

        assert field.frame == 2
        assert scheduler.pending() == 1

    def test_stop_cancels_pending_frame(self, field):
        """After stop no further step runs."""
        scheduler = FrameScheduler()
        animation = Animation(field, scheduler)
        animation.start()

        animation.stop()

        assert scheduler.pending() == 0
        assert scheduler.run_pending() == 0
        assert field.frame == 0

    def test_context_manager_releases_on_error(self, field):
        """Leaving the block through an exception still stops the loop."""
        scheduler = FrameScheduler()

        with pytest.raises(RuntimeError):
            with Animation(field, scheduler) as animation:
                scheduler.run_pending()
                raise RuntimeError("boom")

        assert not animation.running
        assert scheduler.pending() == 0

    def test_faulty_frame_does_not_stop_loop(self, field, monkeypatch, caplog):
        """An exception in one step is logged and the next frame still runs."""
        scheduler = FrameScheduler()
        animation = Animation(field, scheduler)
        calls = []

        def flaky_step():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("surface lost")

        monkeypatch.setattr(field, "step", flaky_step)
        animation.start()

        with caplog.at_level(logging.ERROR, logger="particlefield.loop"):
            scheduler.run_pending()
            scheduler.run_pending()

        assert calls == [1, 1]
        assert animation.faults == 1
        assert scheduler.pending() == 1
        assert any("failed" in record.getMessage() for record in caplog.records)

    def test_stop_inside_frame_prevents_reschedule(self, field, monkeypatch):
        """Stopping from within a step leaves nothing queued."""
        scheduler = FrameScheduler()
        animation = Animation(field, scheduler)
        monkeypatch.setattr(field, "step", animation.stop)
        animation.start()

        scheduler.run_pending()

        assert scheduler.pending() == 0
