"""
Frame Capturer Tests
====================

Tick behaviour and loop lifecycle, driven by the fake window backend.
"""

import time

import pytest

from windowcast.capture import FrameCapturer, JpegEncoder, TickResult
from windowcast.errors import FrameEncodeError
from windowcast.stream import FrameStore


@pytest.fixture
def store():
    return FrameStore()


@pytest.fixture
def capturer(fake_system, target_window, store, stop_event):
    return FrameCapturer(
        window_system=fake_system,
        window=target_window,
        store=store,
        stop_event=stop_event,
        interval_ms=5,
        error_backoff_ms=0,
        stats_interval_s=0,
    )


class BrokenEncoder(JpegEncoder):
    def encode(self, pixels):
        raise FrameEncodeError("Encoder produced zero-length output")


class TestTick:
    """Tests for a single capture iteration."""

    def test_publishes_jpeg(self, capturer, store):
        assert capturer.tick() is TickResult.PUBLISHED

        frame = store.snapshot()
        assert frame is not None
        assert frame.data[:2] == b"\xff\xd8"
        assert (frame.width, frame.height) == (64, 48)
        assert capturer.stats.published == 1

    def test_frame_ids_increase(self, capturer, store):
        ids = []
        for _ in range(3):
            capturer.tick()
            ids.append(store.snapshot().frame_id)
        assert ids == [0, 1, 2]

    @pytest.mark.parametrize("size", [(0, 48), (64, 0), (-1, 48), (0, 0)])
    def test_zero_area_skips_without_publish(self, capturer, fake_system, store, size):
        capturer.tick()
        before = store.snapshot()

        fake_system.size = size
        grabs = fake_system.grab_calls
        assert capturer.tick() is TickResult.SKIPPED

        assert store.snapshot() is before
        assert store.publish_count == 1
        assert fake_system.grab_calls == grabs
        assert capturer.stats.skipped == 1

    def test_minimized_window_skips(self, capturer, fake_system, store):
        fake_system.minimized = True
        assert capturer.tick() is TickResult.SKIPPED
        assert store.snapshot() is None
        assert fake_system.grab_calls == 0

    def test_grab_failure_keeps_previous_frame(
        self, capturer, fake_system, store, grab_failure
    ):
        capturer.tick()
        before = store.snapshot()

        fake_system.grab_error = grab_failure
        assert capturer.tick() is TickResult.FAILED

        assert store.snapshot() is before
        assert capturer.stats.failed == 1

    def test_encode_failure_does_not_publish(
        self, fake_system, target_window, store, stop_event
    ):
        capturer = FrameCapturer(
            window_system=fake_system,
            window=target_window,
            store=store,
            stop_event=stop_event,
            encoder=BrokenEncoder(),
        )
        assert capturer.tick() is TickResult.FAILED
        assert store.snapshot() is None

    def test_closed_window_sets_stop_event(self, capturer, fake_system, stop_event, store):
        fake_system.alive = False
        assert capturer.tick() is TickResult.WINDOW_CLOSED
        assert stop_event.is_set()
        assert store.snapshot() is None

    def test_quality_is_passed_to_encoder(self, fake_system, target_window, store, stop_event):
        capturer = FrameCapturer(
            window_system=fake_system,
            window=target_window,
            store=store,
            stop_event=stop_event,
            encoder=JpegEncoder(quality=30),
        )
        assert capturer.encoder.quality == 30


class TestCaptureLoop:
    """Tests for the capture thread lifecycle."""

    def _wait_for(self, predicate, timeout=5.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.01)
        return False

    def test_runs_until_stopped(self, capturer, store, stop_event):
        capturer.start()
        assert capturer.running
        assert self._wait_for(lambda: store.publish_count >= 3)

        stop_event.set()
        assert capturer.join(timeout=2.0)
        assert not capturer.running

        count = store.publish_count
        time.sleep(0.05)
        assert store.publish_count == count

    def test_stops_when_window_closes(self, capturer, fake_system, stop_event):
        capturer.start()
        fake_system.alive = False

        assert stop_event.wait(timeout=2.0)
        assert capturer.join(timeout=2.0)

    def test_failures_do_not_abort_loop(self, capturer, fake_system, store, stop_event, grab_failure):
        fake_system.grab_error = grab_failure
        capturer.start()
        assert self._wait_for(lambda: capturer.stats.failed >= 3)

        fake_system.grab_error = None
        assert self._wait_for(lambda: store.publish_count >= 1)

        stop_event.set()
        assert capturer.join(timeout=2.0)

    def test_unexpected_error_is_contained(self, capturer, fake_system, store, stop_event):
        fake_system.grab_error = RuntimeError("driver went away")
        capturer.start()
        assert self._wait_for(lambda: capturer.stats.failed >= 2)
        assert capturer.running

        stop_event.set()
        assert capturer.join(timeout=2.0)

    def test_double_start_rejected(self, capturer, stop_event):
        capturer.start()
        try:
            with pytest.raises(RuntimeError):
                capturer.start()
        finally:
            stop_event.set()
            capturer.join(timeout=2.0)

    def test_run_returns_immediately_when_already_stopped(self, capturer, store, stop_event):
        stop_event.set()
        capturer.run()
        assert store.publish_count == 0

    def test_error_backoff_is_not_an_overrun(
        self, fake_system, target_window, store, stop_event, grab_failure
    ):
        capturer = FrameCapturer(
            window_system=fake_system,
            window=target_window,
            store=store,
            stop_event=stop_event,
            interval_ms=33,
            error_backoff_ms=100,
            stats_interval_s=0,
        )
        fake_system.grab_error = grab_failure
        capturer.start()
        assert self._wait_for(lambda: capturer.stats.failed >= 3)

        stop_event.set()
        assert capturer.join(timeout=2.0)
        assert capturer.stats.overruns == 0
