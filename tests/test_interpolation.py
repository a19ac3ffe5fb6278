from backend.events import TimerStatus
from backend.interpolation import InterpolationAnchor, InterpolationLoop


def make_loop(scheduler, clock, status=TimerStatus.RUNNING):
    state = {"status": status}
    published = []
    loop = InterpolationLoop(
        scheduler,
        InterpolationAnchor(wall_clock_at_last_tick=clock(), elapsed_at_last_tick=5000),
        status_reader=lambda: state["status"],
        clock=clock,
        on_publish=published.append,
    )
    return loop, state, published


def test_estimate_extrapolates_from_anchor(scheduler, clock):
    loop, _, _ = make_loop(scheduler, clock)
    clock.advance(250.7)

    assert loop.estimate() == 5250


def test_frames_publish_estimate_and_reschedule(scheduler, clock):
    loop, _, published = make_loop(scheduler, clock)
    loop.start()

    clock.advance(16)
    scheduler.run_frame()
    clock.advance(16)
    scheduler.run_frame()

    assert published == [5016, 5032]
    assert loop.value == 5032
    assert len(scheduler.pending) == 1


def test_start_is_idempotent(scheduler, clock):
    loop, _, published = make_loop(scheduler, clock)
    loop.start()
    loop.start()
    loop.start()

    assert len(scheduler.pending) == 1
    scheduler.run_frame()
    assert len(published) == 1


def test_stop_cancels_pending_frame(scheduler, clock):
    loop, _, published = make_loop(scheduler, clock)
    loop.start()
    loop.stop()

    assert scheduler.pending == {}
    assert not loop.is_active
    assert published == []


def test_late_frame_after_stop_does_not_publish(scheduler, clock):
    loop, _, published = make_loop(scheduler, clock)
    loop.start()
    stale = list(scheduler.pending.values())[0]
    loop.stop()

    stale()

    assert published == []
    assert scheduler.pending == {}


def test_frame_ends_loop_when_not_running(scheduler, clock):
    loop, state, published = make_loop(scheduler, clock)
    loop.start()
    state["status"] = TimerStatus.PAUSED

    scheduler.run_frame()

    assert published == []
    assert not loop.is_active
    assert scheduler.pending == {}


def test_large_gap_is_not_clamped(scheduler, clock):
    loop, _, published = make_loop(scheduler, clock)
    loop.start()
    clock.advance(10 * 60 * 1000)

    scheduler.run_frame()

    assert published == [5000 + 600000]
