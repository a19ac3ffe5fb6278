import pytest

from backend.events import Delta, TickEvent, TimerEventChannel, TimerStatus


def test_status_parse_accepts_wire_names():
    assert TimerStatus.parse("running") is TimerStatus.RUNNING
    assert TimerStatus.parse(" Paused ") is TimerStatus.PAUSED
    assert TimerStatus.parse(TimerStatus.FINISHED) is TimerStatus.FINISHED


@pytest.mark.parametrize("value", ["stopped", "", None, 3])
def test_status_parse_rejects_unknown(value):
    with pytest.raises(ValueError):
        TimerStatus.parse(value)


def test_tick_from_dict_defaults_missing_arrays():
    tick = TickEvent.from_dict({"elapsedMs": 1234, "state": "running"})

    assert tick.elapsed_ms == 1234
    assert tick.state is TimerStatus.RUNNING
    assert tick.current_segment == 0
    assert tick.split_times_ms == ()
    assert tick.segment_times_ms == ()
    assert tick.split_names == ()


def test_tick_from_dict_reads_full_payload():
    tick = TickEvent.from_dict({
        "elapsedMs": 90000,
        "state": "paused",
        "currentSegment": 1,
        "splitTimesMs": [60000, 0],
        "segmentTimesMs": [60000, 0],
        "splitNames": ["Intro", "Boss"],
    })

    assert tick.split_times_ms == (60000, 0)
    assert tick.split_names == ("Intro", "Boss")
    assert TickEvent.from_dict(tick.to_dict()) == tick


@pytest.mark.parametrize("payload", [
    {"state": "running"},
    {"elapsedMs": "12", "state": "running"},
    {"elapsedMs": True, "state": "running"},
    {"elapsedMs": -1, "state": "running"},
    {"elapsedMs": 1, "state": "running", "splitTimesMs": "nope"},
    {"elapsedMs": 1, "state": "running", "splitNames": [1, 2]},
    {"elapsedMs": 1, "state": "bogus"},
    [1, 2, 3],
])
def test_tick_from_dict_rejects_malformed(payload):
    with pytest.raises(ValueError):
        TickEvent.from_dict(payload)


def test_delta_list_from_json():
    deltas = Delta.list_from_json([
        {"segmentIndex": 0, "deltaMs": -1500, "isAhead": True, "gainedTime": True},
        {"segmentIndex": 1, "deltaMs": 0, "skipped": True},
    ])

    assert deltas[0].delta_ms == -1500
    assert deltas[0].is_ahead and deltas[0].gained_time
    assert not deltas[0].is_best_ever
    assert deltas[1].skipped
    assert Delta.list_from_json(None) == []


def test_delta_list_from_json_rejects_object():
    with pytest.raises(ValueError):
        Delta.list_from_json({"segmentIndex": 0})


def test_channel_delivers_until_unsubscribed():
    channel = TimerEventChannel()
    received = []
    unsubscribe = channel.subscribe("state", received.append)

    channel.publish("state", TimerStatus.RUNNING)
    unsubscribe()
    unsubscribe()
    channel.publish("state", TimerStatus.PAUSED)

    assert received == [TimerStatus.RUNNING]
    assert channel.subscriber_count("state") == 0


def test_channel_rejects_unknown_kind():
    channel = TimerEventChannel()
    with pytest.raises(ValueError):
        channel.subscribe("split", lambda payload: None)
    with pytest.raises(ValueError):
        channel.publish("split", None)


def test_channel_isolates_failing_subscriber():
    channel = TimerEventChannel()
    received = []

    def broken(payload):
        raise RuntimeError("boom")

    channel.subscribe("deltas", broken)
    channel.subscribe("deltas", received.append)
    channel.publish("deltas", [])

    assert received == [[]]
