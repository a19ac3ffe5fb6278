import queue

import pytest

from backend.events import Delta, TickEvent, TimerStatus
from backend.timer_state import TimerDisplayState
from backend.web_server import SharedTimerState, TimerWebServer, create_flask_app


@pytest.fixture
def feed():
    return queue.Queue()


@pytest.fixture
def shared():
    return SharedTimerState()


@pytest.fixture
def client(shared, feed):
    app = create_flask_app(shared, feed)
    app.config['TESTING'] = True
    return app.test_client()


def test_tick_is_validated_and_queued(client, feed):
    resp = client.post('/api/feed/tick', json={
        "elapsedMs": 61234,
        "state": "running",
        "currentSegment": 0,
        "splitNames": ["Intro"],
    })

    assert resp.status_code == 202
    assert resp.get_json() == {"queued": True}
    kind, event = feed.get_nowait()
    assert kind == 'tick'
    assert isinstance(event, TickEvent)
    assert event.elapsed_ms == 61234
    assert event.split_names == ("Intro",)


def test_bad_tick_is_rejected(client, feed):
    resp = client.post('/api/feed/tick', json={"state": "running"})

    assert resp.status_code == 400
    assert "elapsedMs" in resp.get_json()["error"]
    assert feed.empty()


def test_non_json_body_is_rejected(client, feed):
    resp = client.post('/api/feed/state', data="running", content_type="text/plain")

    assert resp.status_code == 400
    assert feed.empty()


@pytest.mark.parametrize("body", ["paused", {"state": "paused"}])
def test_state_accepts_string_or_object(client, feed, body):
    resp = client.post('/api/feed/state', json=body)

    assert resp.status_code == 202
    assert feed.get_nowait() == ('state', TimerStatus.PAUSED)


def test_unknown_state_is_rejected(client, feed):
    resp = client.post('/api/feed/state', json={"state": "exploded"})

    assert resp.status_code == 400
    assert feed.empty()


def test_deltas_are_queued(client, feed):
    resp = client.post('/api/feed/deltas', json=[
        {"segmentIndex": 0, "deltaMs": -1200, "isAhead": True, "gainedTime": True},
    ])

    assert resp.status_code == 202
    kind, deltas = feed.get_nowait()
    assert kind == 'deltas'
    assert deltas == [Delta(segment_index=0, delta_ms=-1200, is_ahead=True, gained_time=True)]


def test_state_endpoint_reflects_display(client, shared, scheduler, clock):
    display = TimerDisplayState(scheduler, clock=clock)
    display.handle_tick(TickEvent(
        elapsed_ms=61234, state=TimerStatus.RUNNING,
        split_times_ms=(61234,), split_names=("Intro", "Boss"), current_segment=1,
    ))
    display.handle_state(TimerStatus.RUNNING)
    display.handle_deltas([Delta(segment_index=0, delta_ms=-1500, is_ahead=True, gained_time=True)])
    shared.update_from_display(display)

    data = client.get('/api/state').get_json()

    assert data["status"] == "running"
    assert data["elapsed_text"] == "1:01.234"
    assert data["current_segment"] == 1
    assert [row["split_text"] for row in data["splits"]] == ["1:01.234", "-"]
    assert data["splits"][0]["delta_text"] == "-1.50"
    assert data["deltas"] == [{
        "segmentIndex": 0,
        "deltaMs": -1500,
        "isBestEver": False,
        "isAhead": True,
        "gainedTime": True,
        "skipped": False,
    }]


def test_split_edits_collect_and_acknowledge(client, shared):
    first = shared.queue_split_edit([60000, 0])

    edits = client.get('/api/split-edits').get_json()["edits"]
    assert len(edits) == 1
    assert edits[0]["id"] == first
    assert edits[0]["splitTimesMs"] == [60000, 0]

    resp = client.delete(f'/api/split-edits?upTo={first}')
    assert resp.get_json() == {"cleared": 1}
    assert client.get('/api/split-edits').get_json() == {"edits": []}


def test_edit_queued_after_read_survives_acknowledge(client, shared):
    shared.queue_split_edit([60000, 0])
    seen = client.get('/api/split-edits').get_json()["edits"]

    # Runner saves another correction before the engine acknowledges
    later = shared.queue_split_edit([60000, 125000])
    resp = client.delete(f'/api/split-edits?upTo={seen[-1]["id"]}')

    assert resp.get_json() == {"cleared": len(seen)}
    remaining = client.get('/api/split-edits').get_json()["edits"]
    assert [edit["id"] for edit in remaining] == [later]
    assert remaining[0]["splitTimesMs"] == [60000, 125000]


def test_edit_ids_keep_increasing_after_acknowledge(shared):
    first = shared.queue_split_edit([1000])
    shared.clear_split_edits(first)

    assert shared.queue_split_edit([2000]) > first


@pytest.mark.parametrize("query", ["", "?upTo=", "?upTo=abc"])
def test_acknowledge_requires_edit_id(client, shared, query):
    shared.queue_split_edit([60000])

    resp = client.delete('/api/split-edits' + query)

    assert resp.status_code == 400
    assert len(shared.get_split_edits()) == 1


def test_null_deltas_body_clears_deltas(client, feed):
    resp = client.post('/api/feed/deltas', data="null", content_type="application/json")

    assert resp.status_code == 202
    assert feed.get_nowait() == ('deltas', [])


def test_invalid_json_is_rejected(client, feed):
    resp = client.post('/api/feed/tick', data="{not json", content_type="application/json")

    assert resp.status_code == 400
    assert feed.empty()


def test_null_tick_body_is_rejected(client, feed):
    resp = client.post('/api/feed/tick', data="null", content_type="application/json")

    assert resp.status_code == 400
    assert feed.empty()


def test_server_url_empty_until_started(shared, feed):
    server = TimerWebServer(shared, feed, host="127.0.0.1", port=0)

    assert not server.running
    assert server.get_url() == ""


def test_monitor_page_is_served(client):
    resp = client.get('/')

    assert resp.status_code == 200
    assert resp.mimetype == 'text/html'
