"""
Web Server for Split Station - Engine Feed + Local Network Monitor.

Two jobs:

1. FEED INGRESS. The external timing engine posts its events here:
       POST /api/feed/tick     {"elapsedMs": ..., "state": "running", ...}
       POST /api/feed/state    "running"  or  {"state": "running"}
       POST /api/feed/deltas   [{"segmentIndex": 0, "deltaMs": -1200, ...}]
   Payloads are validated on the server thread and queued. The UI thread
   drains the queue, so the timer core never runs on this thread.

2. MONITOR. A read-only split view for a second screen (phone, tablet,
   stream PC) on the same network, plus the manual split edits waiting
   for the engine to collect them:
       GET    /api/state
       GET    /api/split-edits             every pending edit, each with an id
       DELETE /api/split-edits?upTo=<id>   acknowledge edits up to that id

Usage:
    Started/stopped by SplitStationApp. Binds to 0.0.0.0:8080 by default,
    so the monitor is at http://<lan-ip>:<port> (see /qr.png).

Dependencies:
    pip install flask qrcode pillow
"""

import io
import queue
import socket
import time
import logging
import threading
from typing import Optional, Dict, Any, List

logger = logging.getLogger("SplitStation.WebServer")

from flask import Flask, jsonify, request, Response
from werkzeug.exceptions import BadRequest

try:
    import qrcode
    HAS_QRCODE = True
except ImportError:
    HAS_QRCODE = False

from config import WEB_DEFAULT_HOST, WEB_DEFAULT_PORT
from utils.display import build_split_rows
from utils.formatting import format_time
from .events import Delta, TickEvent, TimerStatus


def get_local_ip():
    """Best guess at this machine's LAN address (no packets are sent)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.settimeout(0.5)
        # UDP connect only picks a route
        sock.connect(("8.8.8.8", 80))
        return sock.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        sock.close()


# =========================================================================
# MONITOR STATE (written by the UI thread, read by request threads)
# =========================================================================

class SharedTimerState:
    """
    Lock-guarded copy of what the desktop window shows.

    The UI thread pushes into it; Flask request threads only ever read
    copies. Manual split edits travel the other way: the desktop queues
    them here and the engine collects them over HTTP.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._state: Dict[str, Any] = {
            "status": TimerStatus.IDLE.value,
            "elapsed_ms": 0,
            "elapsed_text": format_time(0),
            "current_segment": 0,
            "splits": [],       # SplitRow.to_dict() per split
            "deltas": [],       # Delta.to_dict() per delta
            "updated_at": 0.0,
        }
        self._split_edits: List[Dict[str, Any]] = []
        self._next_edit_id = 1

    def update(self, **fields):
        with self._lock:
            self._state.update(fields)

    def get_state(self) -> dict:
        with self._lock:
            return dict(self._state)

    def update_from_display(self, display_state, colors=None):
        """Refresh everything from a TimerDisplayState in one locked write."""
        snapshot = display_state.snapshot
        elapsed = display_state.interpolated_elapsed
        rows = build_split_rows(snapshot, display_state.deltas, colors)
        self.update(
            status=display_state.status.value,
            elapsed_ms=elapsed,
            elapsed_text=format_time(elapsed),
            current_segment=snapshot.current_segment,
            splits=[row.to_dict() for row in rows],
            deltas=[delta.to_dict() for delta in display_state.deltas],
            updated_at=time.time(),
        )

    # --- Manual split edits (collected by the engine) ---

    def queue_split_edit(self, split_times_ms: List[int]) -> int:
        """Queue an edit for the engine. Returns its id; ids only increase."""
        with self._lock:
            edit_id = self._next_edit_id
            self._next_edit_id += 1
            self._split_edits.append({
                "id": edit_id,
                "splitTimesMs": list(split_times_ms),
                "queuedAt": time.time(),
            })
        logger.info(f"Split edit {edit_id} queued ({len(split_times_ms)} splits)")
        return edit_id

    def get_split_edits(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(edit) for edit in self._split_edits]

    def clear_split_edits(self, up_to: int) -> int:
        """
        Acknowledge what the engine has read: drop edits with id <= up_to.
        Edits queued after the engine's last read stay pending.
        """
        with self._lock:
            kept = [edit for edit in self._split_edits if edit["id"] > up_to]
            cleared = len(self._split_edits) - len(kept)
            self._split_edits = kept
        return cleared


# =========================================================================
# MONITOR PAGE
# =========================================================================

MONITOR_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<meta name="theme-color" content="#08090c">
<title>Split Station</title>
<style>
  :root {
    --base: #08090c;
    --panel: #12141a;
    --rule: #23262f;
    --fg: #f2f3f5;
    --muted: #8a8f9c;
    --run: #30d158;
    --hold: #ffb340;
    --done: #5ac8fa;
    --warn: #ff453a;
    --mono: ui-monospace, 'Cascadia Mono', 'Consolas', monospace;
  }
  html, body { margin: 0; background: var(--base); color: var(--fg); }
  body { font: 15px/1.3 system-ui, 'Segoe UI', Roboto, sans-serif; }

  main { max-width: 520px; margin: 0 auto; padding: 10px; }

  #rows { display: grid; grid-template-columns: 1fr auto auto; column-gap: 14px; }
  #rows > div { padding: 7px 8px; border-bottom: 1px solid var(--rule); }
  #rows .t { font-family: var(--mono); text-align: right; }
  #rows .now { background: #1b2a3d; }
  #rows .none { grid-column: 1 / -1; color: var(--muted); text-align: center; padding: 28px 0; }

  #timer {
    margin-top: 12px;
    padding: 10px 8px 4px;
    text-align: right;
    font: 700 clamp(44px, 16vw, 84px) var(--mono);
    color: var(--muted);
  }
  #timer[data-state="running"] { color: var(--run); }
  #timer[data-state="paused"] { color: var(--hold); }
  #timer[data-state="finished"] { color: var(--done); }

  footer {
    display: flex;
    justify-content: space-between;
    padding: 6px 8px;
    color: var(--muted);
    font-size: 11px;
    text-transform: uppercase;
    letter-spacing: .08em;
  }
  footer .lost { color: var(--warn); }
</style>
</head>
<body>
<main>
  <section id="rows"><div class="none">Waiting for the timer</div></section>
  <div id="timer" data-state="idle">0.000</div>
  <footer>
    <span id="state">idle</span>
    <span id="link">connecting</span>
  </footer>
</main>

<script>
const rows = document.getElementById('rows');
const timer = document.getElementById('timer');
const stateLabel = document.getElementById('state');
const link = document.getElementById('link');
let misses = 0;

const cell = (text, cls, color) => {
  const el = document.createElement('div');
  el.textContent = text;
  if (cls) el.className = cls;
  if (color) el.style.color = color;
  return el;
};

function drawRows(splits) {
  rows.replaceChildren();
  if (!splits.length) {
    rows.append(cell('Waiting for the timer', 'none'));
    return;
  }
  for (const s of splits) {
    const now = s.is_current ? ' now' : '';
    rows.append(
      cell(s.name, now.trim()),
      cell(s.delta_text, 't' + now, s.delta_color),
      cell(s.split_text, 't' + now));
  }
}

async function refresh() {
  try {
    const res = await fetch('/api/state', {cache: 'no-store'});
    if (!res.ok) throw new Error(res.status);
    const s = await res.json();
    misses = 0;
    timer.textContent = s.elapsed_text;
    timer.dataset.state = s.status;
    stateLabel.textContent = s.status;
    drawRows(s.splits || []);
    link.textContent = 'live';
    link.className = '';
  } catch (err) {
    misses += 1;
    link.textContent = 'offline x' + misses;
    link.className = 'lost';
  }
}

refresh();
setInterval(refresh, 250);
</script>
</body>
</html>"""


# =========================================================================
# FLASK APP
# =========================================================================

def _bad_request(message: str):
    logger.warning(f"Rejected feed payload: {message}")
    return jsonify({"error": message}), 400


def _state_from_body(body) -> TimerStatus:
    if isinstance(body, dict):
        body = body.get("state")
    return TimerStatus.parse(body)


def create_flask_app(shared_state: SharedTimerState, feed_queue: "queue.Queue"):
    """
    Build the Flask app.

    Args:
        shared_state: Monitor state written by the UI thread
        feed_queue: Queue of (kind, payload) tuples drained by the UI thread
    """
    app = Flask(__name__)
    app.logger.setLevel(logging.WARNING)

    # The monitor polls 4x a second; keep request lines out of the log
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    def _queue_event(kind, decode):
        if not request.is_json:
            return _bad_request("Body must be JSON")
        try:
            body = request.get_json()
        except BadRequest:
            return _bad_request("Body is not valid JSON")
        try:
            payload = decode(body)
        except ValueError as e:
            return _bad_request(str(e))
        feed_queue.put((kind, payload))
        return jsonify({"queued": True}), 202

    @app.route('/')
    def index():
        return Response(MONITOR_HTML, mimetype='text/html')

    @app.route('/api/state')
    def api_state():
        return jsonify(shared_state.get_state())

    # --- Feed ingress ---

    @app.route('/api/feed/tick', methods=['POST'])
    def feed_tick():
        return _queue_event('tick', TickEvent.from_dict)

    @app.route('/api/feed/state', methods=['POST'])
    def feed_state():
        return _queue_event('state', _state_from_body)

    @app.route('/api/feed/deltas', methods=['POST'])
    def feed_deltas():
        return _queue_event('deltas', Delta.list_from_json)

    # --- Manual split edits ---

    @app.route('/api/split-edits', methods=['GET'])
    def get_split_edits():
        return jsonify({"edits": shared_state.get_split_edits()})

    @app.route('/api/split-edits', methods=['DELETE'])
    def clear_split_edits():
        # upTo is the highest id the engine read; never clear blindly
        up_to = request.args.get('upTo', type=int)
        if up_to is None:
            return _bad_request("'upTo' query parameter (edit id) is required")
        return jsonify({"cleared": shared_state.clear_split_edits(up_to)})

    @app.route('/qr.png')
    def qr_code():
        if not HAS_QRCODE:
            return Response("qrcode is not installed", status=404)

        port = app.config.get('MONITOR_PORT', WEB_DEFAULT_PORT)
        image = qrcode.make(f"http://{get_local_ip()}:{port}", box_size=8, border=2)

        png = io.BytesIO()
        image.save(png, format='PNG')
        return Response(png.getvalue(), mimetype='image/png')

    return app


# =========================================================================
# SERVER LIFECYCLE
# =========================================================================

class TimerWebServer:
    """
    Runs the Flask app on a daemon thread with werkzeug's make_server,
    which (unlike app.run) can be shut down from another thread.

        server = TimerWebServer(SharedTimerState(), queue.Queue())
        url = server.start()
        ...
        server.stop()
    """

    def __init__(self, shared_state: SharedTimerState, feed_queue: "queue.Queue",
                 host: str = WEB_DEFAULT_HOST, port: int = WEB_DEFAULT_PORT):
        self.shared_state = shared_state
        self.feed_queue = feed_queue
        self.host = host
        self.port = port
        self._thread: Optional[threading.Thread] = None
        self._server = None
        self.running = False
        self.url = ""

    def start(self) -> str:
        """Bind and serve in the background. Returns the monitor URL."""
        if self.running:
            return self.url

        from werkzeug.serving import make_server

        app = create_flask_app(self.shared_state, self.feed_queue)
        app.config['MONITOR_PORT'] = self.port
        # Raises OSError if the port is taken; the caller reports it
        self._server = make_server(self.host, self.port, app, threaded=True)

        shown_host = get_local_ip() if self.host == "0.0.0.0" else self.host
        self.url = f"http://{shown_host}:{self.port}"

        def _serve():
            try:
                self._server.serve_forever()
            except Exception as e:
                logger.error(f"Web server error: {e}")
            finally:
                self.running = False
                logger.info("Web server stopped")

        self._thread = threading.Thread(target=_serve, name="split-station-web", daemon=True)
        self._thread.start()
        self.running = True

        logger.info(f"Feed and monitor listening on {self.url}")
        return self.url

    def stop(self):
        if self._server:
            self._server.shutdown()
            self._server = None
        self.running = False

    def get_url(self) -> str:
        return self.url if self.running else ""
