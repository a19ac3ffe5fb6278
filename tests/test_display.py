from backend.events import Delta
from backend.timer_state import TickSnapshot
from config import DELTA_COLORS
from utils.display import build_split_rows, delta_color


def test_delta_color_priority():
    best = Delta(segment_index=0, delta_ms=-100, is_best_ever=True, is_ahead=False)
    assert delta_color(best) == DELTA_COLORS['best_segment']

    assert delta_color(Delta(0, -100, is_ahead=True, gained_time=True)) == DELTA_COLORS['ahead_gaining']
    assert delta_color(Delta(0, -100, is_ahead=True, gained_time=False)) == DELTA_COLORS['ahead_losing']
    assert delta_color(Delta(0, 100, is_ahead=False, gained_time=True)) == DELTA_COLORS['behind_gaining']
    assert delta_color(Delta(0, 100, is_ahead=False, gained_time=False)) == DELTA_COLORS['behind_losing']


def test_delta_color_custom_palette():
    palette = {key: f"#00000{i}" for i, key in enumerate(sorted(DELTA_COLORS))}
    assert delta_color(Delta(0, 5, is_best_ever=True), palette) == palette['best_segment']


def test_build_split_rows_formats_table():
    snapshot = TickSnapshot(
        elapsed_ms=130000,
        current_segment=1,
        split_times_ms=(61234, 0),
        segment_times_ms=(61234,),
        split_names=("Intro", "Boss", "Ending"),
    )
    deltas = [
        Delta(segment_index=0, delta_ms=-1500, is_ahead=True, gained_time=True),
        Delta(segment_index=1, delta_ms=300, skipped=True),
    ]

    rows = build_split_rows(snapshot, deltas)

    assert [r.name for r in rows] == ["Intro", "Boss", "Ending"]
    assert [r.split_text for r in rows] == ["1:01.234", "-", "-"]
    assert [r.segment_text for r in rows] == ["1:01.234", "-", "-"]
    assert rows[0].delta_text == "-1.50"
    assert rows[0].delta_color == DELTA_COLORS['ahead_gaining']
    assert rows[1].delta_text == ""
    assert rows[1].delta_color is None
    assert [r.is_current for r in rows] == [False, True, False]


def test_build_split_rows_empty_run():
    assert build_split_rows(TickSnapshot()) == []


def test_split_row_to_dict():
    rows = build_split_rows(TickSnapshot(split_names=("Only",)))
    assert rows[0].to_dict() == {
        "index": 0,
        "name": "Only",
        "split_text": "-",
        "segment_text": "-",
        "delta_text": "",
        "delta_color": None,
        "is_current": True,
    }
