import pytest

from gallery_board.drag import (
    DragReorderEngine, DragState, Point, PointerKind, Rect, Region, closest_target,
)


def row_layout(store, width=100, gap=10):
    """Cards laid out left to right in one row."""
    return {it.id: Rect(i * (width + gap), 0, width, 100) for i, it in enumerate(store.items)}


def titles(store):
    return [it.title for it in store.items]


@pytest.fixture
def engine(abc_store):
    return DragReorderEngine(abc_store)


def drag(engine, store, src, dx, kind=PointerKind.MOUSE, t0=0.0):
    item = store.items[src]
    layout = row_layout(store)
    start = layout[item.id].center
    assert engine.press(item.id, start, kind=kind, layout=layout, timestamp=t0)
    engine.move(Point(start.x + dx / 2, start.y), timestamp=t0 + 0.2)
    engine.move(Point(start.x + dx, start.y), timestamp=t0 + 0.3)
    return engine.release(timestamp=t0 + 0.4)


# ----------------------------
# geometry
# ----------------------------
def test_closest_target_prefers_overlap_then_center():
    layout = {"a": Rect(0, 0, 100, 100), "b": Rect(110, 0, 100, 100)}
    assert closest_target(Rect(70, 0, 100, 100), layout) == "b"
    assert closest_target(Rect(40, 0, 100, 100), layout) == "a"


def test_closest_target_without_overlap_uses_nearest_center():
    layout = {"a": Rect(0, 0, 100, 100), "b": Rect(110, 0, 100, 100)}
    assert closest_target(Rect(400, 0, 50, 50), layout) == "b"


def test_closest_target_tie_goes_to_earlier_card():
    layout = {"a": Rect(0, 0, 100, 100), "b": Rect(110, 0, 100, 100)}
    assert closest_target(Rect(55, 0, 100, 100), layout) == "a"


def test_closest_target_empty_layout():
    assert closest_target(Rect(0, 0, 1, 1), {}) is None


# ----------------------------
# full gestures
# ----------------------------
def test_mouse_drag_first_card_onto_last(engine, abc_store):
    instruction = drag(engine, abc_store, 0, 220)
    assert (instruction.source_index, instruction.dest_index) == (0, 2)
    assert titles(abc_store) == ["B", "C", "A"]
    assert engine.state is DragState.IDLE


def test_mouse_drag_backwards(engine, abc_store):
    instruction = drag(engine, abc_store, 2, -110)
    assert (instruction.source_index, instruction.dest_index) == (2, 1)
    assert titles(abc_store) == ["A", "C", "B"]


def test_release_over_origin_emits_nothing(engine, abc_store):
    assert drag(engine, abc_store, 1, 30) is None
    assert titles(abc_store) == ["A", "B", "C"]


def test_mouse_below_activation_distance_is_a_tap(engine, abc_store):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[item.id].center
    engine.press(item.id, start, layout=layout)
    engine.move(Point(start.x + 3, start.y))
    assert engine.state is DragState.PENDING
    assert engine.release() is None
    assert engine.state is DragState.IDLE


def test_mouse_exactly_at_activation_distance_is_still_a_tap(engine, abc_store):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[item.id].center
    engine.press(item.id, start, layout=layout)
    engine.move(Point(start.x + 3, start.y + 4))
    assert engine.state is DragState.PENDING
    engine.move(Point(start.x + 5, start.y))
    assert engine.state is DragState.PENDING
    engine.move(Point(start.x + 5.5, start.y))
    assert engine.state is DragState.DRAGGING
    engine.cancel()
    assert titles(abc_store) == ["A", "B", "C"]


def test_press_outside_handle_is_not_a_drag(engine, abc_store):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    assert not engine.press(item.id, layout[item.id].center, region=Region.CONTROL, layout=layout)
    assert not engine.press(item.id, layout[item.id].center, region="body", layout=layout)
    assert engine.state is DragState.IDLE
    engine.move(Point(300, 50))
    assert engine.release() is None
    assert titles(abc_store) == ["A", "B", "C"]


@pytest.mark.parametrize("kw", [{"kind": "stylus"}, {"region": "corner"}])
def test_press_with_unknown_kind_or_region_leaves_engine_idle(engine, abc_store, kw):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[item.id].center
    assert engine.press(item.id, start, layout=layout, **kw) is False
    assert engine.state is DragState.IDLE
    assert engine.active_id is None
    engine.move(Point(start.x + 300, start.y), timestamp=1.0)
    engine.tick(timestamp=2.0)
    assert engine.release(timestamp=3.0) is None
    assert titles(abc_store) == ["A", "B", "C"]
    # a well-formed press still works afterwards
    assert drag(engine, abc_store, 0, 220) is not None
    assert titles(abc_store) == ["B", "C", "A"]


def test_touch_hold_then_drag(engine, abc_store):
    instruction = drag(engine, abc_store, 0, 110, kind=PointerKind.TOUCH)
    assert (instruction.source_index, instruction.dest_index) == (0, 1)
    assert titles(abc_store) == ["B", "A", "C"]


def test_touch_moving_before_delay_is_a_scroll(engine, abc_store):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[item.id].center
    engine.press(item.id, start, kind=PointerKind.TOUCH, layout=layout, timestamp=0.0)
    engine.move(Point(start.x + 40, start.y), timestamp=0.05)
    assert engine.state is DragState.IDLE
    engine.move(Point(start.x + 220, start.y), timestamp=0.5)
    assert engine.release(timestamp=0.6) is None
    assert titles(abc_store) == ["A", "B", "C"]


def test_touch_small_jitter_within_tolerance_keeps_pending(engine, abc_store):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[item.id].center
    engine.press(item.id, start, kind=PointerKind.TOUCH, layout=layout, timestamp=0.0)
    engine.move(Point(start.x + 3, start.y), timestamp=0.05)
    assert engine.state is DragState.PENDING
    engine.tick(timestamp=0.15)
    assert engine.state is DragState.DRAGGING


def test_cancel_discards_gesture(engine, abc_store):
    item = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[item.id].center
    engine.press(item.id, start, layout=layout)
    engine.move(Point(start.x + 220, start.y))
    assert engine.state is DragState.DRAGGING
    engine.cancel()
    assert engine.state is DragState.IDLE
    assert engine.release() is None
    assert titles(abc_store) == ["A", "B", "C"]


def test_release_without_press_is_ignored(engine, abc_store):
    assert engine.release(Point(10, 10)) is None
    assert engine.state is DragState.IDLE
    assert titles(abc_store) == ["A", "B", "C"]


def test_second_press_resets(engine, abc_store):
    layout = row_layout(abc_store)
    a, b = abc_store.items[0], abc_store.items[1]
    engine.press(a.id, layout[a.id].center, layout=layout)
    assert not engine.press(b.id, layout[b.id].center, layout=layout)
    assert engine.state is DragState.IDLE


def test_press_on_unknown_card_is_ignored(engine, abc_store):
    assert not engine.press("ghost", Point(0, 0), layout=row_layout(abc_store))
    assert engine.state is DragState.IDLE


def test_layout_refresh_mid_drag(engine, abc_store):
    a = abc_store.items[0]
    layout = row_layout(abc_store)
    start = layout[a.id].center
    engine.press(a.id, start, layout=layout)
    engine.move(Point(start.x + 10, start.y))
    # grid reflowed into a column; the pointer is now nearest to C's new slot
    column = {it.id: Rect(0, i * 110, 100, 100) for i, it in enumerate(abc_store.items)}
    engine.update_layout(column)
    engine.move(Point(start.x, start.y + 220))
    instruction = engine.release()
    assert (instruction.source_index, instruction.dest_index) == (0, 2)


def test_layout_refresh_without_dragged_card_cancels(engine, abc_store):
    a = abc_store.items[0]
    layout = row_layout(abc_store)
    engine.press(a.id, layout[a.id].center, layout=layout)
    engine.update_layout({k: v for k, v in layout.items() if k != a.id})
    assert engine.state is DragState.IDLE


def test_custom_reorder_callback():
    class Store:
        def __init__(self):
            self.ids = ["a", "b"]

        def index_of(self, iid):
            return self.ids.index(iid)

    calls = []
    engine = DragReorderEngine(Store(), on_reorder=lambda s, d: calls.append((s, d)))
    engine.drop("a", "b")
    assert calls == [(0, 1)]


# ----------------------------
# drop (pre-recognised gesture)
# ----------------------------
def test_drop_by_ids(engine, abc_store):
    a, _, c = abc_store.items
    instruction = engine.drop(a.id, c.id)
    assert instruction.item_id == a.id
    assert titles(abc_store) == ["B", "C", "A"]


def test_drop_on_self_or_nothing(engine, abc_store):
    a = abc_store.items[0]
    assert engine.drop(a.id, a.id) is None
    assert engine.drop(a.id, None) is None
    assert titles(abc_store) == ["A", "B", "C"]


def test_drop_with_stale_id_is_ignored(engine, abc_store):
    a = abc_store.items[0]
    assert engine.drop(a.id, "gone") is None
    assert titles(abc_store) == ["A", "B", "C"]
