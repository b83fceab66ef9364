import pytest

from flowgame.commands import Direction
from flowgame.components.cell import CellKind
from flowgame.components.color import Color
from flowgame.components.cursor import Cursor
from flowgame.components.source import SourceSlot
from flowgame.events.bus import EVENT_CURSOR_MOVED, EVENT_GRAB_RELEASED, EVENT_GRAB_STARTED
from flowgame.results import Outcome
from flowgame.systems.cursor import CursorSystem

from helpers import COLUMN_LEVEL, make_board

RED, ORANGE = Color.RED, Color.ORANGE
UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT


def make_cursor(text, start=None):
    world, bus, board = make_board(text)
    return world, bus, board, CursorSystem(world, bus, board, start=start)


def test_cursor_starts_on_first_free_cell():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL)
    # (0,0) and (1,0) are sources.
    assert cursor.position == (2, 0)
    assert cursor.grab.is_idle
    comps = list(world.get_component(Cursor))
    assert len(comps) == 1


def test_explicit_start_must_be_free():
    make_cursor(COLUMN_LEVEL, start=(3, 3))
    with pytest.raises(ValueError):
        make_cursor(COLUMN_LEVEL, start=(0, 0))
    with pytest.raises(ValueError):
        make_cursor(COLUMN_LEVEL, start=(9, 9))


def test_idle_moves_stay_on_free_cells():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL)
    moved = []
    bus.subscribe(EVENT_CURSOR_MOVED, lambda sender, **kw: moved.append(kw['position']))
    assert cursor.move(UP) == (Outcome.OUT_OF_BOUNDS, None)
    assert cursor.move(LEFT) == (Outcome.BLOCKED, None)
    assert cursor.move(DOWN) == (Outcome.MOVED, None)
    assert cursor.position == (2, 1)
    assert moved == [(2, 1)]
    assert board.cells() == make_board(COLUMN_LEVEL)[2].cells()


def test_idle_cursor_walks_over_paths_without_changing_them():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    cursor.move(DOWN)
    cursor.toggle_grab()
    cursor.move(RIGHT)
    before = board.cells()
    assert cursor.move(LEFT) == (Outcome.MOVED, None)
    assert cursor.move(UP) == (Outcome.MOVED, None)
    assert board.cells() == before


def test_grab_next_to_source_starts_flow_under_cursor():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    started = []
    bus.subscribe(EVENT_GRAB_STARTED, lambda sender, **kw: started.append(kw))
    outcome, change = cursor.toggle_grab()
    assert outcome is Outcome.GRABBED
    assert change.changed == [(0, 1)]
    assert cursor.grab.color is RED
    assert board.flow(RED).anchor is SourceSlot.A
    assert board.flow(RED).path == [(0, 1)]
    assert started == [{'color': RED, 'position': (0, 1)}]


def test_grab_prefers_slot_a_when_both_sources_touch():
    world, bus, board, cursor = make_cursor("3 1\n0 0 2 0\n")
    outcome, change = cursor.toggle_grab()
    assert outcome is Outcome.GRABBED
    assert board.flow(RED).anchor is SourceSlot.A
    assert board.is_complete(RED)


def test_grab_with_nothing_nearby():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(3, 3))
    assert cursor.toggle_grab() == (Outcome.NOTHING_TO_GRAB, None)
    assert cursor.grab.is_idle


def test_grab_between_two_colors_is_ambiguous():
    world, bus, board, cursor = make_cursor("3 2\n0 0 0 1\n2 0 2 1\n")
    assert cursor.position == (1, 0)
    assert cursor.toggle_grab() == (Outcome.AMBIGUOUS_GRAB, None)
    assert cursor.grab.is_idle
    assert board.flow(RED).anchor is None and board.flow(ORANGE).anchor is None


def test_toggle_releases_and_keeps_path():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    released = []
    bus.subscribe(EVENT_GRAB_RELEASED, lambda sender, **kw: released.append(kw))
    cursor.toggle_grab()
    assert cursor.toggle_grab() == (Outcome.RELEASED, None)
    assert cursor.grab.is_idle
    assert board.flow(RED).path == [(0, 1)]
    assert released == [{'color': RED, 'reason': 'toggle'}]


def test_grabbed_moves_extend_and_cursor_rides_head():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    outcome, change = cursor.move(DOWN)
    assert outcome is Outcome.EXTENDED
    assert cursor.position == (0, 2) == board.flow(RED).head
    outcome, change = cursor.move(UP)
    assert outcome is Outcome.RETRACTED
    assert cursor.position == (0, 1) == board.flow(RED).head
    assert cursor.grab.color is RED


def test_grab_resumes_existing_path_from_its_head():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    cursor.move(DOWN)
    cursor.toggle_grab()
    assert cursor.move(RIGHT) == (Outcome.MOVED, None)
    outcome, change = cursor.toggle_grab()
    assert outcome is Outcome.GRABBED
    assert change.outcome is Outcome.EXTENDED
    assert board.flow(RED).path == [(0, 1), (0, 2), (1, 2)]
    assert cursor.grab.color is RED


def test_grab_on_head_takes_flow_without_change():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    cursor.move(DOWN)
    cursor.toggle_grab()
    outcome, change = cursor.toggle_grab()
    assert outcome is Outcome.GRABBED
    assert change is None
    assert board.flow(RED).path == [(0, 1), (0, 2)]


def test_grab_inside_own_path_is_not_a_resume():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    cursor.move(DOWN)
    cursor.move(RIGHT)
    cursor.toggle_grab()
    cursor.move(LEFT)
    assert board.content_at(cursor.position).kind is CellKind.PATH
    assert cursor.toggle_grab() == (Outcome.NOTHING_TO_GRAB, None)


def test_grabbed_move_into_wall_keeps_grab():
    world, bus, board, cursor = make_cursor("3 3\n0 0 2 2\n1 1\n")
    assert cursor.position == (1, 0)
    cursor.toggle_grab()
    before = board.cells()
    outcome, change = cursor.move(DOWN)
    assert outcome is Outcome.BLOCKED
    assert cursor.position == (1, 0)
    assert cursor.grab.color is RED
    assert board.cells() == before


def test_grabbed_move_off_board_keeps_grab():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL)
    cursor.toggle_grab()
    assert cursor.move(UP) == (Outcome.OUT_OF_BOUNDS, None)
    assert cursor.grab.color is ORANGE


def test_entering_own_source_releases_grab():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL)
    released = []
    bus.subscribe(EVENT_GRAB_RELEASED, lambda sender, **kw: released.append(kw['reason']))
    cursor.toggle_grab()
    assert cursor.grab.color is ORANGE
    outcome, change = cursor.move(LEFT)
    assert outcome is Outcome.ENTERED_SOURCE
    assert cursor.position == (2, 0)
    assert cursor.grab.is_idle
    assert board.flow(ORANGE).path == [(2, 0)]
    assert released == ['entered_source']


def test_entering_other_color_source_releases_grab():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    cursor.move(RIGHT)
    outcome, change = cursor.move(UP)
    assert outcome is Outcome.ENTERED_SOURCE
    assert cursor.position == (1, 1)
    assert cursor.grab.is_idle
    assert board.flow(RED).path == [(0, 1), (1, 1)]
    assert board.flow(ORANGE).path == []


def test_self_crossing_deletes_flow_and_releases():
    world, bus, board, cursor = make_cursor("4 4\n0 0 3 3\n", start=(1, 0))
    released = []
    bus.subscribe(EVENT_GRAB_RELEASED, lambda sender, **kw: released.append(kw['reason']))
    cursor.toggle_grab()
    for direction in (RIGHT, DOWN, LEFT):
        assert cursor.move(direction)[0] is Outcome.EXTENDED
    outcome, change = cursor.move(UP)
    assert outcome is Outcome.SELF_DELETED
    assert cursor.position == (1, 0)
    assert cursor.grab.is_idle
    assert board.flow(RED).path == []
    assert all(c.kind is not CellKind.PATH for c in board.cells().values())
    assert released == ['self_crossing']


def test_reset_returns_cursor_to_start():
    world, bus, board, cursor = make_cursor(COLUMN_LEVEL, start=(0, 1))
    cursor.toggle_grab()
    cursor.move(DOWN)
    cursor.reset()
    assert cursor.position == (0, 1)
    assert cursor.grab.is_idle
