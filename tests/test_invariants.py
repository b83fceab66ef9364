import random

import pytest

from flowgame.commands import Reset
from flowgame.components.cell import CellKind
from flowgame.level.definition import parse_level
from flowgame.session import GameSession
from flowgame.utils.grid import is_adjacent

from helpers import DOWN, GRAB, LEFT, RIGHT, UP

COMMANDS = [UP, DOWN, LEFT, RIGHT, GRAB]


def check_board(session: GameSession):
    board = session.board
    cells = board.cells()
    owners = {}
    for color in board.colors:
        flow = board.flow(color)
        sources = board.sources(color)
        assert cells[sources.a].kind is CellKind.SOURCE
        assert cells[sources.b].kind is CellKind.SOURCE
        assert len(set(flow.path)) == len(flow.path), f"{color} revisits a cell"
        if flow.path:
            assert flow.anchor is not None
            chain = [sources.coord(flow.anchor)] + flow.path
            for a, b in zip(chain, chain[1:]):
                assert is_adjacent(a, b), f"{color} path broken between {a} and {b}"
            target = sources.coord(flow.anchor.other)
            expected = any(is_adjacent(c, target) for c in flow.path)
        else:
            expected = False
        assert board.is_complete(color) == expected
        for coord in flow.path:
            assert coord not in owners
            owners[coord] = color

    for coord, content in cells.items():
        if content.kind is CellKind.PATH:
            assert owners.get(coord) is content.color
        else:
            assert coord not in owners
        if coord in session.level.walls:
            assert content.kind is CellKind.WALL

    cursor = session.cursor_position
    assert cells[cursor].steppable
    if session.grab.is_grabbing:
        assert board.flow(session.grab.color).head == cursor
    assert session.won == board.all_complete()


@pytest.mark.parametrize("name, seed", [
    ("classic_5x5.txt", 7),
    ("classic_5x5.txt", 1234),
    ("walls_6x6.txt", 99),
])
def test_random_play_keeps_board_consistent(levels_dir, name, seed):
    with open(f"{levels_dir}/{name}", encoding="utf-8") as handle:
        session = GameSession(parse_level(handle.read()))
    rng = random.Random(seed)
    check_board(session)
    for _ in range(1500):
        before = session.snapshot()
        result = session.apply(rng.choice(COMMANDS))
        if not result.accepted:
            assert session.snapshot() == before
        check_board(session)
        if session.won:
            session.apply(Reset())
            check_board(session)
