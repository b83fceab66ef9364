"""Entry point for the Flow path-connection puzzle.

Parses arguments, loads the level file, sets up the session, event bus,
systems, and Arcade window (or the terminal front end with --text).

    python src/main.py levels/classic_5x5.txt
    python src/main.py --text levels/classic_5x5.txt
    python src/main.py --order yx old_level.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from flowgame.components.game_state import GameMode
from flowgame.constants import BACKGROUND_COLOR, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from flowgame.events.bus import EventBus, EVENT_KEY_PRESS
from flowgame.level.definition import CoordinateOrder, LevelDefinition, LevelFormatError, parse_level
from flowgame.session import GameSession
from flowgame.systems.input import InputSystem
from flowgame.systems.render import RenderSystem
from flowgame.terminal import run_terminal

logger = logging.getLogger("flowgame")


def load_level(path: Path, order: CoordinateOrder) -> LevelDefinition:
    text = path.read_text(encoding="utf-8")
    return parse_level(text, order=order)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Connect each pair of colored sources with a flow.")
    parser.add_argument("level", type=Path, help="path to a level file")
    parser.add_argument(
        "--order",
        choices=[o.value for o in CoordinateOrder],
        default=CoordinateOrder.XY.value,
        help="coordinate order used by the level file (default: xy)",
    )
    parser.add_argument("--text", action="store_true", help="play in the terminal instead of opening a window")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every command")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        level = load_level(args.level, CoordinateOrder(args.order))
    except OSError as exc:
        print(f"Failed to open level file {args.level}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except LevelFormatError as exc:
        print(f"Invalid level {args.level}: {exc}", file=sys.stderr)
        return 1

    if args.text:
        session = GameSession(level)
        run_terminal(session, sys.stdin, sys.stdout)
        if session.won:
            logger.info("Victory!")
        return 0

    from arcade import Window, run, set_background_color

    class FlowWindow(Window):
        def __init__(self, level: LevelDefinition):
            super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
            self.event_bus = EventBus()
            self.session = GameSession(level, event_bus=self.event_bus)
            self.input_system = InputSystem(self.event_bus)
            self.render_system = RenderSystem(self.session, self.event_bus, self)
            set_background_color(BACKGROUND_COLOR)

        def on_draw(self):
            self.clear()
            self.render_system.process()

        def on_key_press(self, symbol: int, modifiers: int):
            self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)
            if self.session.mode == GameMode.QUIT:
                self.close()

    window = FlowWindow(level)
    run()
    if window.session.won:
        logger.info("Victory!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
