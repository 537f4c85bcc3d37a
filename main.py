#!/usr/bin/env python3
"""
Terminal NxNxN Rubik's Cube Simulator
Main entry point
"""

import argparse
import curses
import logging
import time

from config import (
    CELL_HEIGHT_PX, CELL_WIDTH_PX, DEFAULT_CAMERA, DEFAULT_SIZE,
    FRAME_INTERVAL, LOG_FILE, MAX_SIZE, MIN_SIZE, ORBIT_STEP_DEG,
)
from game import GameSession
from input_mapper import ViewContext, dominant_face
from logging_config import setup_logging
from ui import (
    cell_to_cubie, draw_history_panel, face_origin, init_colors,
    orbit_camera, redraw_screen,
)

logger = logging.getLogger(__name__)

# Sizes cycled with N
CYCLE_SIZES = tuple(range(2, MAX_SIZE + 1))


def next_size(size: int) -> int:
    if size not in CYCLE_SIZES:
        return CYCLE_SIZES[0]
    return CYCLE_SIZES[(CYCLE_SIZES.index(size) + 1) % len(CYCLE_SIZES)]


def show_history(stdscr, size: int):
    draw_history_panel(stdscr, size)
    stdscr.nodelay(False)
    stdscr.getch()
    stdscr.nodelay(True)


def main(stdscr, args):
    """Main game loop"""
    curses.curs_set(0)
    curses.start_color()
    init_colors()
    stdscr.nodelay(True)
    curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)
    curses.mouseinterval(0)

    session = GameSession(args.size, player_name=args.name)
    logger.info("Started %dx%d session", session.size, session.size)
    camera = DEFAULT_CAMERA
    press = None  # (row, col, grabbed cubie position)

    last_frame = time.monotonic()
    try:
        while True:
            now = time.monotonic()
            session.tick(now - last_frame)
            last_frame = now

            key = stdscr.getch()
            if key == 27:  # ESC
                break

            if key == curses.KEY_LEFT:
                camera = orbit_camera(camera, yaw_deg=-ORBIT_STEP_DEG)
            elif key == curses.KEY_RIGHT:
                camera = orbit_camera(camera, yaw_deg=ORBIT_STEP_DEG)
            elif key == curses.KEY_UP:
                camera = orbit_camera(camera, pitch_deg=ORBIT_STEP_DEG)
            elif key == curses.KEY_DOWN:
                camera = orbit_camera(camera, pitch_deg=-ORBIT_STEP_DEG)
            elif key == curses.KEY_MOUSE:
                try:
                    _, mx, my, _, bstate = curses.getmouse()
                except curses.error:
                    bstate = 0
                origin = face_origin(stdscr.getmaxyx()[1], session.size)
                if bstate & curses.BUTTON1_PRESSED:
                    press = (my, mx, cell_to_cubie(dominant_face(camera), session.size, origin, my, mx))
                elif bstate & curses.BUTTON1_RELEASED and press is not None:
                    drag = ((mx - press[1]) * CELL_WIDTH_PX, (my - press[0]) * CELL_HEIGHT_PX)
                    session.handle_drag(ViewContext(camera, press[2], drag))
                    press = None
            elif key != -1:
                char = chr(key).lower() if key < 256 else ''

                if char == 'x':
                    session.scramble()
                elif char == 'c':
                    session.reset()
                elif char == 'n':
                    session.reset(next_size(session.size))
                elif char == 'h':
                    show_history(stdscr, session.size)
                elif char:
                    session.handle_key(char, ViewContext(camera))

            redraw_screen(stdscr, session, camera)
            time.sleep(FRAME_INTERVAL)
    finally:
        session.dispose()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Terminal Rubik's cube simulator")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="cube size N (1-7)")
    parser.add_argument("--name", default="UNK", help="name stored with solve times")
    parser.add_argument("--log-file", default=str(LOG_FILE), help="log file path")
    parser.add_argument("--debug", action="store_true", help="log engine moves")
    args = parser.parse_args(argv)
    if not MIN_SIZE <= args.size <= MAX_SIZE:
        parser.error(f"--size must be between {MIN_SIZE} and {MAX_SIZE}")
    return args


def run():
    args = parse_args()
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file, console=False)
    curses.wrapper(main, args)


if __name__ == "__main__":
    run()
