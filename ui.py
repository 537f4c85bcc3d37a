"""
UI components - face grid, timer display, instructions and screen drawing
"""

import curses
import math
from typing import List, Optional, Sequence, Tuple

from config import (
    COLOR_TO_CURSES, COLUMN_UP_KEYS, COLUMN_DOWN_KEYS, ROW_LEFT_KEYS, ROW_RIGHT_KEYS,
    KEYBOARD_SIZES,
)
from cube_state import face_stickers, sticker_position
from game import GameSession
from history import get_recent_times, generate_sparkline, get_statistics
from input_mapper import dominant_face

# Size of one sticker on screen, in terminal cells
STICKER_WIDTH = 4
STICKER_HEIGHT = 2

PANEL_WIDTH = 50
PANEL_HEIGHT = 18


def init_colors():
    """Initialize curses color pairs with proper orange color"""
    curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(2, curses.COLOR_BLACK, curses.COLOR_WHITE)
    curses.init_pair(4, curses.COLOR_BLACK, curses.COLOR_GREEN)
    curses.init_pair(5, curses.COLOR_BLACK, curses.COLOR_RED)
    curses.init_pair(6, curses.COLOR_BLACK, curses.COLOR_YELLOW)

    # Try to use 256-color orange
    if curses.COLORS >= 256:
        curses.init_pair(3, curses.COLOR_BLACK, 208)  # Orange
    else:
        curses.init_pair(3, curses.COLOR_BLACK, curses.COLOR_YELLOW)

    # Text colors
    curses.init_pair(7, curses.COLOR_GREEN, curses.COLOR_BLACK)
    curses.init_pair(8, curses.COLOR_RED, curses.COLOR_BLACK)
    curses.init_pair(9, curses.COLOR_WHITE, curses.COLOR_BLACK)


def format_time(seconds: float) -> str:
    """Format time as MM:SS.cc"""
    mins = int(seconds // 60)
    secs = seconds % 60
    return f"{mins:02d}:{secs:05.2f}"


def orbit_camera(camera: Sequence[float], yaw_deg: float = 0.0,
                 pitch_deg: float = 0.0) -> Tuple[float, float, float]:
    """Swing the camera around the cube origin, keeping its distance"""
    x, y, z = (float(v) for v in camera)
    radius = math.sqrt(x * x + y * y + z * z)
    yaw = math.atan2(x, z) + math.radians(yaw_deg)
    pitch = math.asin(y / radius) + math.radians(pitch_deg)
    pitch = max(min(pitch, math.radians(89.0)), math.radians(-89.0))

    horizontal = radius * math.cos(pitch)
    return (horizontal * math.sin(yaw), radius * math.sin(pitch), horizontal * math.cos(yaw))


def face_origin(width: int, size: int) -> Tuple[int, int]:
    """Top-left screen cell of the face grid"""
    return 4, width // 2 - (size * STICKER_WIDTH) // 2


def cell_to_cubie(face: str, size: int, origin: Tuple[int, int],
                  y: int, x: int) -> Optional[tuple]:
    """Lattice position under a screen cell, None outside the grid"""
    row = (y - origin[0]) // STICKER_HEIGHT
    col = (x - origin[1]) // STICKER_WIDTH
    if y < origin[0] or x < origin[1] or row >= size or col >= size:
        return None
    return sticker_position(face, row, col, size)


def draw_face(stdscr, session: GameSession, face: str, origin: Tuple[int, int]):
    """Draw the stickers of the face the camera looks at"""
    engine = session.engine
    grid = face_stickers(engine.cubies, face, engine.size, engine.position_tolerance)
    top, left = origin

    for r, row in enumerate(grid):
        for c, color in enumerate(row):
            pair = COLOR_TO_CURSES.get(color, 0)
            attr = curses.color_pair(pair) if pair > 0 else curses.A_REVERSE
            for dy in range(STICKER_HEIGHT):
                try:
                    stdscr.addstr(top + r * STICKER_HEIGHT + dy, left + c * STICKER_WIDTH,
                                  " " * (STICKER_WIDTH - 1), attr)
                except curses.error:
                    pass

    label = f"[{face.upper()}]"
    if engine.is_animating:
        move = engine.active_move
        label += f" turning {move.axis}{move.slice:+g} ({engine.pending_moves} queued)"
    try:
        stdscr.addstr(top - 1, left, label, curses.A_DIM)
    except curses.error:
        pass


def draw_status_bar(stdscr, width: int, row: int, session: GameSession):
    """Draw puzzle size, input state and move count"""
    parts = [(f"[{session.size}x{session.size}]", curses.color_pair(9) | curses.A_BOLD)]

    if not session.accepts_input():
        parts.append(("  [INPUT PAUSED]", curses.color_pair(8)))
    elif session.engine.pending_moves:
        parts.append((f"  [{session.engine.pending_moves} QUEUED]", curses.color_pair(6)))

    if session.move_count > 0:
        parts.append((f"  Moves: {session.move_count}", curses.A_DIM))

    total_width = sum(len(p[0]) for p in parts)
    col = width // 2 - total_width // 2

    try:
        for text, attr in parts:
            stdscr.addstr(row, col, text, attr)
            col += len(text)
    except curses.error:
        pass


def draw_timer_display(stdscr, width: int, session: GameSession):
    """Draw the timer display centered above the cube"""
    if session.scrambling:
        label, timer_text = "SCRAMBLING", "--:--.--"
        color = curses.color_pair(9) | curses.A_BOLD
    elif session.timer_running:
        label, timer_text = "SOLVING", format_time(session.elapsed())
        color = curses.color_pair(6) | curses.A_BOLD
    elif session.timer_result is not None:
        timer_text = format_time(session.timer_result)
        if session.is_pb:
            label = "NEW PB!"
            color = curses.color_pair(7) | curses.A_BOLD | curses.A_BLINK
        else:
            label = "SOLVED!"
            color = curses.color_pair(7) | curses.A_BOLD
    else:
        label, timer_text = "READY", "00:00.00"
        color = curses.color_pair(9) | curses.A_BOLD

    display_text = f" {label}: {timer_text} "
    frame_width = len(display_text) + 2
    col = width // 2 - frame_width // 2

    try:
        stdscr.addstr(0, col, "+" + "-" * (frame_width - 2) + "+", color)
        stdscr.addstr(1, col, "|" + display_text + "|", color)
        stdscr.addstr(2, col, "+" + "-" * (frame_width - 2) + "+", color)
    except curses.error:
        pass


def draw_instructions(stdscr, start_row: int, size: int):
    """Draw control instructions"""
    h, w = stdscr.getmaxyx()

    try:
        stdscr.addstr(start_row, 0, "-" * (w - 1), curses.A_DIM)
    except curses.error:
        pass

    if size in KEYBOARD_SIZES:
        lines = [
            (f"Columns  {COLUMN_UP_KEYS[:size].upper()} up    {COLUMN_DOWN_KEYS[:size].upper()} down", 0),
            (f"Rows     {ROW_LEFT_KEYS[:size].upper()} left  {ROW_RIGHT_KEYS[:size].upper()} right", 0),
        ]
    else:
        lines = [("Drag a sticker with the mouse to turn its row or column", 0)]

    lines += [
        ("Arrow Keys    Orbit camera", 0),
        ("", 0),
        ("X=Shuffle  C=Reset  N=Size  H=History  Esc=Quit", curses.A_DIM),
    ]

    for i, (line, attr) in enumerate(lines):
        try:
            stdscr.addstr(start_row + 1 + i, 2, line, attr)
        except curses.error:
            pass


def history_lines(size: int) -> List[Tuple[str, int]]:
    """Text and curses attribute of each line of the history panel"""
    stats = get_statistics(size)
    if stats["count"] == 0:
        return [("", 0)] * 4 + [("No solves yet!".center(PANEL_WIDTH - 6), curses.A_DIM)]

    accent = curses.color_pair(6)
    lines = [
        (f"Personal Best:  {format_time(stats['best'])}", curses.color_pair(7) | curses.A_BOLD),
        ("", 0),
        (f"Total Solves:   {stats['count']}", 0),
        (f"Average:        {format_time(stats['average'])}", 0),
        (f"Worst:          {format_time(stats['worst'])}", 0),
        ("", 0),
    ]
    for n in (5, 12):
        label = f"Ao{n}:".ljust(16)
        if f"ao{n}" in stats:
            lines.append((label + format_time(stats[f"ao{n}"]), accent))
        else:
            lines.append((label + f"(need {n} solves)", curses.A_DIM))

    recent = get_recent_times(30, size)
    if recent:
        lines += [("", 0), ("Last 30:", curses.A_DIM),
                  (f"[{generate_sparkline(recent, width=30)}]", accent)]
    return lines


def draw_history_panel(stdscr, size: int):
    """Draw the history panel overlay for one puzzle size"""
    h, w = stdscr.getmaxyx()
    top = h // 2 - PANEL_HEIGHT // 2
    left = w // 2 - PANEL_WIDTH // 2
    border = "+" + "-" * (PANEL_WIDTH - 2) + "+"
    title = f" HISTORY {size}x{size} "
    footer = "Press any key to close"

    try:
        stdscr.addstr(top, left, border, curses.A_BOLD)
        stdscr.addstr(top, left + (PANEL_WIDTH - len(title)) // 2, title,
                      curses.A_BOLD | curses.color_pair(7))
        for i in range(1, PANEL_HEIGHT - 1):
            stdscr.addstr(top + i, left, "|" + " " * (PANEL_WIDTH - 2) + "|")
        stdscr.addstr(top + PANEL_HEIGHT - 1, left, border, curses.A_BOLD)

        for i, (text, attr) in enumerate(history_lines(size)[:PANEL_HEIGHT - 5]):
            if text:
                stdscr.addstr(top + 2 + i, left + 3, text, attr)

        stdscr.addstr(top + PANEL_HEIGHT - 2, left + (PANEL_WIDTH - len(footer)) // 2,
                      footer, curses.A_DIM)
    except curses.error:
        pass

    stdscr.refresh()


def redraw_screen(stdscr, session: GameSession, camera: Sequence[float]):
    """Redraw the entire screen"""
    h, w = stdscr.getmaxyx()
    stdscr.erase()
    face = dominant_face(camera)
    draw_timer_display(stdscr, w, session)
    draw_face(stdscr, session, face, face_origin(w, session.size))
    draw_instructions(stdscr, h - 8, session.size)
    draw_status_bar(stdscr, w, h - 1, session)
    stdscr.refresh()
