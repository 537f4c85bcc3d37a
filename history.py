"""
Solve history management with JSON persistence
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config import HISTORY_FILE, MAX_HISTORY

logger = logging.getLogger(__name__)


def load_history(path: Path = HISTORY_FILE) -> list:
    """Load solve history from JSON file"""
    if not path.exists():
        return []

    try:
        with open(path, 'r') as f:
            history = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Could not read history %s: %s", path, e)
        return []

    if not isinstance(history, list):
        logger.warning("Ignoring malformed history %s", path)
        return []
    return history


def save_history(history: list, path: Path = HISTORY_FILE):
    """Save solve history to JSON file"""
    # Keep only last MAX_HISTORY entries
    history = history[-MAX_HISTORY:]

    try:
        with open(path, 'w') as f:
            json.dump(history, f, indent=2)
    except IOError as e:
        logger.warning("Could not write history %s: %s", path, e)


def add_solve(time_seconds: float, moves: list, is_pb: bool, size: int = 3,
              name: str = "UNK", path: Path = HISTORY_FILE) -> dict:
    """Add a new solve to history"""
    history = load_history(path)

    now = datetime.now()

    solve = {
        "name": name,
        "size": size,
        "time": round(time_seconds, 2),
        "moves": moves,
        "move_count": len(moves),
        "date": now.strftime("%Y-%m-%d"),
        "hour": now.strftime("%H:%M:%S"),
        "is_pb": is_pb
    }

    history.append(solve)
    save_history(history, path)
    logger.info("Saved %.2fs solve (%dx%d, %d moves)", time_seconds, size, size, len(moves))

    return solve


def _times(history: list, size: Optional[int]) -> List[float]:
    return [s["time"] for s in history if size is None or s.get("size", 3) == size]


def get_best_time(size: Optional[int] = None, path: Path = HISTORY_FILE) -> Optional[float]:
    """Persistent PB for one size (all sizes when size is None)"""
    return min(_times(load_history(path), size), default=None)


def get_recent_times(n: int = 20, size: Optional[int] = None,
                     path: Path = HISTORY_FILE) -> list:
    """Get the N most recent solve times for sparkline"""
    return _times(load_history(path), size)[-n:]


def trimmed_average(times: List[float], n: int) -> Optional[float]:
    """Average of the last n times without their best and worst (AoN)"""
    if len(times) < n:
        return None
    window = sorted(times[-n:])[1:-1]
    return sum(window) / len(window)


def get_statistics(size: Optional[int] = None, path: Path = HISTORY_FILE) -> dict:
    """count/best/worst/average, plus ao5 and ao12 once there are enough solves"""
    times = _times(load_history(path), size)
    if not times:
        return {"count": 0}

    stats = {
        "count": len(times),
        "best": min(times),
        "worst": max(times),
        "average": sum(times) / len(times),
    }
    for n in (5, 12):
        average = trimmed_average(times, n)
        if average is not None:
            stats[f"ao{n}"] = average
    return stats


SPARK_CHARS = "▁▂▃▄▅▆▇█"


def generate_sparkline(times: list, width: int = 20) -> str:
    """One bar per time, lowest bar for the fastest solve"""
    times = times[-width:]
    if not times:
        return ""

    low, high = min(times), max(times)
    if high == low:
        return SPARK_CHARS[0] * len(times)

    top = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[int((t - low) / (high - low) * top)] for t in times)
