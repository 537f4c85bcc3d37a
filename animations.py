"""
Frame-driven tweens - time interpolation advanced by the render loop
"""

import math
from typing import Callable, Optional


def ease_in_out(t: float) -> float:
    """Sine ease in/out, exact at both ends"""
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    return 0.5 - 0.5 * math.cos(math.pi * t)


class Tween:
    """
    Interpolates progress from 0 to 1 over `duration` seconds.

    Nothing happens on its own: the owner calls advance(dt) once per frame.
    on_update receives the eased progress; on_complete fires exactly once,
    after the final on_update(1.0), unless the tween was cancelled.
    """

    def __init__(self, duration: float,
                 on_update: Optional[Callable[[float], None]] = None,
                 on_complete: Optional[Callable[[], None]] = None,
                 easing: Callable[[float], float] = ease_in_out):
        self.duration = max(duration, 0.0)
        self.on_update = on_update
        self.on_complete = on_complete
        self.easing = easing
        self.elapsed = 0.0
        self.finished = False
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not (self.finished or self.cancelled)

    def advance(self, dt: float) -> bool:
        """Move time forward; returns True once the tween is over"""
        if not self.active:
            return True

        self.elapsed += max(dt, 0.0)
        if self.duration == 0.0:
            progress = 1.0
        else:
            progress = min(self.elapsed / self.duration, 1.0)

        if self.on_update:
            self.on_update(self.easing(progress))

        if progress >= 1.0:
            self.finished = True
            if self.on_complete:
                self.on_complete()
        return self.finished

    def cancel(self):
        self.cancelled = True
