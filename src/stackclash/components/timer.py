from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TimerMode(Enum):
    ONCE = auto()
    REPEATING = auto()


@dataclass(slots=True)
class Timer:
    """Edge-triggered countdown advanced once per simulation tick.

    ``tick`` reports a firing at most once per call: a repeating timer wraps its
    elapsed time instead of replaying every missed period, and a once timer
    stays ``finished`` until restarted.
    """

    duration: float
    mode: TimerMode = TimerMode.ONCE
    elapsed: float = 0.0
    finished: bool = False
    just_finished: bool = False

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Timer duration must not be negative, got {self.duration}")

    @property
    def remaining(self) -> float:
        return max(0.0, self.duration - self.elapsed)

    def tick(self, dt: float) -> bool:
        self.just_finished = False
        if self.mode is TimerMode.ONCE:
            if self.finished:
                return False
            self.elapsed += dt
            if self.elapsed >= self.duration:
                self.elapsed = self.duration
                self.finished = True
                self.just_finished = True
            return self.just_finished
        self.elapsed += dt
        if self.elapsed >= self.duration:
            self.elapsed = self.elapsed % self.duration if self.duration > 0 else 0.0
            self.just_finished = True
        return self.just_finished

    def restart(self, duration: float | None = None, mode: TimerMode | None = None) -> None:
        if duration is not None:
            if duration < 0:
                raise ValueError(f"Timer duration must not be negative, got {duration}")
            self.duration = duration
        if mode is not None:
            self.mode = mode
        self.elapsed = 0.0
        self.finished = False
        self.just_finished = False

    def finish(self) -> None:
        """Mark the timer as run out without reporting a firing."""
        self.elapsed = self.duration
        self.finished = True
        self.just_finished = False

    def set_duration(self, duration: float) -> None:
        # Keeps progress; used by the rise timer whose interval shrinks over time.
        if duration < 0:
            raise ValueError(f"Timer duration must not be negative, got {duration}")
        self.duration = duration
