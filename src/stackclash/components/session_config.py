from __future__ import annotations

import math
from dataclasses import dataclass

from stackclash import constants


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Gameplay constants fixed for the lifetime of a session."""

    width: int = constants.GRID_WIDTH
    height: int = constants.GRID_HEIGHT
    rise_interval: float = constants.RISE_INTERVAL
    rise_decay_factor: float = constants.RISE_DECAY_FACTOR
    rise_decay_interval: float = constants.RISE_DECAY_INTERVAL
    rise_interval_min: float = constants.RISE_INTERVAL_MIN
    gravity_step_interval: float = constants.GRAVITY_STEP_INTERVAL
    clear_delay: float = constants.CLEAR_DELAY
    rise_pause_duration: float = constants.RISE_PAUSE_DURATION
    input_repeat_delay: float = constants.INPUT_REPEAT_DELAY
    input_repeat_interval: float = constants.INPUT_REPEAT_INTERVAL
    garbage_chain_unit: int = constants.GARBAGE_CHAIN_UNIT
    garbage_cap: int = constants.GARBAGE_CAP
    score_per_block: int = constants.SCORE_PER_BLOCK

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 1:
            raise ValueError(f"Board must be at least 2x1, got {self.width}x{self.height}")
        if self.gravity_step_interval <= 0 or self.rise_interval <= 0:
            raise ValueError("Gravity and rise intervals must be positive")

    def rise_interval_at(self, elapsed: float) -> float:
        """Rise interval after ``elapsed`` seconds of play (geometric decay to a floor)."""
        steps = 0
        if self.rise_decay_interval > 0:
            steps = int(math.floor(max(0.0, elapsed) / self.rise_decay_interval))
        interval = self.rise_interval * (self.rise_decay_factor ** steps)
        return max(self.rise_interval_min, interval)
