from __future__ import annotations

from dataclasses import dataclass

from stackclash.components.session_config import SessionConfig
from stackclash.components.timer import Timer, TimerMode


@dataclass(slots=True)
class PlayerTimers:
    rise: Timer
    rise_pause: Timer
    gravity: Timer
    clear_delay: Timer
    input_repeat: Timer

    @classmethod
    def from_config(cls, config: SessionConfig) -> "PlayerTimers":
        rise_pause = Timer(config.rise_pause_duration)
        rise_pause.finish()
        input_repeat = Timer(config.input_repeat_delay)
        input_repeat.finish()
        clear_delay = Timer(config.clear_delay)
        clear_delay.finish()
        return cls(
            rise=Timer(config.rise_interval, TimerMode.REPEATING),
            rise_pause=rise_pause,
            gravity=Timer(config.gravity_step_interval, TimerMode.REPEATING),
            clear_delay=clear_delay,
            input_repeat=input_repeat,
        )

    @property
    def rise_paused(self) -> bool:
        return not self.rise_pause.finished
