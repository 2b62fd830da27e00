"""Game state resource describing the session's high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    RUNNING = auto()
    PAUSED = auto()
    FINISHED = auto()


@dataclass
class GameState:
    """Singleton component: current mode, player count and winning slot."""
    mode: GameMode = GameMode.RUNNING
    players: int = 2
    # Slot of the winner once FINISHED; None for a single-player loss.
    winner: Optional[int] = None

    @property
    def finished(self) -> bool:
        return self.mode == GameMode.FINISHED
