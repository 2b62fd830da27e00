from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(slots=True)
class ChainState:
    active: bool = False
    index: int = 0
    # Raised for exactly one tick when a chain finishes.
    ended: bool = False


@dataclass(slots=True)
class PlayerState:
    """Per-player session bookkeeping shared by the phase systems.

    The player's ``Grid``, ``Cursor`` and ``PlayerTimers`` live on the same
    entity as separate components.
    """

    slot: int = 0
    score: int = 0
    elapsed: float = 0.0
    # True when the last gravity step moved nothing.
    settled: bool = True
    clear_pending: bool = False
    chain: ChainState = field(default_factory=ChainState)
    outgoing: int = 0
    incoming: int = 0
    topped_out: bool = False
    held_direction: Optional[Tuple[int, int]] = None

    def reset(self) -> None:
        self.score = 0
        self.elapsed = 0.0
        self.settled = True
        self.clear_pending = False
        self.chain = ChainState()
        self.outgoing = 0
        self.incoming = 0
        self.topped_out = False
        self.held_direction = None
