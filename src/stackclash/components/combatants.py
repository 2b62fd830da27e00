from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Combatants:
    """Stores the two player entities of a versus session."""

    player_entity: int
    opponent_entity: int
