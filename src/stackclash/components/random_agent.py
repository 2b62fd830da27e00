from dataclasses import dataclass


@dataclass(slots=True)
class RandomAgent:
    """Marks a player entity as driven by the computer."""

    think_interval: float = 0.25
    elapsed: float = 0.0
