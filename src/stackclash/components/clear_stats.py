from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class ClearStats:
    """Outcome of one clear pass.

    ``groups`` counts 4-connected clusters of cleared cells; ``marks`` keeps the
    per-cell mask so adjacent garbage can be cracked afterwards.
    """
    cleared: int = 0
    groups: int = 0
    marks: List[bool] = field(default_factory=list)
