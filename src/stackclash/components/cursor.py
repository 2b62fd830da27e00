from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Cursor:
    """Left cell of the 2-wide, 1-tall swap selector."""

    x: int = 0
    y: int = 0

    def move_by(self, dx: int, dy: int, width: int, height: int) -> bool:
        """Clamp the moved selector into the board; return whether it moved."""
        if width < 2 or height <= 0:
            return False
        nx = min(max(self.x + dx, 0), width - 2)
        ny = min(max(self.y + dy, 0), height - 1)
        changed = (nx, ny) != (self.x, self.y)
        self.x = nx
        self.y = ny
        return changed


@dataclass(frozen=True, slots=True)
class SwapCmd:
    ax: int
    ay: int
    bx: int
    by: int

    @classmethod
    def right_of(cls, x: int, y: int) -> "SwapCmd":
        return cls(ax=x, ay=y, bx=x + 1, by=y)
