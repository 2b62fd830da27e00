from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class BlockColor(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    PURPLE = "purple"


PALETTE: tuple[BlockColor, ...] = tuple(BlockColor)


@dataclass(frozen=True, slots=True)
class NormalBlock:
    """Colored, matchable block."""
    color: BlockColor


@dataclass(frozen=True, slots=True)
class GarbageBlock:
    """Uncolored block dropped by an opponent's attack.

    Garbage never matches. A clear next to its component cracks it, and cracked
    garbage turns into normal blocks once the chain that cracked it is over.
    """
    cracked: bool = False


Block = Union[NormalBlock, GarbageBlock]
Cell = Optional[Block]


def color_of(block: Cell) -> BlockColor | None:
    if isinstance(block, NormalBlock):
        return block.color
    return None


def is_garbage(block: Cell) -> bool:
    return isinstance(block, GarbageBlock)
