from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, slots=True)
class GarbageLedger:
    """One player's garbage counters as seen by the exchange step."""

    outgoing: int = 0
    incoming: int = 0
    chain_ended: bool = False


def resolve_exchange(first: GarbageLedger, second: GarbageLedger) -> Tuple[GarbageLedger, GarbageLedger]:
    """Deliver finished chains' attacks and offset simultaneous incoming garbage.

    Both ledgers are read before either result is built, so the outcome does
    not depend on which player is passed first.
    """
    first_out, first_in = first.outgoing, first.incoming
    second_out, second_in = second.outgoing, second.incoming
    if first.chain_ended:
        second_in += first_out
        first_out = 0
    if second.chain_ended:
        first_in += second_out
        second_out = 0
    if first_in > 0 and second_in > 0:
        offset = min(first_in, second_in)
        first_in -= offset
        second_in -= offset
    return (
        GarbageLedger(outgoing=first_out, incoming=first_in),
        GarbageLedger(outgoing=second_out, incoming=second_in),
    )


def build_garbage_rows(units: int, width: int, rng: random.Random) -> List[List[bool]]:
    """Masks for ``units`` garbage cells: full rows first, then one partial row on top.

    The partial row occupies a contiguous span starting at a random column.
    """
    if units <= 0 or width <= 0:
        return []
    full, partial = divmod(units, width)
    rows = [[True] * width for _ in range(full)]
    if partial:
        start = rng.randint(0, width - partial)
        rows.append([start <= x < start + partial for x in range(width)])
    return rows
