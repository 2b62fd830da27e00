from __future__ import annotations

from dataclasses import dataclass

from stackclash.components.player_state import PlayerState
from stackclash.constants import GARBAGE_CAP, GARBAGE_CHAIN_UNIT


@dataclass(frozen=True, slots=True)
class GarbageBreakdown:
    combo_units: int = 0
    multi_units: int = 0
    chain_units: int = 0

    @property
    def total(self) -> int:
        return self.combo_units + self.multi_units + self.chain_units


def garbage_for_clear(
    cleared: int,
    groups: int,
    chain_index: int,
    *,
    chain_unit: int = GARBAGE_CHAIN_UNIT,
) -> GarbageBreakdown:
    """Attack units earned by one clear pass.

    A plain three-block clear outside a chain earns nothing; bigger clears,
    simultaneous groups and chain links each add units.
    """
    if cleared < 4 and chain_index < 2:
        return GarbageBreakdown()
    return GarbageBreakdown(
        combo_units=max(0, cleared - 3),
        multi_units=max(0, groups - 1),
        chain_units=chain_unit * (chain_index - 1) if chain_index > 1 else 0,
    )


def add_garbage_for_clear(
    state: PlayerState,
    cleared: int,
    groups: int,
    *,
    chain_unit: int = GARBAGE_CHAIN_UNIT,
    cap: int = GARBAGE_CAP,
) -> int:
    """Accumulate a clear's units into ``state.outgoing`` up to ``cap``; return units kept."""
    units = garbage_for_clear(cleared, groups, state.chain.index, chain_unit=chain_unit).total
    if units <= 0 or state.outgoing >= cap:
        return 0
    before = state.outgoing
    state.outgoing = min(cap, before + units)
    return state.outgoing - before


def score_for_clear(cleared: int, chain_index: int, per_block: int) -> int:
    return cleared * per_block * max(1, chain_index)
