from __future__ import annotations

import logging

from esper import World

from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.events.bus import (
    EventBus,
    EVENT_BLOCKS_CLEARED,
    EVENT_CHAIN_ENDED,
    EVENT_CLEAR_SCHEDULED,
)
from stackclash.systems.board_ops import (
    clear_matches_once_with_stats,
    convert_cracked_garbage,
    crack_adjacent_garbage,
    has_matches,
)
from stackclash.systems.scoring import add_garbage_for_clear, score_for_clear
from stackclash.utils.players import get_session_config, world_random

logger = logging.getLogger(__name__)


class ClearSystem:
    """Schedules and executes clears and keeps chain bookkeeping.

    A clear is only scheduled on a settled board, waits out the clear delay,
    and runs only if the board is still settled. When a settled board has no
    pending clear and no match left, an active chain ends: cracked garbage
    turns into normal blocks and ``chain.ended`` is raised for this tick.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def process_player(self, entity: int, dt: float) -> None:
        try:
            grid = self.world.component_for_entity(entity, Grid)
            state = self.world.component_for_entity(entity, PlayerState)
            timers = self.world.component_for_entity(entity, PlayerTimers)
        except KeyError:
            return
        state.chain.ended = False
        if state.clear_pending:
            timers.clear_delay.tick(dt)
            if timers.clear_delay.finished and state.settled:
                self._execute_clear(entity, grid, state, timers)
            return
        if not state.settled:
            return
        if has_matches(grid):
            state.clear_pending = True
            timers.clear_delay.restart()
            self.event_bus.emit(EVENT_CLEAR_SCHEDULED, owner_entity=entity)
            return
        if state.chain.active:
            self._end_chain(entity, grid, state)

    def _execute_clear(self, entity: int, grid: Grid, state: PlayerState, timers: PlayerTimers) -> None:
        state.clear_pending = False
        stats = clear_matches_once_with_stats(grid)
        if stats.cleared == 0:
            # The match was broken up while the clear was pending.
            return
        config = get_session_config(self.world)
        chain = state.chain
        if chain.active:
            chain.index += 1
        else:
            chain.active = True
            chain.index = 1
        cracked = crack_adjacent_garbage(grid, stats.marks)
        points = score_for_clear(stats.cleared, chain.index, config.score_per_block)
        state.score += points
        garbage = add_garbage_for_clear(
            state,
            stats.cleared,
            stats.groups,
            chain_unit=config.garbage_chain_unit,
            cap=config.garbage_cap,
        )
        timers.rise_pause.restart()
        state.settled = False
        logger.debug(
            "player %s cleared %d cells in %d groups (chain %d, +%d points, +%d garbage)",
            state.slot, stats.cleared, stats.groups, chain.index, points, garbage,
        )
        self.event_bus.emit(
            EVENT_BLOCKS_CLEARED,
            owner_entity=entity,
            cleared=stats.cleared,
            groups=stats.groups,
            chain_index=chain.index,
            cracked=cracked,
            points=points,
            garbage=garbage,
        )

    def _end_chain(self, entity: int, grid: Grid, state: PlayerState) -> None:
        chain = state.chain
        length = chain.index
        chain.active = False
        chain.index = 0
        chain.ended = True
        converted = convert_cracked_garbage(grid, world_random(self.world))
        if converted:
            state.settled = False
        logger.debug("player %s chain of %d ended, outgoing=%d", state.slot, length, state.outgoing)
        self.event_bus.emit(
            EVENT_CHAIN_ENDED,
            owner_entity=entity,
            length=length,
            outgoing=state.outgoing,
            converted=converted,
        )
