from __future__ import annotations

import logging

from esper import World

from stackclash.components.cursor import Cursor
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.events.bus import EventBus, EVENT_PLAYER_TOPPED_OUT, EVENT_ROW_PUSHED
from stackclash.systems.board_ops import has_falling_garbage, push_bottom_row, top_row_occupied
from stackclash.utils.players import get_session_config, world_random

logger = logging.getLogger(__name__)


class RiseSystem:
    """Pushes a fresh row under the stack on a shrinking interval.

    The rise timer only runs while the board is calm: not rise-paused, settled,
    no clear pending and no garbage still falling.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def process_player(self, entity: int, dt: float) -> None:
        try:
            grid = self.world.component_for_entity(entity, Grid)
            cursor = self.world.component_for_entity(entity, Cursor)
            state = self.world.component_for_entity(entity, PlayerState)
            timers = self.world.component_for_entity(entity, PlayerTimers)
        except KeyError:
            return
        timers.rise_pause.tick(dt)
        if timers.rise_paused or state.topped_out:
            return
        if not state.settled or state.clear_pending or has_falling_garbage(grid):
            return
        interval = get_session_config(self.world).rise_interval_at(state.elapsed)
        timers.rise.set_duration(interval)
        if not timers.rise.tick(dt):
            return
        if top_row_occupied(grid):
            state.topped_out = True
            logger.info("player %s topped out after %.1fs", state.slot, state.elapsed)
            self.event_bus.emit(EVENT_PLAYER_TOPPED_OUT, owner_entity=entity, slot=state.slot)
            return
        push_bottom_row(grid, world_random(self.world))
        cursor.move_by(0, 1, grid.width, grid.height)
        state.settled = False
        self.event_bus.emit(EVENT_ROW_PUSHED, owner_entity=entity, interval=interval)
