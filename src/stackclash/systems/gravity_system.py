from __future__ import annotations

from esper import World

from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.events.bus import EventBus
from stackclash.systems.board_ops import apply_gravity_step


class GravitySystem:
    """Staged descent: one gravity step per gravity-timer period."""

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
        if not timers.gravity.tick(dt):
            return
        moved = apply_gravity_step(grid)
        state.settled = not moved
