from __future__ import annotations

import random
from typing import Optional

from esper import World

from stackclash.components.cursor import Cursor, SwapCmd
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.random_agent import RandomAgent
from stackclash.events.bus import (
    EventBus,
    EVENT_CURSOR_MOVE_REQUEST,
    EVENT_SWAP_REQUEST,
)
from stackclash.systems.board_ops import find_scoring_swaps

RANDOM_MOVES = ((-1, 0), (1, 0), (0, -1), (0, 1))


class RandomAISystem:
    """Plays for entities marked with RandomAgent using ordinary input events.

    Each think step the agent heads for the nearest swap that would score and
    requests it once aligned; with nothing to score it wanders at random.
    Driven by SimulationSystem at the start of each running tick.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.random = rng or random.Random()

    def process(self, dt: float) -> None:
        for entity, agent in self.world.get_component(RandomAgent):
            agent.elapsed += dt
            if agent.elapsed < agent.think_interval:
                continue
            agent.elapsed = 0.0
            self._think(entity)

    def _think(self, entity: int) -> None:
        try:
            grid = self.world.component_for_entity(entity, Grid)
            cursor = self.world.component_for_entity(entity, Cursor)
            state = self.world.component_for_entity(entity, PlayerState)
        except KeyError:
            return
        if state.topped_out:
            return
        target = self._nearest_swap(cursor, find_scoring_swaps(grid))
        if target is None:
            dx, dy = self.random.choice(RANDOM_MOVES)
            self.event_bus.emit(EVENT_CURSOR_MOVE_REQUEST, owner_entity=entity, dx=dx, dy=dy)
            return
        if (target.ax, target.ay) == (cursor.x, cursor.y):
            self.event_bus.emit(EVENT_SWAP_REQUEST, owner_entity=entity)
            return
        dx = (target.ax > cursor.x) - (target.ax < cursor.x)
        dy = (target.ay > cursor.y) - (target.ay < cursor.y)
        # One axis per step, like a player tapping a direction.
        if dx:
            dy = 0
        self.event_bus.emit(EVENT_CURSOR_MOVE_REQUEST, owner_entity=entity, dx=dx, dy=dy)

    @staticmethod
    def _nearest_swap(cursor: Cursor, swaps: list[SwapCmd]) -> SwapCmd | None:
        if not swaps:
            return None
        return min(swaps, key=lambda cmd: (abs(cmd.ax - cursor.x) + abs(cmd.ay - cursor.y), cmd.ay, cmd.ax))
