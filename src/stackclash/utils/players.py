from __future__ import annotations

import random
from typing import List

from esper import World

from stackclash.components.cursor import Cursor
from stackclash.components.game_state import GameState
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.components.session_config import SessionConfig
from stackclash.systems.board_ops import fill_test_pattern


def get_session_config(world: World) -> SessionConfig:
    for _, config in world.get_component(SessionConfig):
        return config
    raise RuntimeError("SessionConfig not found")


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not found")


def world_random(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if rng is None:
        rng = random.Random()
        setattr(world, "random", rng)
    return rng


def player_entities(world: World) -> List[int]:
    """Player entities ordered by slot (P1 first)."""
    entries = sorted(world.get_component(PlayerState), key=lambda entry: entry[1].slot)
    return [entity for entity, _ in entries]


def player_for_slot(world: World, slot: int) -> int | None:
    for entity, state in world.get_component(PlayerState):
        if state.slot == slot:
            return entity
    return None


def initial_cursor(config: SessionConfig) -> Cursor:
    return Cursor(x=max(0, (config.width - 2) // 2), y=max(0, config.height // 2 - 1))


def reset_player(world: World, entity: int) -> None:
    """Full reset: fresh test pattern, rebuilt timers, zeroed counters, centred cursor."""
    config = get_session_config(world)
    grid = world.component_for_entity(entity, Grid)
    grid.clear()
    fill_test_pattern(grid, world_random(world))
    cursor = world.component_for_entity(entity, Cursor)
    start = initial_cursor(config)
    cursor.x, cursor.y = start.x, start.y
    world.component_for_entity(entity, PlayerState).reset()
    world.add_component(entity, PlayerTimers.from_config(config))
