import random

from esper import World

from stackclash.components.combatants import Combatants
from stackclash.components.game_state import GameMode, GameState
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.components.random_agent import RandomAgent
from stackclash.components.session_config import SessionConfig
from stackclash.utils.players import initial_cursor, reset_player


def create_world(
    *,
    players: int = 2,
    config: SessionConfig | None = None,
    rng: random.Random | None = None,
    ai_slots: tuple[int, ...] = (),
    initial_mode: GameMode = GameMode.RUNNING,
) -> World:
    if players not in (1, 2):
        raise ValueError(f"A session holds one or two players, got {players}")
    world = World()
    setattr(world, "random", rng or random.Random())
    config = config or SessionConfig()

    # Session resource: mode/winner plus the constants every system reads.
    world.create_entity(GameState(mode=initial_mode, players=players), config)

    entities: list[int] = []
    for slot in range(players):
        entity = world.create_entity(
            Grid(config.width, config.height),
            initial_cursor(config),
            PlayerState(slot=slot),
            PlayerTimers.from_config(config),
        )
        if slot in ai_slots:
            world.add_component(entity, RandomAgent())
        reset_player(world, entity)
        entities.append(entity)

    if players == 2:
        world.create_entity(Combatants(player_entity=entities[0], opponent_entity=entities[1]))
    return world
