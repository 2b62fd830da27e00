import random

from stackclash.components.game_state import GameMode
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.session_config import SessionConfig
from stackclash.events.bus import (
    EVENT_GAME_MODE_CHANGED,
    EVENT_MATCH_FINISHED,
    EVENT_MATCH_STARTED,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_PLAYER_TOPPED_OUT,
    EVENT_RESTART_REQUEST,
)
from stackclash.systems.game_flow_system import GameFlowSystem
from stackclash.systems.simulation import SimulationSystem
from stackclash.utils.players import get_game_state, player_entities
from stackclash.world import create_world
from tests.helpers import Recorder, drive, install_grid

# A full column of alternating colors reaches the top row without matching.
TOWER = [("R", "G", "B")[y % 3] + " . . . . ." for y in range(12)]


def _setup(bus, players=2, config=None):
    config = config or SessionConfig(rise_interval=1000.0)
    world = create_world(players=players, config=config, rng=random.Random(11))
    GameFlowSystem(world, bus)
    SimulationSystem(world, bus)
    return world, player_entities(world)


def test_top_out_gives_the_match_to_the_opponent(bus):
    config = SessionConfig(rise_interval=0.1, rise_interval_min=0.05)
    world, (p1, p2) = _setup(bus, config=config)
    install_grid(world, p1, TOWER)
    install_grid(world, p2, ["R G B Y P R"])
    topped = Recorder(bus, EVENT_PLAYER_TOPPED_OUT)
    finished = Recorder(bus, EVENT_MATCH_FINISHED)
    drive(bus, ticks=10)
    state = get_game_state(world)
    assert topped.last == {'owner_entity': p1, 'slot': 0}
    assert finished.last == {'winner': 1, 'loser': 0}
    assert state.mode == GameMode.FINISHED
    assert state.winner == 1
    assert world.component_for_entity(p1, PlayerState).topped_out


def test_single_player_top_out_has_no_winner(bus):
    config = SessionConfig(rise_interval=0.1, rise_interval_min=0.05)
    world, (p1,) = _setup(bus, players=1, config=config)
    install_grid(world, p1, TOWER)
    finished = Recorder(bus, EVENT_MATCH_FINISHED)
    drive(bus, ticks=10)
    assert finished.last == {'winner': None, 'loser': 0}
    assert get_game_state(world).finished


def test_simulation_frozen_after_finish(bus):
    config = SessionConfig(rise_interval=0.1, rise_interval_min=0.05)
    world, (p1, p2) = _setup(bus, config=config)
    install_grid(world, p1, TOWER)
    drive(bus, ticks=10)
    elapsed = world.component_for_entity(p2, PlayerState).elapsed
    drive(bus, ticks=10)
    assert world.component_for_entity(p2, PlayerState).elapsed == elapsed


def test_pause_toggle_halts_and_resumes(bus):
    world, (p1, p2) = _setup(bus)
    changes = Recorder(bus, EVENT_GAME_MODE_CHANGED)
    bus.emit(EVENT_PAUSE_TOGGLE_REQUEST)
    assert get_game_state(world).mode == GameMode.PAUSED
    drive(bus, ticks=5)
    assert world.component_for_entity(p1, PlayerState).elapsed == 0.0
    bus.emit(EVENT_PAUSE_TOGGLE_REQUEST)
    drive(bus, ticks=5)
    assert world.component_for_entity(p1, PlayerState).elapsed > 0.0
    assert [event['new_mode'] for event in changes.events] == [GameMode.PAUSED, GameMode.RUNNING]


def test_restart_resets_players_and_resumes(bus):
    config = SessionConfig(rise_interval=0.1, rise_interval_min=0.05)
    world, (p1, p2) = _setup(bus, config=config)
    install_grid(world, p1, TOWER)
    drive(bus, ticks=10)
    assert get_game_state(world).finished
    started = Recorder(bus, EVENT_MATCH_STARTED)

    bus.emit(EVENT_RESTART_REQUEST)

    state = get_game_state(world)
    assert state.mode == GameMode.RUNNING
    assert state.winner is None
    assert started.last == {'players': 2}
    for entity in (p1, p2):
        player = world.component_for_entity(entity, PlayerState)
        assert not player.topped_out
        assert player.score == 0
        assert player.elapsed == 0.0
        assert world.component_for_entity(entity, Grid).occupied_count() == 36


def test_restart_reports_the_session_player_count(bus):
    world, (p1,) = _setup(bus, players=1)
    started = Recorder(bus, EVENT_MATCH_STARTED)
    world.component_for_entity(p1, PlayerState).score = 500
    bus.emit(EVENT_RESTART_REQUEST)
    assert get_game_state(world).players == 1
    assert started.last == {'players': 1}
    assert world.component_for_entity(p1, PlayerState).score == 0
