from __future__ import annotations

import logging

from esper import World

from stackclash.components.game_state import GameMode
from stackclash.components.player_state import PlayerState
from stackclash.events.bus import (
    EventBus,
    EVENT_MATCH_FINISHED,
    EVENT_MATCH_STARTED,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_PLAYER_TOPPED_OUT,
    EVENT_RESTART_REQUEST,
)
from stackclash.utils.combatants import find_opponent
from stackclash.utils.game_state import set_game_mode
from stackclash.utils.players import get_game_state, player_entities, reset_player

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Match lifecycle: restart, pause toggling and the end-of-match verdict."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self.on_restart_request)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLE_REQUEST, self.on_pause_toggle)
        self.event_bus.subscribe(EVENT_PLAYER_TOPPED_OUT, self.on_player_topped_out)

    def on_restart_request(self, sender, **kwargs):
        state = get_game_state(self.world)
        entities = player_entities(self.world)[: state.players]
        for entity in entities:
            reset_player(self.world, entity)
        state.winner = None
        set_game_mode(self.world, self.event_bus, GameMode.RUNNING)
        logger.info("match started with %d player(s)", state.players)
        self.event_bus.emit(EVENT_MATCH_STARTED, players=state.players)

    def on_pause_toggle(self, sender, **kwargs):
        mode = get_game_state(self.world).mode
        if mode == GameMode.RUNNING:
            set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        elif mode == GameMode.PAUSED:
            set_game_mode(self.world, self.event_bus, GameMode.RUNNING)

    def on_player_topped_out(self, sender, **kwargs):
        loser = kwargs.get('owner_entity')
        state = get_game_state(self.world)
        if loser is None or state.finished:
            return
        winner_entity = find_opponent(self.world, loser)
        winner_slot = None
        if winner_entity is not None:
            winner_slot = self.world.component_for_entity(winner_entity, PlayerState).slot
        state.winner = winner_slot
        set_game_mode(self.world, self.event_bus, GameMode.FINISHED)
        loser_slot = kwargs.get('slot')
        logger.info("match finished: loser slot %s, winner slot %s", loser_slot, winner_slot)
        self.event_bus.emit(EVENT_MATCH_FINISHED, winner=winner_slot, loser=loser_slot)
