from __future__ import annotations

import random
from typing import Optional

from esper import World

from stackclash.components.game_state import GameMode
from stackclash.components.player_state import PlayerState
from stackclash.events.bus import EventBus, EVENT_TICK
from stackclash.systems.clear_system import ClearSystem
from stackclash.systems.garbage_system import GarbageSystem
from stackclash.systems.gravity_system import GravitySystem
from stackclash.systems.input import InputSystem
from stackclash.systems.random_ai_system import RandomAISystem
from stackclash.systems.rise_system import RiseSystem
from stackclash.utils.players import get_game_state, player_entities


class SimulationSystem:
    """Single tick subscriber; advances every player in a fixed phase order.

    Computer players think first, so their requests land like key presses
    arriving before the tick. Per player (slot order): elapsed time, input
    repeat, gravity, clear delay. Then the cross-player garbage exchange. Then
    per player: incoming garbage, rise. Running the phases from one handler
    keeps the order independent of signal receiver ordering.
    """

    def __init__(self, world: World, event_bus: EventBus, rng: Optional[random.Random] = None):
        self.world = world
        self.event_bus = event_bus
        self.random_ai_system = RandomAISystem(world, event_bus, rng=rng)
        self.input_system = InputSystem(world, event_bus)
        self.gravity_system = GravitySystem(world, event_bus)
        self.clear_system = ClearSystem(world, event_bus)
        self.garbage_system = GarbageSystem(world, event_bus)
        self.rise_system = RiseSystem(world, event_bus)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = float(kwargs.get('dt', 1 / 60))
        if dt <= 0.0 or not self._running():
            return
        self.random_ai_system.process(dt)
        entities = [ent for ent in player_entities(self.world) if not self._topped_out(ent)]
        for entity in entities:
            self.world.component_for_entity(entity, PlayerState).elapsed += dt
            self.input_system.process_player(entity, dt)
            self.gravity_system.process_player(entity, dt)
            self.clear_system.process_player(entity, dt)
        self.garbage_system.exchange()
        for entity in entities:
            if not self._running():
                break
            self.garbage_system.apply_incoming(entity)
            self.rise_system.process_player(entity, dt)

    def _running(self) -> bool:
        return get_game_state(self.world).mode == GameMode.RUNNING

    def _topped_out(self, entity: int) -> bool:
        return self.world.component_for_entity(entity, PlayerState).topped_out
