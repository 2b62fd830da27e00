from __future__ import annotations

import logging

from esper import World

from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.events.bus import (
    EventBus,
    EVENT_GARBAGE_CANCELLED,
    EVENT_GARBAGE_DEFERRED,
    EVENT_GARBAGE_DROPPED,
    EVENT_GARBAGE_SENT,
)
from stackclash.systems.board_ops import insert_garbage_rows_from_top
from stackclash.systems.garbage_exchange import GarbageLedger, build_garbage_rows, resolve_exchange
from stackclash.utils.combatants import get_combatants
from stackclash.utils.players import get_session_config, player_entities, world_random

logger = logging.getLogger(__name__)


def ledger_for(state: PlayerState) -> GarbageLedger:
    return GarbageLedger(
        outgoing=state.outgoing,
        incoming=state.incoming,
        chain_ended=state.chain.ended,
    )


def write_ledger(state: PlayerState, ledger: GarbageLedger) -> None:
    state.outgoing = ledger.outgoing
    state.incoming = ledger.incoming
    state.chain.ended = ledger.chain_ended


class GarbageSystem:
    """Moves finished attacks between players and drops queued garbage."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def exchange(self) -> None:
        combatants = get_combatants(self.world)
        if combatants is None:
            self._discard_solo_attacks()
            return
        first_entity = combatants.player_entity
        second_entity = combatants.opponent_entity
        try:
            first = self.world.component_for_entity(first_entity, PlayerState)
            second = self.world.component_for_entity(second_entity, PlayerState)
        except KeyError:
            return
        before_first, before_second = ledger_for(first), ledger_for(second)
        after_first, after_second = resolve_exchange(before_first, before_second)
        write_ledger(first, after_first)
        write_ledger(second, after_second)

        sent_by_first = before_first.outgoing if before_first.chain_ended else 0
        sent_by_second = before_second.outgoing if before_second.chain_ended else 0
        if sent_by_first:
            self.event_bus.emit(
                EVENT_GARBAGE_SENT,
                source_owner=first_entity,
                target_entity=second_entity,
                amount=sent_by_first,
            )
        if sent_by_second:
            self.event_bus.emit(
                EVENT_GARBAGE_SENT,
                source_owner=second_entity,
                target_entity=first_entity,
                amount=sent_by_second,
            )
        cancelled = before_first.incoming + sent_by_second - after_first.incoming
        if cancelled > 0:
            logger.debug("garbage offset: %d units cancelled on both sides", cancelled)
            self.event_bus.emit(EVENT_GARBAGE_CANCELLED, amount=cancelled)

    def _discard_solo_attacks(self) -> None:
        # Without an opponent a finished chain's attack has nowhere to go.
        for entity in player_entities(self.world):
            state = self.world.component_for_entity(entity, PlayerState)
            if state.chain.ended:
                state.outgoing = 0
                state.chain.ended = False

    def apply_incoming(self, entity: int) -> None:
        try:
            grid = self.world.component_for_entity(entity, Grid)
            state = self.world.component_for_entity(entity, PlayerState)
            timers = self.world.component_for_entity(entity, PlayerTimers)
        except KeyError:
            return
        if state.incoming <= 0:
            return
        if not state.settled or state.clear_pending or timers.rise_paused:
            return
        config = get_session_config(self.world)
        units = min(state.incoming, config.garbage_cap)
        rows = build_garbage_rows(units, grid.width, world_random(self.world))
        state.incoming -= units
        if insert_garbage_rows_from_top(grid, rows):
            state.settled = False
            logger.debug("player %s received %d garbage in %d rows", state.slot, units, len(rows))
            self.event_bus.emit(EVENT_GARBAGE_DROPPED, owner_entity=entity, amount=units, rows=len(rows))
        else:
            state.incoming += units
            self.event_bus.emit(EVENT_GARBAGE_DEFERRED, owner_entity=entity, amount=units)
