from __future__ import annotations

from esper import World

from stackclash.components.cursor import Cursor, SwapCmd
from stackclash.components.game_state import GameMode
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.components.player_timers import PlayerTimers
from stackclash.components.timer import TimerMode
from stackclash.events.bus import (
    EventBus,
    EVENT_CURSOR_HOLD_END,
    EVENT_CURSOR_HOLD_START,
    EVENT_CURSOR_MOVE_REQUEST,
    EVENT_CURSOR_MOVED,
    EVENT_SWAP_APPLIED,
    EVENT_SWAP_REJECTED,
    EVENT_SWAP_REQUEST,
)
from stackclash.systems.board_ops import swap_in_bounds
from stackclash.utils.players import get_game_state, get_session_config


class InputSystem:
    """Turns discrete input requests into cursor moves and swaps.

    Requests for a player that has topped out, or while the session is not
    running, are dropped. Moving into a wall is a silent no-op.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CURSOR_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_CURSOR_HOLD_START, self.on_hold_start)
        self.event_bus.subscribe(EVENT_CURSOR_HOLD_END, self.on_hold_end)
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)

    def on_move_request(self, sender, **kwargs):
        owner = kwargs.get('owner_entity')
        if not self._accepting(owner):
            return
        self._move(owner, int(kwargs.get('dx', 0)), int(kwargs.get('dy', 0)))

    def on_hold_start(self, sender, **kwargs):
        owner = kwargs.get('owner_entity')
        if not self._accepting(owner):
            return
        direction = (int(kwargs.get('dx', 0)), int(kwargs.get('dy', 0)))
        state = self.world.component_for_entity(owner, PlayerState)
        timers = self.world.component_for_entity(owner, PlayerTimers)
        state.held_direction = direction
        timers.input_repeat.restart(get_session_config(self.world).input_repeat_delay, TimerMode.ONCE)
        self._move(owner, *direction)

    def on_hold_end(self, sender, **kwargs):
        owner = kwargs.get('owner_entity')
        if owner is None:
            return
        try:
            state = self.world.component_for_entity(owner, PlayerState)
            timers = self.world.component_for_entity(owner, PlayerTimers)
        except KeyError:
            return
        state.held_direction = None
        timers.input_repeat.finish()

    def on_swap_request(self, sender, **kwargs):
        owner = kwargs.get('owner_entity')
        if not self._accepting(owner):
            return
        grid = self.world.component_for_entity(owner, Grid)
        cursor = self.world.component_for_entity(owner, Cursor)
        state = self.world.component_for_entity(owner, PlayerState)
        cmd = SwapCmd.right_of(cursor.x, cursor.y)
        if swap_in_bounds(grid, cmd):
            state.settled = False
            self.event_bus.emit(EVENT_SWAP_APPLIED, owner_entity=owner, cmd=cmd)
        else:
            self.event_bus.emit(EVENT_SWAP_REJECTED, owner_entity=owner, cmd=cmd)

    def process_player(self, entity: int, dt: float) -> None:
        """Repeat a held direction: once after the delay, then every interval."""
        try:
            state = self.world.component_for_entity(entity, PlayerState)
            timers = self.world.component_for_entity(entity, PlayerTimers)
        except KeyError:
            return
        if state.held_direction is None:
            return
        repeat = timers.input_repeat
        if not repeat.tick(dt):
            return
        if repeat.mode is TimerMode.ONCE:
            repeat.restart(get_session_config(self.world).input_repeat_interval, TimerMode.REPEATING)
        self._move(entity, *state.held_direction)

    def _move(self, owner: int, dx: int, dy: int) -> None:
        grid = self.world.component_for_entity(owner, Grid)
        cursor = self.world.component_for_entity(owner, Cursor)
        if cursor.move_by(dx, dy, grid.width, grid.height):
            self.event_bus.emit(EVENT_CURSOR_MOVED, owner_entity=owner, x=cursor.x, y=cursor.y)

    def _accepting(self, owner) -> bool:
        if owner is None:
            return False
        if get_game_state(self.world).mode != GameMode.RUNNING:
            return False
        try:
            state = self.world.component_for_entity(owner, PlayerState)
            self.world.component_for_entity(owner, Cursor)
        except KeyError:
            return False
        return not state.topped_out
