"""Arcade host for the stackclash rising-stack puzzle.

Builds the event bus, ECS world and systems, maps keys onto input events and
draws each player's board.
"""
from __future__ import annotations

import argparse
import logging
import random
from typing import Dict, Tuple

import arcade

from stackclash.components.cursor import Cursor
from stackclash.components.game_state import GameMode
from stackclash.components.grid import Grid
from stackclash.components.player_state import PlayerState
from stackclash.constants import BOARD_GAP, BOTTOM_MARGIN, CELL_SIZE, GRID_HEIGHT, GRID_WIDTH
from stackclash.events.bus import (
    EventBus,
    EVENT_CURSOR_HOLD_END,
    EVENT_CURSOR_HOLD_START,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_SWAP_REQUEST,
    EVENT_TICK,
)
from stackclash.rendering.board_renderer import BoardRenderer
from stackclash.systems.game_flow_system import GameFlowSystem
from stackclash.systems.simulation import SimulationSystem
from stackclash.utils.players import get_game_state, player_entities, player_for_slot
from stackclash.world import create_world

logger = logging.getLogger(__name__)

# slot -> key -> (dx, dy)
DIRECTION_KEYS: Dict[int, Dict[int, Tuple[int, int]]] = {
    0: {
        arcade.key.A: (-1, 0),
        arcade.key.D: (1, 0),
        arcade.key.S: (0, -1),
        arcade.key.W: (0, 1),
    },
    1: {
        arcade.key.LEFT: (-1, 0),
        arcade.key.RIGHT: (1, 0),
        arcade.key.DOWN: (0, -1),
        arcade.key.UP: (0, 1),
    },
}
SWAP_KEYS: Dict[int, int] = {
    0: arcade.key.SPACE,
    1: arcade.key.ENTER,
}

HUD_HEIGHT = 60


class StackClashWindow(arcade.Window):
    def __init__(self, players: int = 2, ai: bool = False, seed: int | None = None):
        width = players * GRID_WIDTH * CELL_SIZE + (players + 1) * BOARD_GAP // 2
        height = GRID_HEIGHT * CELL_SIZE + BOTTOM_MARGIN + HUD_HEIGHT
        super().__init__(width, height, "Stack Clash")
        self.set_update_rate(1 / 60)
        self.event_bus = EventBus()
        ai_slots = (1,) if ai and players == 2 else ()
        self.world = create_world(players=players, rng=random.Random(seed), ai_slots=ai_slots)
        self.human_slots = [slot for slot in range(players) if slot not in ai_slots]

        self.game_flow_system = GameFlowSystem(self.world, self.event_bus)
        self.simulation_system = SimulationSystem(self.world, self.event_bus, rng=random.Random(seed))
        self.board_renderer = BoardRenderer(CELL_SIZE)
        arcade.set_background_color(arcade.color.BLACK)

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.R:
            self.event_bus.emit(EVENT_RESTART_REQUEST)
            return
        if symbol == arcade.key.P:
            self.event_bus.emit(EVENT_PAUSE_TOGGLE_REQUEST)
            return
        for slot in self.human_slots:
            entity = player_for_slot(self.world, slot)
            if entity is None:
                continue
            direction = DIRECTION_KEYS[slot].get(symbol)
            if direction is not None:
                dx, dy = direction
                self.event_bus.emit(EVENT_CURSOR_HOLD_START, owner_entity=entity, dx=dx, dy=dy)
                return
            if symbol == SWAP_KEYS[slot]:
                self.event_bus.emit(EVENT_SWAP_REQUEST, owner_entity=entity)
                return

    def on_key_release(self, symbol: int, modifiers: int):
        for slot in self.human_slots:
            if symbol in DIRECTION_KEYS[slot]:
                entity = player_for_slot(self.world, slot)
                if entity is not None:
                    self.event_bus.emit(EVENT_CURSOR_HOLD_END, owner_entity=entity)
                return

    def on_draw(self):
        self.clear()
        state = get_game_state(self.world)
        for index, entity in enumerate(player_entities(self.world)):
            grid = self.world.component_for_entity(entity, Grid)
            cursor = self.world.component_for_entity(entity, Cursor)
            player = self.world.component_for_entity(entity, PlayerState)
            board_w, board_h = self.board_renderer.board_size(grid)
            left = BOARD_GAP // 2 + index * (board_w + BOARD_GAP // 2)
            self.board_renderer.render(arcade, grid, cursor, left, BOTTOM_MARGIN)
            label = f"P{player.slot + 1}  {player.score:>6}  {player.elapsed:5.1f}s"
            if player.incoming:
                label += f"  +{player.incoming}"
            arcade.draw_text(label, left, BOTTOM_MARGIN + board_h + 12, arcade.color.WHITE, 14)
        banner = self._banner(state)
        if banner:
            arcade.draw_text(banner, 10, 12, arcade.color.YELLOW, 14)

    @staticmethod
    def _banner(state) -> str:
        if state.mode == GameMode.PAUSED:
            return "Paused - P to resume"
        if state.mode == GameMode.FINISHED:
            if state.winner is None:
                return "Topped out - R to restart"
            return f"Player {state.winner + 1} wins - R to restart"
        return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stackclash", description="Rising-stack match-three duel.")
    parser.add_argument("--players", type=int, choices=(1, 2), default=2)
    parser.add_argument("--ai", action="store_true", help="computer plays P2")
    parser.add_argument("--seed", type=int, default=None)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("starting stackclash: players=%d ai=%s seed=%s", args.players, args.ai, args.seed)
    StackClashWindow(players=args.players, ai=args.ai, seed=args.seed)
    arcade.run()


if __name__ == "__main__":
    main()
